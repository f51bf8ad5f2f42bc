from sla.infrastructure.store.file import FileRecordStore
from sla.infrastructure.store.http import HttpLedgerStore
from sla.infrastructure.store.memory import InMemoryRecordStore

__all__ = ["FileRecordStore", "HttpLedgerStore", "InMemoryRecordStore"]
