from sla.domain.record.port.analyzer import RecordAnalyzer
from sla.domain.record.port.store import RecordStore

__all__ = ["RecordAnalyzer", "RecordStore"]
