"""DI provider for the record store adapters."""

import logging
from collections.abc import AsyncIterable

import httpx
from dishka import provide

from sla.config import Config
from sla.domain.record.model.value import RecordKeys
from sla.domain.record.port.store import RecordStore
from sla.infrastructure.store.file import FileRecordStore
from sla.infrastructure.store.http import HttpLedgerStore
from sla.infrastructure.store.memory import InMemoryRecordStore
from sla.util.di.base import Provider
from sla.util.di.scope import Scope

logger = logging.getLogger(__name__)

# Ledger writes wait for block confirmation; connecting should still be quick
_CONNECT_TIMEOUT = 5.0


class StoreProvider(Provider):
    """Selects the RecordStore adapter named by ``store.backend``."""

    @provide(scope=Scope.APP)
    def get_record_keys(self, config: Config) -> RecordKeys:
        return RecordKeys(prefix=config.store.key_prefix)

    @provide(scope=Scope.APP)
    async def get_record_store(self, config: Config) -> AsyncIterable[RecordStore]:
        backend = config.store.backend
        logger.debug("Using %s record store", backend)
        if backend == "memory":
            yield InMemoryRecordStore()
        elif backend == "file":
            yield FileRecordStore(base_path=config.store.path)
        else:
            timeout = httpx.Timeout(config.store.timeout, connect=_CONNECT_TIMEOUT)
            async with httpx.AsyncClient(base_url=config.store.url, timeout=timeout) as client:
                yield HttpLedgerStore(client=client)
