import logging

from sla.domain.record.port.store import RecordStore
from sla.domain.shared.error import StorageUnavailableError, WriteError

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """Dict-backed RecordStore. State lives as long as the process."""

    def __init__(self, data: dict[str, bytes] | None = None, *, online: bool = True) -> None:
        self._data: dict[str, bytes] = dict(data or {})
        self.online = online

    async def available(self) -> bool:
        return self.online

    async def get(self, key: str) -> bytes:
        if not self.online:
            raise StorageUnavailableError(f"Store offline, cannot read {key}")
        return self._data.get(key, b"")

    async def set(self, key: str, value: bytes) -> None:
        if not self.online:
            raise WriteError(f"Store offline, cannot write {key}", key=key)
        self._data[key] = bytes(value)
        logger.debug("Stored %d bytes under %s", len(value), key)

    def dump(self) -> dict[str, bytes]:
        """Copy of every key currently stored."""
        return dict(self._data)
