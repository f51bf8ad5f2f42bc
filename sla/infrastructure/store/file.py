import logging
import os
import re
import tempfile
from pathlib import Path

from sla.domain.record.port.store import RecordStore
from sla.domain.shared.error import InvalidKeyError, StorageUnavailableError, WriteError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class FileRecordStore(RecordStore):
    """Local filesystem implementation of RecordStore, one file per key."""

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _safe_path(self, key: str) -> Path:
        """Resolve key within base_path, rejecting path traversal attempts."""
        if not _KEY_PATTERN.match(key):
            raise InvalidKeyError(key)
        target = self.base_path / key
        if not target.resolve().is_relative_to(self.base_path.resolve()):
            raise InvalidKeyError(key)
        return target

    async def available(self) -> bool:
        return self.base_path.is_dir() and os.access(self.base_path, os.R_OK | os.W_OK)

    async def get(self, key: str) -> bytes:
        target = self._safe_path(key)
        try:
            return target.read_bytes()
        except FileNotFoundError:
            return b""
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {key}: {e}") from e

    async def set(self, key: str, value: bytes) -> None:
        target = self._safe_path(key)

        # Atomic write: write to temp file then rename
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.base_path, prefix=".tmp-")
        except OSError as e:
            raise WriteError(f"Cannot write {key}: {e}", key=key) from e
        try:
            with open(fd, "wb") as f:
                f.write(value)
            Path(tmp_path).replace(target)
        except OSError as e:
            Path(tmp_path).unlink(missing_ok=True)
            raise WriteError(f"Cannot write {key}: {e}", key=key) from e
        logger.debug("Wrote %d bytes to %s", len(value), target)
