"""RecordStore port - the ledger's key/value namespace."""

from abc import abstractmethod
from typing import Protocol

from sla.domain.shared.port import Port


class RecordStore(Port, Protocol):
    """Primitive key -> bytes store with single-key atomic writes.

    Adapters never interpret the bytes they move. There is no multi-key
    transaction and no compare-and-swap.
    """

    @abstractmethod
    async def available(self) -> bool:
        """Probe the store. Callers check this before a read/write sequence."""
        ...

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Return the blob under ``key``; ``b""`` when the key is absent.

        Raises:
            StorageUnavailableError: The store could not be reached.
            InvalidKeyError: The adapter cannot address ``key``.
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, all or nothing.

        Raises:
            WriteError: The write was not applied.
        """
        ...
