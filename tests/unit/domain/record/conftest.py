"""Fixtures for record domain tests."""

import pytest

from sla.domain.record.model.value import RecordKeys
from sla.domain.record.service.index import IndexManager
from sla.domain.shared.error import WriteError
from sla.infrastructure.store.memory import InMemoryRecordStore


class FlakyStore(InMemoryRecordStore):
    """In-memory store whose writes fail for chosen keys."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_keys: set[str] = set()
        self.writes: list[str] = []

    async def set(self, key: str, value: bytes) -> None:
        self.writes.append(key)
        if key in self.fail_keys:
            raise WriteError(f"rejected write to {key}", key=key)
        await super().set(key, value)


@pytest.fixture
def keys() -> RecordKeys:
    return RecordKeys()


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def index(store: FlakyStore, keys: RecordKeys) -> IndexManager:
    return IndexManager(store=store, keys=keys)
