import json
from unittest.mock import AsyncMock

import pytest

from sla.domain.record.codec import decode_record, encode_record
from sla.domain.record.model.aggregate import ExplorationRecord, RecordDraft
from sla.domain.record.model.value import RecordId, RecordStatus, ResearcherId
from sla.domain.record.service.index import IndexManager
from sla.domain.record.service.record import RecordService
from sla.domain.shared.error import (
    InvalidTransitionError,
    MalformedBlobError,
    OrphanedRecordError,
    RecordNotFoundError,
    StorageUnavailableError,
    WriteError,
)
from sla.infrastructure.store.file import FileRecordStore
from sla.infrastructure.store.memory import InMemoryRecordStore

RESEARCHER = ResearcherId("0xAbC0000000000000000000000000000000000001")


def _make_draft(**overrides) -> RecordDraft:
    defaults = dict(
        location="Lake Ellsworth",
        depth=3000.0,
        temperature=-2.5,
        salinity=1.2,
        life_signs=False,
    )
    defaults.update(overrides)
    return RecordDraft(**defaults)


def _make_analyzer(outcome: RecordStatus = RecordStatus.ANALYZED) -> AsyncMock:
    analyzer = AsyncMock()
    analyzer.classify.return_value = outcome
    return analyzer


@pytest.fixture
def analyzer() -> AsyncMock:
    return _make_analyzer()


@pytest.fixture
def service(store, index, analyzer, keys) -> RecordService:
    return RecordService(store=store, index=index, analyzer=analyzer, keys=keys)


class TestCreate:
    @pytest.mark.asyncio
    async def test_writes_blob_then_index(self, service, store, keys):
        record = await service.create(_make_draft(), RESEARCHER)

        assert store.writes == [keys.record_key(record.id), keys.index_key]
        assert record.status is RecordStatus.PENDING
        assert record.researcher == RESEARCHER

        stored = decode_record(store.dump()[keys.record_key(record.id)], record.id)
        assert stored == record
        assert json.loads(store.dump()[keys.index_key]) == [record.id]

    @pytest.mark.asyncio
    async def test_second_create_extends_index(self, service, index):
        first = await service.create(_make_draft(location="A"), RESEARCHER)
        second = await service.create(_make_draft(location="B"), RESEARCHER)

        assert await index.list_ids() == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_unavailable_store_writes_nothing(self, service, store):
        store.online = False

        with pytest.raises(StorageUnavailableError):
            await service.create(_make_draft(), RESEARCHER)

        assert store.writes == []

    @pytest.mark.asyncio
    async def test_blob_write_failure_persists_nothing(self, service, store, keys, monkeypatch):
        async def reject(key: str, value: bytes) -> None:
            raise WriteError("rejected", key=key)

        monkeypatch.setattr(store, "set", reject)

        with pytest.raises(WriteError) as exc_info:
            await service.create(_make_draft(), RESEARCHER)

        assert not isinstance(exc_info.value, OrphanedRecordError)
        assert store.dump() == {}

    @pytest.mark.asyncio
    async def test_index_failure_leaves_orphan(self, service, store, keys, index):
        store.fail_keys.add(keys.index_key)

        with pytest.raises(OrphanedRecordError) as exc_info:
            await service.create(_make_draft(), RESEARCHER)

        orphan_id = exc_info.value.record_id
        assert exc_info.value.code == "ORPHANED"
        assert keys.record_key(orphan_id) in store.dump()
        assert await index.list_ids() == []

    @pytest.mark.asyncio
    async def test_orphan_is_still_retrievable(self, service, store, keys):
        store.fail_keys.add(keys.index_key)
        with pytest.raises(OrphanedRecordError) as exc_info:
            await service.create(_make_draft(), RESEARCHER)

        record = await service.get(RecordId(exc_info.value.record_id))
        assert record.location == "Lake Ellsworth"

    @pytest.mark.asyncio
    async def test_index_read_failure_leaves_orphan(self, analyzer, keys):
        class IndexUnreadable(InMemoryRecordStore):
            async def get(self, key: str) -> bytes:
                if key == keys.index_key:
                    raise StorageUnavailableError("index read timed out")
                return await super().get(key)

        broken = IndexUnreadable()
        service = RecordService(
            store=broken,
            index=IndexManager(store=broken, keys=keys),
            analyzer=analyzer,
            keys=keys,
        )

        with pytest.raises(OrphanedRecordError) as exc_info:
            await service.create(_make_draft(), RESEARCHER)

        assert "index read timed out" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, StorageUnavailableError)
        assert list(broken.dump()) == [keys.record_key(exc_info.value.record_id)]


class TestGet:
    @pytest.mark.asyncio
    async def test_missing_record(self, service):
        with pytest.raises(RecordNotFoundError) as exc_info:
            await service.get(RecordId("1-missing"))
        assert exc_info.value.record_id == "1-missing"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("record_id", ["bad/id", "../record_keys"])
    async def test_unaddressable_id_is_not_found(self, tmp_path, analyzer, keys, record_id):
        file_store = FileRecordStore(base_path=tmp_path)
        service = RecordService(
            store=file_store,
            index=IndexManager(store=file_store, keys=keys),
            analyzer=analyzer,
            keys=keys,
        )

        with pytest.raises(RecordNotFoundError):
            await service.get(RecordId(record_id))
        with pytest.raises(RecordNotFoundError):
            await service.analyze(RecordId(record_id))
        analyzer.classify.assert_not_awaited()


    @pytest.mark.asyncio
    async def test_malformed_record(self, service, store, keys):
        await store.set(keys.record_key("1-bad"), b"not json")
        with pytest.raises(MalformedBlobError):
            await service.get(RecordId("1-bad"))

    @pytest.mark.asyncio
    async def test_unindexed_record_is_found(self, service, store, keys):
        record = ExplorationRecord.create(_make_draft(), RESEARCHER)
        await store.set(keys.record_key(record.id), encode_record(record))

        assert await service.get(record.id) == record


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_applies_analyzer_outcome(self, store, index, keys):
        service = RecordService(
            store=store, index=index, analyzer=_make_analyzer(RecordStatus.ANOMALY), keys=keys
        )
        created = await service.create(_make_draft(), RESEARCHER)

        updated = await service.analyze(created.id)

        assert updated.status is RecordStatus.ANOMALY
        assert (await service.get(created.id)).status is RecordStatus.ANOMALY

    @pytest.mark.asyncio
    async def test_only_status_changes(self, service):
        created = await service.create(_make_draft(life_signs=True), RESEARCHER)

        updated = await service.analyze(created.id)

        assert updated.status is RecordStatus.ANALYZED
        assert updated.model_dump(exclude={"status"}) == created.model_dump(exclude={"status"})

    @pytest.mark.asyncio
    async def test_does_not_touch_index(self, service, store, keys):
        created = await service.create(_make_draft(), RESEARCHER)
        before = store.dump()[keys.index_key]
        store.writes.clear()

        await service.analyze(created.id)

        assert store.writes == [keys.record_key(created.id)]
        assert store.dump()[keys.index_key] == before

    @pytest.mark.asyncio
    async def test_second_analysis_is_rejected(self, service, analyzer):
        created = await service.create(_make_draft(), RESEARCHER)
        await service.analyze(created.id)

        with pytest.raises(InvalidTransitionError):
            await service.analyze(created.id)

        assert analyzer.classify.await_count == 1

    @pytest.mark.asyncio
    async def test_missing_record(self, service, analyzer):
        with pytest.raises(RecordNotFoundError):
            await service.analyze(RecordId("1-missing"))
        analyzer.classify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unavailable_store(self, service, store):
        created = await service.create(_make_draft(), RESEARCHER)
        store.online = False

        with pytest.raises(StorageUnavailableError):
            await service.analyze(created.id)

    @pytest.mark.asyncio
    async def test_write_failure_keeps_pending(self, service, store, keys):
        created = await service.create(_make_draft(), RESEARCHER)
        store.fail_keys.add(keys.record_key(created.id))

        with pytest.raises(WriteError):
            await service.analyze(created.id)

        store.fail_keys.clear()
        assert (await service.get(created.id)).status is RecordStatus.PENDING

    @pytest.mark.asyncio
    async def test_analyze_loaded_writes_without_rereading(self, service, store, keys, monkeypatch):
        created = await service.create(_make_draft(), RESEARCHER)

        async def no_reads(key: str) -> bytes:
            raise AssertionError(f"unexpected read of {key}")

        monkeypatch.setattr(store, "get", no_reads)
        updated = await service.analyze_loaded(created)

        assert updated.status is RecordStatus.ANALYZED
        stored = decode_record(store.dump()[keys.record_key(created.id)])
        assert stored.status is RecordStatus.ANALYZED

    @pytest.mark.asyncio
    async def test_ensure_available(self, service, store):
        await service.ensure_available()

        store.online = False
        with pytest.raises(StorageUnavailableError):
            await service.ensure_available()
