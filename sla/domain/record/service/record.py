"""RecordService - create and analyze exploration records."""

import logging

from sla.domain.record.codec import decode_record, encode_record
from sla.domain.record.model.aggregate import ExplorationRecord, RecordDraft
from sla.domain.record.model.value import RecordId, RecordKeys, ResearcherId
from sla.domain.record.port.analyzer import RecordAnalyzer
from sla.domain.record.port.store import RecordStore
from sla.domain.record.service.index import IndexManager
from sla.domain.shared.error import (
    ArchiveError,
    InvalidKeyError,
    OrphanedRecordError,
    RecordNotFoundError,
    StorageUnavailableError,
)
from sla.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RecordService(Service):
    """Writes records as two independent keyed operations.

    Creating a record writes its blob first and only then appends its id to
    the index. There is no transaction spanning both writes: if the index
    append fails the blob stays behind as an orphan that no listing shows.

    Authorization is the caller's job. ``analyze`` must only be invoked on
    behalf of the researcher who created the record.
    """

    store: RecordStore
    index: IndexManager
    analyzer: RecordAnalyzer
    keys: RecordKeys

    async def ensure_available(self) -> None:
        """Probe the store; call before starting a read/write sequence.

        Raises:
            StorageUnavailableError: The probe failed.
        """
        if not await self.store.available():
            raise StorageUnavailableError("Record store is not available")

    async def create(self, draft: RecordDraft, researcher: ResearcherId) -> ExplorationRecord:
        """Persist a new pending record owned by ``researcher``.

        Raises:
            StorageUnavailableError: The store probe failed; nothing written.
            WriteError: The record blob was not written; nothing persisted.
            OrphanedRecordError: The blob was written but the index could not
                be read or written. The record exists but is not listed.
        """
        await self.ensure_available()

        record = ExplorationRecord.create(draft, researcher)
        await self.store.set(self.keys.record_key(record.id), encode_record(record))
        logger.debug("Record blob written: %s", record.id)

        try:
            await self.index.append(record.id)
        except ArchiveError as e:
            logger.error("Record %s is orphaned, index append failed: %s", record.id, e.message)
            raise OrphanedRecordError(record.id, e) from e

        logger.info("Record created: %s by %s", record.id, researcher)
        return record

    async def get(self, record_id: RecordId) -> ExplorationRecord:
        """Load one record by id, whether or not it is indexed.

        Raises:
            RecordNotFoundError: Nothing is stored under the record key, or
                the id cannot form a key at all.
            MalformedBlobError: The stored blob does not decode.
        """
        try:
            data = await self.store.get(self.keys.record_key(record_id))
        except InvalidKeyError as e:
            raise RecordNotFoundError(record_id) from e
        if not data:
            raise RecordNotFoundError(record_id)
        return decode_record(data, record_id)

    async def analyze(self, record_id: RecordId) -> ExplorationRecord:
        """Move a pending record to the status the analyzer picks.

        Raises:
            StorageUnavailableError: The store probe failed.
            RecordNotFoundError: No such record.
            MalformedBlobError: The stored blob does not decode.
            InvalidTransitionError: The record is not pending.
            WriteError: The updated record was not written.
        """
        await self.ensure_available()
        record = await self.get(record_id)
        return await self.analyze_loaded(record)

    async def analyze_loaded(self, record: ExplorationRecord) -> ExplorationRecord:
        """Analyze a record the caller loaded after :meth:`ensure_available`.

        The index is not touched.

        Raises:
            InvalidTransitionError: The record is not pending.
            WriteError: The updated record was not written.
        """
        record.require_pending()

        outcome = await self.analyzer.classify(record)
        updated = record.with_status(outcome)
        await self.store.set(self.keys.record_key(record.id), encode_record(updated))

        logger.info("Record analyzed: %s -> %s", record.id, updated.status)
        return updated
