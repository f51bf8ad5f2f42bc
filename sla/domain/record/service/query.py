"""Read side: load every live record into an immutable snapshot.

``load_all`` is the only function here that touches the store. The
filtering and aggregation helpers are pure and never modify their input.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from pydantic import Field

from sla.domain.record.codec import decode_record
from sla.domain.record.model.aggregate import ExplorationRecord
from sla.domain.record.model.value import (
    DepthBar,
    RecordId,
    RecordKeys,
    RecordStats,
    RecordStatus,
)
from sla.domain.record.port.store import RecordStore
from sla.domain.record.service.index import IndexManager
from sla.domain.shared.error import (
    InvalidKeyError,
    MalformedBlobError,
    StorageUnavailableError,
)
from sla.domain.shared.model.value import ValueObject
from sla.domain.shared.service import Service

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_SCALE = 1000.0  # metres; chart scale never drops below this


class RecordSnapshot(ValueObject):
    """The archive as seen by one ``load_all`` call.

    Refreshing produces a new snapshot; an existing one never changes.
    """

    records: tuple[ExplorationRecord, ...] = ()
    available: bool = True
    skipped: tuple[RecordId, ...] = ()  # indexed ids whose blob was absent or unreadable
    loaded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def unavailable(cls) -> "RecordSnapshot":
        return cls(available=False)


class RecordQueryService(Service):
    store: RecordStore
    index: IndexManager
    keys: RecordKeys

    async def load_all(self) -> RecordSnapshot:
        """Load every indexed record, newest first.

        One bad record never prevents the others from loading: absent blobs,
        blobs that fail to decode, ids the store cannot address and per-key
        read errors are logged and skipped. An unavailable store yields an
        empty snapshot with ``available=False`` instead of an error.
        """
        if not await self.store.available():
            logger.error("Record store is not available")
            return RecordSnapshot.unavailable()

        try:
            ids = await self.index.list_ids()
        except StorageUnavailableError as e:
            logger.error("Could not read index: %s", e.message)
            return RecordSnapshot.unavailable()

        records: list[ExplorationRecord] = []
        skipped: list[RecordId] = []
        for record_id in ids:
            key = self.keys.record_key(record_id)
            try:
                data = await self.store.get(key)
            except (StorageUnavailableError, InvalidKeyError) as e:
                logger.error("Error loading record %s: %s", record_id, e.message)
                skipped.append(record_id)
                continue

            if not data:
                logger.warning("Indexed record %s has no blob under %s", record_id, key)
                skipped.append(record_id)
                continue

            try:
                records.append(decode_record(data, record_id))
            except MalformedBlobError as e:
                logger.error("Error parsing record %s: %s", record_id, e.message)
                skipped.append(record_id)

        # list.sort is stable, also with reverse=True: equal timestamps keep index order
        records.sort(key=lambda r: r.timestamp, reverse=True)
        logger.debug("Loaded %d records (%d skipped)", len(records), len(skipped))
        return RecordSnapshot(records=tuple(records), skipped=tuple(skipped))


def filter_records(
    records: Iterable[ExplorationRecord],
    search: str = "",
    status: RecordStatus | None = None,
) -> list[ExplorationRecord]:
    """Case-insensitive substring match on location or researcher, plus exact status."""
    term = search.lower()
    return [
        r
        for r in records
        if (term in r.location.lower() or term in r.researcher.lower())
        and (status is None or r.status == status)
    ]


def summarize(records: Iterable[ExplorationRecord]) -> RecordStats:
    counts = {s: 0 for s in RecordStatus}
    total = 0
    for r in records:
        counts[r.status] += 1
        total += 1
    return RecordStats(
        total=total,
        pending=counts[RecordStatus.PENDING],
        analyzed=counts[RecordStatus.ANALYZED],
        anomaly=counts[RecordStatus.ANOMALY],
    )


def depth_profile(
    records: Sequence[ExplorationRecord],
    limit: int = 5,
    floor: float = DEFAULT_DEPTH_SCALE,
) -> list[DepthBar]:
    """Depth bars for the first ``limit`` records.

    The scale is the deepest record overall, or ``floor`` if that is deeper.
    """
    if not records:
        return []
    scale = max(max(r.depth for r in records), floor)
    return [
        DepthBar(
            record_id=r.id,
            location=r.location,
            depth=r.depth,
            fill=r.depth / scale if scale else 0.0,
            life_signs=r.life_signs,
        )
        for r in records[:limit]
    ]
