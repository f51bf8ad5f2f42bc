from sla.domain.record.model.aggregate import ExplorationRecord, RecordDraft
from sla.domain.record.model.value import (
    DepthBar,
    RecordId,
    RecordKeys,
    RecordStats,
    RecordStatus,
    ResearcherId,
)

__all__ = [
    "DepthBar",
    "ExplorationRecord",
    "RecordDraft",
    "RecordId",
    "RecordKeys",
    "RecordStats",
    "RecordStatus",
    "ResearcherId",
]
