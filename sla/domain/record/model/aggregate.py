"""ExplorationRecord aggregate - one subglacial-lake observation."""

import time

from pydantic import Field

from sla.domain.record.model.value import (
    Location,
    RecordId,
    RecordStatus,
    ResearcherId,
    new_record_id,
    transition,
)
from sla.domain.shared.error import InvalidTransitionError
from sla.domain.shared.model.aggregate import Aggregate
from sla.domain.shared.model.value import ValueObject


class RecordDraft(ValueObject):
    """Fields a researcher supplies when submitting a record."""

    location: Location
    depth: float
    temperature: float
    salinity: float
    life_signs: bool = False


class ExplorationRecord(Aggregate):
    """A stored exploration record.

    ``id``, ``timestamp`` and ``researcher`` are fixed at creation. ``status``
    changes at most once, through :meth:`with_status`.
    """

    id: RecordId
    location: str
    depth: float
    temperature: float
    salinity: float
    life_signs: bool = Field(alias="lifeSigns")
    timestamp: int
    researcher: ResearcherId
    status: RecordStatus = RecordStatus.PENDING

    @classmethod
    def create(
        cls,
        draft: RecordDraft,
        researcher: ResearcherId,
        now: float | None = None,
    ) -> "ExplorationRecord":
        now = time.time() if now is None else now
        return cls(
            id=new_record_id(now),
            location=draft.location,
            depth=draft.depth,
            temperature=draft.temperature,
            salinity=draft.salinity,
            life_signs=draft.life_signs,
            timestamp=int(now),
            researcher=researcher,
            status=RecordStatus.PENDING,
        )

    def require_pending(self) -> None:
        if self.status is not RecordStatus.PENDING:
            raise InvalidTransitionError(self.status.value)

    def with_status(self, outcome: RecordStatus) -> "ExplorationRecord":
        return self.model_copy(update={"status": transition(self.status, outcome)})
