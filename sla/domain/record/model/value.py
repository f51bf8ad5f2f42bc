"""Record domain value objects."""

import random
import string
import time
from enum import StrEnum
from typing import Annotated, NewType

from pydantic import StringConstraints

from sla.domain.shared.error import InvalidTransitionError, UnauthorizedError
from sla.domain.shared.model.value import ValueObject

RecordId = NewType("RecordId", str)
ResearcherId = NewType("ResearcherId", str)

# Location as submitted: non-blank after stripping
Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LENGTH = 7


class RecordStatus(StrEnum):
    PENDING = "pending"
    ANALYZED = "analyzed"
    ANOMALY = "anomaly"

    @property
    def is_terminal(self) -> bool:
        return self is not RecordStatus.PENDING


def transition(current: RecordStatus, outcome: RecordStatus) -> RecordStatus:
    """Return the status a record moves to when analysis yields ``outcome``.

    The only legal moves are pending -> analyzed and pending -> anomaly.
    Both targets are terminal.
    """
    if current is not RecordStatus.PENDING:
        raise InvalidTransitionError(current.value, outcome.value)
    if not outcome.is_terminal:
        raise InvalidTransitionError(current.value, outcome.value)
    return outcome


def new_record_id(now: float | None = None, rng: random.Random | None = None) -> RecordId:
    """Generate ``<unix-millis>-<7 base36 chars>``."""
    millis = int((time.time() if now is None else now) * 1000)
    choice = (rng or random).choices
    suffix = "".join(choice(_ID_ALPHABET, k=_ID_SUFFIX_LENGTH))
    return RecordId(f"{millis}-{suffix}")


def same_researcher(a: str, b: str) -> bool:
    """Identities are wallet addresses; hex case is not significant."""
    return a.lower() == b.lower()


def require_researcher(researcher: str) -> None:
    """Reject a blank identity: nobody is connected."""
    if not researcher.strip():
        raise UnauthorizedError(
            "No researcher identity; connect a wallet first", code="anonymous"
        )


class RecordKeys(ValueObject):
    """Key layout inside the ledger's key/value namespace.

    Example (prefix="record"):
        index      -> "record_keys"
        record 42  -> "record_42"
    """

    prefix: str = "record"

    @property
    def index_key(self) -> str:
        return f"{self.prefix}_keys"

    def record_key(self, record_id: str) -> str:
        return f"{self.prefix}_{record_id}"


class DepthBar(ValueObject):
    """One bar of the depth chart."""

    record_id: RecordId
    location: str
    depth: float
    fill: float  # depth relative to the chart scale, 0.0 - 1.0 for non-negative depths
    life_signs: bool


class RecordStats(ValueObject):
    total: int = 0
    pending: int = 0
    analyzed: int = 0
    anomaly: int = 0
