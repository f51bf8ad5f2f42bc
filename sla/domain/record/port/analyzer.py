from abc import abstractmethod
from typing import Protocol

from sla.domain.record.model.aggregate import ExplorationRecord
from sla.domain.record.model.value import RecordStatus
from sla.domain.shared.port import Port


class RecordAnalyzer(Port, Protocol):
    @abstractmethod
    async def classify(self, record: ExplorationRecord) -> RecordStatus:
        """Return the terminal status analysis assigns to ``record``."""
        ...
