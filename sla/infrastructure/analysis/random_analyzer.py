import asyncio
import logging
import random

from sla.domain.record.model.aggregate import ExplorationRecord
from sla.domain.record.model.value import RecordStatus
from sla.domain.record.port.analyzer import RecordAnalyzer

logger = logging.getLogger(__name__)


class RandomRecordAnalyzer(RecordAnalyzer):
    """Stand-in classifier: ``anomaly`` with probability ``anomaly_rate``.

    The outcome carries no domain meaning. Swap in a real analyzer through
    the RecordAnalyzer port.
    """

    def __init__(
        self,
        anomaly_rate: float = 0.2,
        seed: int | None = None,
        delay: float = 0.0,
    ) -> None:
        if not 0.0 <= anomaly_rate <= 1.0:
            raise ValueError(f"anomaly_rate must be within [0, 1], got {anomaly_rate}")
        self.anomaly_rate = anomaly_rate
        self.delay = delay
        self._rng = random.Random(seed)

    async def classify(self, record: ExplorationRecord) -> RecordStatus:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        anomalous = self._rng.random() < self.anomaly_rate
        outcome = RecordStatus.ANOMALY if anomalous else RecordStatus.ANALYZED
        logger.debug("Classified %s as %s", record.id, outcome)
        return outcome
