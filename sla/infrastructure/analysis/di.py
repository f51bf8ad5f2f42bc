from dishka import provide

from sla.config import Config
from sla.domain.record.port.analyzer import RecordAnalyzer
from sla.infrastructure.analysis.random_analyzer import RandomRecordAnalyzer
from sla.util.di.base import Provider
from sla.util.di.scope import Scope


class AnalysisProvider(Provider):
    @provide(scope=Scope.APP)
    def get_record_analyzer(self, config: Config) -> RecordAnalyzer:
        return RandomRecordAnalyzer(
            anomaly_rate=config.analysis.anomaly_rate,
            seed=config.analysis.seed,
            delay=config.analysis.delay,
        )
