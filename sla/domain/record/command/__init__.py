from sla.domain.record.command.analyze import (
    AnalyzeRecord,
    AnalyzeRecordHandler,
    RecordAnalyzed,
)
from sla.domain.record.command.create import (
    CreateRecord,
    CreateRecordHandler,
    RecordCreated,
)

__all__ = [
    "AnalyzeRecord",
    "AnalyzeRecordHandler",
    "CreateRecord",
    "CreateRecordHandler",
    "RecordAnalyzed",
    "RecordCreated",
]
