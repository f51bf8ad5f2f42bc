import logfire

from sla.domain.record.model.value import (
    RecordId,
    RecordStatus,
    ResearcherId,
    require_researcher,
    same_researcher,
)
from sla.domain.record.service.record import RecordService
from sla.domain.shared.command import Command, CommandHandler, Result
from sla.domain.shared.error import UnauthorizedError


class AnalyzeRecord(Command):
    record_id: RecordId


class RecordAnalyzed(Result):
    record_id: RecordId
    status: RecordStatus


class AnalyzeRecordHandler(CommandHandler[AnalyzeRecord, RecordAnalyzed]):
    """Runs analysis on behalf of the record's own researcher only."""

    researcher: ResearcherId
    record_service: RecordService

    async def run(self, cmd: AnalyzeRecord) -> RecordAnalyzed:
        with logfire.span("AnalyzeRecord"):
            require_researcher(self.researcher)

            await self.record_service.ensure_available()
            record = await self.record_service.get(cmd.record_id)
            if not same_researcher(record.researcher, self.researcher):
                raise UnauthorizedError(
                    f"Only {record.researcher} may analyze record {record.id}",
                    code="not_owner",
                )

            updated = await self.record_service.analyze_loaded(record)

            logfire.info("Record analyzed", record_id=updated.id, status=updated.status.value)

            return RecordAnalyzed(record_id=updated.id, status=updated.status)
