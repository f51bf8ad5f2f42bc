import logfire

from sla.domain.record.model.aggregate import RecordDraft
from sla.domain.record.model.value import Location, RecordId, ResearcherId, require_researcher
from sla.domain.record.service.record import RecordService
from sla.domain.shared.command import Command, CommandHandler, Result


class CreateRecord(Command):
    location: Location
    depth: float
    temperature: float
    salinity: float
    life_signs: bool = False


class RecordCreated(Result):
    record_id: RecordId
    timestamp: int


class CreateRecordHandler(CommandHandler[CreateRecord, RecordCreated]):
    researcher: ResearcherId
    record_service: RecordService

    async def run(self, cmd: CreateRecord) -> RecordCreated:
        with logfire.span("CreateRecord"):
            require_researcher(self.researcher)

            draft = RecordDraft(
                location=cmd.location,
                depth=cmd.depth,
                temperature=cmd.temperature,
                salinity=cmd.salinity,
                life_signs=cmd.life_signs,
            )
            record = await self.record_service.create(draft, self.researcher)

            logfire.info("Record submitted", record_id=record.id, researcher=self.researcher)

            return RecordCreated(record_id=record.id, timestamp=record.timestamp)
