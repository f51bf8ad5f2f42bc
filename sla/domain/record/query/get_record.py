from sla.domain.record.model.aggregate import ExplorationRecord
from sla.domain.record.model.value import RecordId
from sla.domain.record.service.record import RecordService
from sla.domain.shared.query import Query, QueryHandler, Result


class GetRecord(Query):
    record_id: RecordId


class RecordDetail(Result):
    record: ExplorationRecord


class GetRecordHandler(QueryHandler[GetRecord, RecordDetail]):
    record_service: RecordService

    async def run(self, cmd: GetRecord) -> RecordDetail:
        record = await self.record_service.get(cmd.record_id)
        return RecordDetail(record=record)
