from sla.domain.record.model.aggregate import ExplorationRecord
from sla.domain.record.model.value import DepthBar, RecordId, RecordStats, RecordStatus
from sla.domain.record.service.query import (
    RecordQueryService,
    depth_profile,
    filter_records,
    summarize,
)
from sla.domain.shared.query import Query, QueryHandler, Result


class ListRecords(Query):
    search: str = ""
    status: RecordStatus | None = None


class RecordList(Result):
    items: list[ExplorationRecord]
    total: int  # all loaded records, before filtering
    stats: RecordStats  # computed over all loaded records
    depth_chart: list[DepthBar]
    available: bool
    skipped: list[RecordId]


class ListRecordsHandler(QueryHandler[ListRecords, RecordList]):
    query_service: RecordQueryService

    async def run(self, cmd: ListRecords) -> RecordList:
        snapshot = await self.query_service.load_all()
        return RecordList(
            items=filter_records(snapshot.records, search=cmd.search, status=cmd.status),
            total=len(snapshot.records),
            stats=summarize(snapshot.records),
            depth_chart=depth_profile(snapshot.records),
            available=snapshot.available,
            skipped=list(snapshot.skipped),
        )
