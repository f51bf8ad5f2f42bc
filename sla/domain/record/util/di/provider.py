from dishka import from_context, provide

from sla.config import Config
from sla.domain.record.command.analyze import AnalyzeRecordHandler
from sla.domain.record.command.create import CreateRecordHandler
from sla.domain.record.model.value import ResearcherId
from sla.domain.record.query.get_record import GetRecordHandler
from sla.domain.record.query.list_records import ListRecordsHandler
from sla.domain.record.service.index import IndexManager
from sla.domain.record.service.query import RecordQueryService
from sla.domain.record.service.record import RecordService
from sla.util.di.base import Provider
from sla.util.di.scope import Scope


class RecordProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    researcher = from_context(provides=ResearcherId, scope=Scope.APP)

    # Services
    index_manager = provide(IndexManager, scope=Scope.UOW)
    record_service = provide(RecordService, scope=Scope.UOW)
    query_service = provide(RecordQueryService, scope=Scope.UOW)

    # Command Handlers
    create_handler = provide(CreateRecordHandler, scope=Scope.UOW)
    analyze_handler = provide(AnalyzeRecordHandler, scope=Scope.UOW)

    # Query Handlers
    list_records_handler = provide(ListRecordsHandler, scope=Scope.UOW)
    get_record_handler = provide(GetRecordHandler, scope=Scope.UOW)
