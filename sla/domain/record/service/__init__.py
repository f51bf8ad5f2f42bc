from sla.domain.record.service.index import IndexManager
from sla.domain.record.service.query import RecordQueryService, RecordSnapshot
from sla.domain.record.service.record import RecordService

__all__ = ["IndexManager", "RecordQueryService", "RecordService", "RecordSnapshot"]
