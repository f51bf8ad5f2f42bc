from sla.domain.record.query.get_record import GetRecord, GetRecordHandler, RecordDetail
from sla.domain.record.query.list_records import ListRecords, ListRecordsHandler, RecordList

__all__ = [
    "GetRecord",
    "GetRecordHandler",
    "ListRecords",
    "ListRecordsHandler",
    "RecordDetail",
    "RecordList",
]
