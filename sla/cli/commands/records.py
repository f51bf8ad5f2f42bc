"""Record commands: list, show, submit, analyze."""

import sys
from typing import Annotated, NoReturn

import cyclopts
from pydantic import ValidationError

from sla.cli.console import get_console
from sla.cli.util.runtime import run_handler
from sla.domain.record.command.analyze import AnalyzeRecord, AnalyzeRecordHandler, RecordAnalyzed
from sla.domain.record.command.create import CreateRecord, CreateRecordHandler, RecordCreated
from sla.domain.record.model.value import RecordId, RecordStatus
from sla.domain.record.query.get_record import GetRecord, GetRecordHandler, RecordDetail
from sla.domain.record.query.list_records import ListRecords, ListRecordsHandler, RecordList
from sla.domain.shared.error import (
    ArchiveError,
    OrphanedRecordError,
    StorageUnavailableError,
    UnauthorizedError,
    WriteRejectedError,
)

app = cyclopts.App(name="records", help="Submit, browse and analyze exploration records")

Researcher = Annotated[
    str | None,
    cyclopts.Parameter(name=["--researcher", "-r"], help="Identity to act as (wallet address)"),
]


def _fail(e: ArchiveError) -> NoReturn:
    console = get_console()
    if isinstance(e, StorageUnavailableError):
        console.error(e.message, hint="Check store.backend / store.url (sla config show)")
    elif isinstance(e, WriteRejectedError):
        console.error("Transaction rejected", hint=e.message)
    elif isinstance(e, OrphanedRecordError):
        console.error(
            e.message,
            hint="The record was stored but will not be listed until the index is repaired",
        )
    elif isinstance(e, UnauthorizedError) and e.code == "anonymous":
        console.error(e.message, hint="Pass --researcher or set identity.researcher")
    elif isinstance(e, UnauthorizedError):
        console.error(e.message, hint="Only the submitting researcher can analyze a record")
    else:
        console.error(e.message)
    sys.exit(1)


@app.command(name="list")
def list_records(
    *,
    search: str = "",
    status: RecordStatus | None = None,
) -> None:
    """List records, newest first.

    Args:
        search: Case-insensitive text matched against location and researcher.
        status: Only show records with this status.
    """
    console = get_console()
    try:
        result: RecordList = run_handler(
            ListRecordsHandler, ListRecords(search=search, status=status)
        )
    except ArchiveError as e:
        _fail(e)

    if not result.available:
        console.error(
            "Record store is not available",
            hint="Showing nothing; try again once the ledger is reachable",
        )
        sys.exit(1)

    if not result.items:
        console.warning("No exploration records found")
    else:
        console.record_table(result.items, title=f"{len(result.items)} of {result.total} records")

    if result.skipped:
        console.warning(f"{len(result.skipped)} indexed record(s) could not be loaded")


@app.command
def show(record_id: str, /) -> None:
    """Show a single record.

    Args:
        record_id: Record id, e.g. 1718000000000-ab12cd3
    """
    try:
        result: RecordDetail = run_handler(
            GetRecordHandler, GetRecord(record_id=RecordId(record_id))
        )
    except ArchiveError as e:
        _fail(e)
    get_console().record_detail(result.record)


@app.command
def submit(
    location: str,
    depth: float,
    temperature: float,
    salinity: float,
    *,
    life_signs: bool = False,
    researcher: Researcher = None,
) -> None:
    """Submit a new exploration record (status: pending).

    Args:
        location: Lake or site name.
        depth: Depth in metres.
        temperature: Water temperature.
        salinity: Salinity reading.
        life_signs: Whether signs of life were observed.
    """
    console = get_console()
    try:
        cmd = CreateRecord(
            location=location,
            depth=depth,
            temperature=temperature,
            salinity=salinity,
            life_signs=life_signs,
        )
    except ValidationError as e:
        console.error("Invalid record", hint=e.errors()[0]["msg"])
        sys.exit(1)

    try:
        with console.status("Submitting record..."):
            result: RecordCreated = run_handler(CreateRecordHandler, cmd, researcher=researcher)
    except ArchiveError as e:
        _fail(e)
    console.success(f"Record submitted: {result.record_id}")


@app.command
def analyze(record_id: str, /, *, researcher: Researcher = None) -> None:
    """Analyze a pending record you submitted.

    Args:
        record_id: Id of the record to analyze.
    """
    console = get_console()
    try:
        with console.status("Analyzing record..."):
            result: RecordAnalyzed = run_handler(
                AnalyzeRecordHandler,
                AnalyzeRecord(record_id=RecordId(record_id)),
                researcher=researcher,
            )
    except ArchiveError as e:
        _fail(e)
    if result.status is RecordStatus.ANOMALY:
        console.warning(f"Record {result.record_id}: anomaly")
    else:
        console.success(f"Record {result.record_id}: {result.status.value}")
