"""Stats command - archive statistics and depth chart."""

import sys

import cyclopts

from sla.cli.console import get_console
from sla.cli.util.runtime import run_handler
from sla.domain.record.query.list_records import ListRecords, ListRecordsHandler, RecordList
from sla.domain.shared.error import ArchiveError

app = cyclopts.App(name="stats", help="Show archive statistics")


@app.default
def stats() -> None:
    """Show record counts per status and the depth chart of recent records."""
    console = get_console()
    try:
        result: RecordList = run_handler(ListRecordsHandler, ListRecords())
    except ArchiveError as e:
        console.error(e.message)
        sys.exit(1)

    if not result.available:
        console.error("Record store is not available")
        sys.exit(1)

    console.stats(result.stats)
    console.print()
    console.print("[bold]Depth of recent explorations:[/bold]")
    console.depth_chart(result.depth_chart)
