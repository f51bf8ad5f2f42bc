"""Main CLI application using Cyclopts.

Every command runs in-process: it builds a DI container, resolves one
handler and talks to the configured record store directly.
"""

import cyclopts

from sla.cli.commands import config, records, stats

app = cyclopts.App(
    name="sla",
    help="Subglacial Lake Archive - CLI",
)

app.command(records.app, name="records")
app.command(stats.app, name="stats")
app.command(config.app, name="config")
