"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from sla.domain.record.model import DepthBar, ExplorationRecord, RecordStats

_STATUS_STYLES = {
    "pending": "yellow",
    "analyzed": "green",
    "anomaly": "red",
}

_RECORD_COLUMNS = (
    "ID",
    "Location",
    "Depth (m)",
    "Temp (°C)",
    "Salinity",
    "Life",
    "Researcher",
    "Submitted",
    "Status",
)


def relative_time(epoch_seconds: int, now: datetime | None = None) -> str:
    """Convert an epoch timestamp to a relative time string (e.g., '2 hours ago')."""
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = (now - dt).total_seconds()
    if seconds < 60:
        return "just now"
    elif seconds < 3600:
        mins = int(seconds // 60)
        return f"{mins} minute{'s' if mins != 1 else ''} ago"
    elif seconds < 86400:
        hours = int(seconds // 3600)
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    elif seconds < 604800:
        days = int(seconds // 86400)
        return f"{days} day{'s' if days != 1 else ''} ago"
    return dt.strftime("%Y-%m-%d %H:%M")


def short_researcher(address: str) -> str:
    """Abbreviate a wallet address as 0x1234...abcd."""
    if len(address) <= 12:
        return address
    return f"{address[:6]}...{address[-4:]}"


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def record_table(self, records: list["ExplorationRecord"], *, title: str | None = None) -> None:
        table = Table(title=title, show_header=True, header_style="bold")
        for header in _RECORD_COLUMNS:
            table.add_column(header)

        for r in records:
            style = _STATUS_STYLES.get(r.status.value, "white")
            table.add_row(
                r.id,
                r.location,
                f"{r.depth:g}",
                f"{r.temperature:g}",
                f"{r.salinity:g}",
                "yes" if r.life_signs else "no",
                short_researcher(r.researcher),
                relative_time(r.timestamp),
                f"[{style}]{r.status.value}[/{style}]",
            )

        self._console.print(table)

    def record_detail(self, record: "ExplorationRecord") -> None:
        style = _STATUS_STYLES.get(record.status.value, "white")
        lines = [
            f"[cyan]Depth:[/cyan] {record.depth:g} m    "
            f"[cyan]Temperature:[/cyan] {record.temperature:g} °C    "
            f"[cyan]Salinity:[/cyan] {record.salinity:g}",
            f"[cyan]Life signs:[/cyan] {'detected' if record.life_signs else 'none'}",
            f"[cyan]Researcher:[/cyan] {record.researcher}",
            f"[cyan]Submitted:[/cyan] {relative_time(record.timestamp)}",
            f"[cyan]Status:[/cyan] [{style}]{record.status.value}[/{style}]",
        ]
        self._console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]{record.location}[/bold]",
                subtitle=f"[dim]{record.id}[/dim]",
                border_style="blue",
                padding=(1, 2),
            )
        )

    def stats(self, stats: "RecordStats") -> None:
        self._console.print(f"[bold]Total datasets:[/bold] {stats.total:,}")
        self._console.print(f"  [green]Analyzed:[/green]  {stats.analyzed:,}")
        self._console.print(f"  [yellow]Pending:[/yellow]   {stats.pending:,}")
        self._console.print(f"  [red]Anomalies:[/red] {stats.anomaly:,}")

    def depth_chart(self, bars: list["DepthBar"], width: int = 40) -> None:
        """Horizontal bars; green marks records with life signs."""
        if not bars:
            self.info("No depth data yet")
            return
        label_width = max(len(b.location) for b in bars)
        for b in bars:
            filled = max(0, min(width, round(b.fill * width)))
            color = "green" if b.life_signs else "blue"
            bar = f"[{color}]{'█' * filled}[/{color}]{' ' * (width - filled)}"
            self._console.print(f"{b.location:<{label_width}}  {bar}  {b.depth:g}m")

    def status(self, message: str):
        """Return a status context manager for long operations."""
        return self._console.status(message)


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
