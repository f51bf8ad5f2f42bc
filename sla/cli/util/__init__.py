"""CLI utilities (~/.config/sla and friends)."""

from sla.cli.util.paths import SLAPaths

__all__ = ["SLAPaths"]
