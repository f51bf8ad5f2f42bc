"""Config management commands."""

import sys
from pathlib import Path

import cyclopts
import yaml

from sla.cli.util.paths import SLAPaths
from sla.config import Config

app = cyclopts.App(name="config", help="Manage SLA configuration")

TEMPLATE = """\
# SLA Configuration

# Where records live: memory | file | http
store:
  backend: file
  # path: ~/.local/share/sla/store
  # url: http://localhost:8545/contract   # required for backend: http
  # key_prefix: exploration               # read data written by the web app

# identity:
#   researcher: "0x0000000000000000000000000000000000000000"

# analysis:
#   anomaly_rate: 0.2
#   seed: 42

# logging:
#   level: INFO
"""


@app.command
def init(path: Path | None = None) -> None:
    """Create a new config file from template.

    Also creates the SLA config, data and state directories.

    Args:
        path: Path for the config file. Defaults to ~/.config/sla/config.yaml
    """
    paths = SLAPaths()
    path = path or paths.config_file
    if path.is_dir():
        print(f"Error: {path} is a directory, not a file path", file=sys.stderr)
        sys.exit(1)

    if path.exists():
        print(f"Error: {path} already exists (refusing to overwrite)", file=sys.stderr)
        sys.exit(1)

    paths.ensure_directories()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(TEMPLATE)
    print(f"Created config at {path}")
    print(f"Records are stored under {paths.store_dir}")
    print(f"To log to a file: export SLA_LOG_FILE={paths.logs_dir / 'sla.log'}")


@app.command
def show() -> None:
    """Print the effective configuration (files, env vars and defaults merged)."""
    config = Config()  # type: ignore[call-arg]
    data = config.model_dump(mode="json")
    data["logging"]["file"] = config.logging.file
    print(yaml.safe_dump(data, sort_keys=False), end="")
