"""Manages SLA directory structure following XDG Base Directory spec.

Directory layout:
    ~/.config/sla/
        config.yaml         # User configuration

    ~/.local/share/sla/
        store/              # File-backed record store (one file per key)

    ~/.local/state/sla/
        logs/
            sla.log         # Suggested SLA_LOG_FILE target
"""

import os
from pathlib import Path


class SLAPaths:
    """Manages SLA paths following XDG Base Directory specification.

    Supports overriding individual directories for testing. ``SLA_DATA_DIR``
    overrides the data directory from the environment.
    """

    def __init__(
        self,
        *,
        config_dir: Path | None = None,
        data_dir: Path | None = None,
        state_dir: Path | None = None,
    ) -> None:
        home = Path.home()
        env_data_dir = os.environ.get("SLA_DATA_DIR")
        self._config_dir = config_dir or home / ".config" / "sla"
        self._data_dir = data_dir or (
            Path(env_data_dir).expanduser() if env_data_dir else home / ".local" / "share" / "sla"
        )
        self._state_dir = state_dir or home / ".local" / "state" / "sla"

    @property
    def config_dir(self) -> Path:
        """Config directory (~/.config/sla)."""
        return self._config_dir

    @property
    def data_dir(self) -> Path:
        """Data directory (~/.local/share/sla)."""
        return self._data_dir

    @property
    def state_dir(self) -> Path:
        """State directory (~/.local/state/sla)."""
        return self._state_dir

    @property
    def config_file(self) -> Path:
        return self._config_dir / "config.yaml"

    @property
    def store_dir(self) -> Path:
        """Directory used by the file-backed record store."""
        return self._data_dir / "store"

    @property
    def logs_dir(self) -> Path:
        return self._state_dir / "logs"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._state_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
