"""Run CLI commands in-process against a throwaway file store."""

import pytest

from sla.cli import console as console_module
from sla.cli.console import Console
from sla.cli.util import runtime

OWNER = "0xAbC0000000000000000000000000000000000001"


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    for var in ("SLA_DATA_DIR", "SLA_STORE__URL", "SLA_STORE__KEY_PREFIX", "SLA_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SLA_STORE__BACKEND", "file")
    monkeypatch.setenv("SLA_STORE__PATH", str(tmp_path / "store"))
    monkeypatch.setenv("SLA_IDENTITY__RESEARCHER", OWNER)
    monkeypatch.setenv("SLA_ANALYSIS__ANOMALY_RATE", "0")
    monkeypatch.setenv("COLUMNS", "250")
    monkeypatch.setattr(runtime, "bootstrap", lambda config: None)
    monkeypatch.setattr(console_module, "_default", Console(force_terminal=False))
    return tmp_path
