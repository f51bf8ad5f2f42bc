"""Tests for the SLA Pydantic Settings config."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from sla.config import AnalysisConfig, Config, LoggingConfig, StoreConfig, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "SLA_DATA_DIR",
        "SLA_STORE__BACKEND",
        "SLA_STORE__PATH",
        "SLA_STORE__URL",
        "SLA_STORE__KEY_PREFIX",
        "SLA_IDENTITY__RESEARCHER",
        "SLA_ANALYSIS__ANOMALY_RATE",
        "SLA_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)


class TestStoreConfig:
    def test_defaults(self) -> None:
        config = StoreConfig()
        assert config.backend == "file"
        assert config.key_prefix == "record"

    def test_http_requires_url(self) -> None:
        with pytest.raises(ValidationError, match="store.url is required"):
            StoreConfig(backend="http")

    def test_http_with_url(self) -> None:
        config = StoreConfig(backend="http", url="http://localhost:8545")
        assert config.url == "http://localhost:8545"

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(backend="sqlite")  # type: ignore[arg-type]


class TestAnalysisConfig:
    @pytest.mark.parametrize("rate", [-0.01, 1.01])
    def test_rate_bounds(self, rate: float) -> None:
        with pytest.raises(ValidationError):
            AnalysisConfig(anomaly_rate=rate)

    def test_default_rate(self) -> None:
        assert AnalysisConfig().anomaly_rate == 0.2


class TestConfig:
    def test_store_path_derived_from_data_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """File store path should derive from SLA_DATA_DIR when not set."""
        monkeypatch.setenv("SLA_DATA_DIR", "/data")

        config = Config()

        assert config.store.path == str(Path("/data") / "store")

    def test_explicit_store_path_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLA_DATA_DIR", "/data")
        monkeypatch.setenv("SLA_STORE__PATH", "/elsewhere")

        assert Config().store.path == "/elsewhere"

    def test_memory_backend_has_no_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLA_STORE__BACKEND", "memory")
        assert Config().store.path == ""

    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SLA_STORE__KEY_PREFIX", "exploration")
        monkeypatch.setenv("SLA_IDENTITY__RESEARCHER", "0xabc")
        monkeypatch.setenv("SLA_ANALYSIS__ANOMALY_RATE", "0.5")

        config = Config()

        assert config.store.key_prefix == "exploration"
        assert config.identity.researcher == "0xabc"
        assert config.analysis.anomaly_rate == 0.5

    def test_yaml_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "store:\n"
            "  backend: http\n"
            "  url: http://gateway:8080\n"
            "identity:\n"
            "  researcher: '0xfeed'\n"
        )
        monkeypatch.setenv("SLA_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.store.backend == "http"
        assert config.store.url == "http://gateway:8080"
        assert config.identity.researcher == "0xfeed"

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("identity:\n  researcher: '0xfeed'\n")
        monkeypatch.setenv("SLA_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("SLA_IDENTITY__RESEARCHER", "0xbeef")

        assert Config().identity.researcher == "0xbeef"

    def test_empty_yaml_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        monkeypatch.setenv("SLA_CONFIG_FILE", str(config_file))

        assert Config().store.backend == "file"


class TestConfigureLogging:
    def test_log_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        log_file = tmp_path / "logs" / "sla.log"
        monkeypatch.setenv("SLA_LOG_FILE", str(log_file))
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level

        try:
            configure_logging(LoggingConfig(level="INFO"))
            logging.getLogger("sla.test").info("hello from test")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

        assert "hello from test" in log_file.read_text()
