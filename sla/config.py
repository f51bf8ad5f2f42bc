import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from typing_extensions import Self

from sla.cli.util.paths import SLAPaths


# =============================================================================
# Store Configuration
# =============================================================================


class StoreConfig(BaseModel):
    """Record store configuration (nested in Config, uses env_nested_delimiter).

    The path field uses empty string as sentinel to indicate "derive from SLAPaths".
    """

    backend: Literal["memory", "file", "http"] = "file"
    path: str = ""  # file backend: empty = derive from paths
    url: str = ""  # http backend: base URL of the contract gateway
    timeout: float = 30.0  # seconds; ledger writes wait for confirmation
    key_prefix: str = "record"  # "exploration" reads data written by the web app

    @model_validator(mode="after")
    def require_url_for_http(self) -> Self:
        if self.backend == "http" and not self.url:
            raise ValueError("store.url is required when store.backend is 'http'")
        return self


# =============================================================================
# Analysis Configuration
# =============================================================================


class AnalysisConfig(BaseModel):
    """Analysis collaborator configuration."""

    anomaly_rate: float = Field(default=0.2, ge=0.0, le=1.0)
    seed: int | None = None  # fixed seed gives reproducible outcomes
    delay: float = Field(default=0.0, ge=0.0)  # simulated processing time in seconds


class IdentityConfig(BaseModel):
    """Caller identity; stands in for the connected wallet account."""

    researcher: str = ""


# =============================================================================
# Application Configuration
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by SLA_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from SLA_CONFIG_FILE, falling back to ~/.config/sla/config.yaml."""
        config_file = os.environ.get("SLA_CONFIG_FILE")
        path = Path(config_file) if config_file else SLAPaths().config_file
        if path.exists():
            return yaml.safe_load(path.read_text()) or {}
        return {}


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from SLA_LOG_FILE env var."""
        return os.environ.get("SLA_LOG_FILE")


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    store: StoreConfig = StoreConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    identity: IdentityConfig = IdentityConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "env_prefix": "SLA_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows SLA_STORE__BACKEND override
    }

    @model_validator(mode="after")
    def derive_store_path(self) -> Self:
        """Derive the file store directory from SLAPaths if not explicitly set."""
        if self.store.backend == "file" and not self.store.path:
            self.store = self.store.model_copy(update={"path": str(SLAPaths().store_dir)})
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - SLA_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in CLI startup so all loggers pick up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
