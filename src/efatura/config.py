"""Configuration management using pydantic-settings."""

import tomllib
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DEFAULT_TAX_ENTITY = "Global"
CONFIG_PATH = Path("~/.config/efatura/config.toml").expanduser()


class LoggingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EFATURA_LOG_")

    level: str = DEFAULT_LOG_LEVEL
    format: str = DEFAULT_LOG_FORMAT

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level


class SubmitterConfig(BaseSettings):
    """Issuer defaults applied to documents that do not state them."""

    model_config = SettingsConfigDict(env_prefix="EFATURA_SUBMITTER_")

    tax_registration_number: str | None = None
    tax_entity: str = DEFAULT_TAX_ENTITY
    software_certificate_number: int = 0
    record_channel_system: str | None = None
    record_channel_version: str | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EFATURA_")

    logging: LoggingConfig = LoggingConfig()
    submitter: SubmitterConfig = SubmitterConfig()


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        logging_config = LoggingConfig(**data.get("logging", {}))
        submitter = SubmitterConfig(**data.get("submitter", {}))
        return Settings(logging=logging_config, submitter=submitter)

    return Settings()
