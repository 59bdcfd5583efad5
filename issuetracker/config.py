"""Configuration loading from YAML and environment.

Every value has a default, so the service runs without a config file.
Environment variables (SERVER_*, LOGGING_*, APP_ENV) take precedence over
the YAML file. Strings like ${VAR} or $VAR in the YAML are substituted from
the environment.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Injected by load_config so substitution reads a consistent snapshot
_current_env: dict[str, str] = {}


class ServerConfig(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind host")
    # 0 binds an ephemeral port (used by tests)
    port: int = Field(default=3000, ge=0, le=65535, description="Bind port")
    api_prefix: str = Field(default="/api/issues", description="Path prefix; project name follows it")

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = "/" + value.strip().strip("/")
        if value == "/":
            raise ValueError("api_prefix must not be empty")
        return value


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    access_log: bool = Field(default=False, description="Log one line per HTTP request")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "APP_ENV"),
        description="Deployment name, logged at startup",
    )
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with environment values."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _without_env_overrides(section: dict[str, Any], env_prefix: str) -> dict[str, Any]:
    """Drop YAML keys that are also set in the environment, so env wins."""
    return {k: v for k, v in section.items() if f"{env_prefix}{k}".upper() not in _current_env}


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file is not an error: defaults and environment apply.
    """
    global _current_env

    _current_env = {k.upper(): v for k, v in os.environ.items()}

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    raw = _substitute_env(raw)

    server = ServerConfig(**_without_env_overrides(raw.get("server") or {}, "SERVER_"))
    logging = LoggingConfig(**_without_env_overrides(raw.get("logging") or {}, "LOGGING_"))

    extra: dict[str, Any] = {}
    environment = _current_env.get("APP_ENV") or raw.get("environment")
    if environment:
        extra["environment"] = str(environment)

    return AppConfig(server=server, logging=logging, **extra)
