"""
Configuration Management.

Secrets come from config/.env (or the process environment), everything
else from config/settings/*.yaml. Nothing is hardcoded in code.

Secrets (.env):
    DB_PASSWORD, JWT_SECRET

Settings (YAML):
    application.yaml - App identity, server, cors, pagination
    database.yaml    - PostgreSQL connection and pool settings
    logging.yaml     - Logging configuration
    security.yaml    - JWT and password policy
    features.yaml    - Feature flags
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudnotes.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    config_path = find_project_root() / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only passwords, tokens, and keys."""

    db_password: str
    jwt_secret: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each file is validated against its schema when the config is built;
    properties return the typed schema instances.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._security = _load_validated(SecuritySchema, "security.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def security(self) -> SecuritySchema:
        """Security settings."""
        return self._security

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """
    Construct the asyncpg database URL from YAML config and secrets.

    A DATABASE_URL environment variable, when set, takes precedence so
    containers and test runs can point at another database.
    """
    override = os.environ.get("DATABASE_URL")
    if override:
        return override

    db = get_app_config().database
    password = get_settings().db_password
    return f"postgresql+asyncpg://{db.user}:{password}@{db.host}:{db.port}/{db.name}"
