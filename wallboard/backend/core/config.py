"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
No hardcoded values in code; all configuration comes from these sources.

Secrets (.env):
    WALL_PASSWORD, DB_PASSWORD, OPENAI_API_KEY, BITLY_TOKEN, SHORTIO_API_KEY

Settings (YAML):
    application.yaml   - App identity, server, cors, pagination, walls
    database.yaml      - Database connection settings
    logging.yaml       - Logging configuration
    features.yaml      - Feature flags
    sharing.yaml       - Short codes, crawler detection, external shortener
    moderation.yaml    - Friend-board content classifier
    concurrency.yaml   - Semaphore sizes
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from wallboard.backend.core.config_schema import (
    ApplicationSchema,
    ConcurrencySchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    ModerationSchema,
    SharingSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only passwords, tokens, and keys."""

    wall_password: str
    db_password: str = ""
    openai_api_key: str | None = None
    bitly_token: str | None = None
    shortio_api_key: str | None = None

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
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")
        self._sharing = _load_validated(SharingSchema, "sharing.yaml")
        self._moderation = _load_validated(ModerationSchema, "moderation.yaml")
        self._concurrency = _load_validated(ConcurrencySchema, "concurrency.yaml")

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
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features

    @property
    def sharing(self) -> SharingSchema:
        """Short-link and preview settings."""
        return self._sharing

    @property
    def moderation(self) -> ModerationSchema:
        """Content moderation settings."""
        return self._moderation

    @property
    def concurrency(self) -> ConcurrencySchema:
        """Concurrency settings (semaphores)."""
        return self._concurrency


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url(async_driver: bool = True) -> str:
    """
    Construct database URL from YAML config and secrets.

    SQLite drivers take the database name as a file path and ignore
    host, user and password.

    Args:
        async_driver: Keep the configured async driver if True, strip the
            "+driver" suffix for sync tooling if False.

    Returns:
        Database connection URL string.
    """
    db = get_app_config().database
    driver = db.driver if async_driver else db.driver.split("+", 1)[0]

    if driver.startswith("sqlite"):
        return f"{driver}:///{db.name}"

    password = get_settings().db_password
    return f"{driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"
