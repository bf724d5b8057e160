"""
Configuration Management.

Secrets (config/.env):
    DB_PASSWORD, JWT_SECRET

Settings (config/settings/*.yaml), one validated section per file:
    application   - identity, server, cors, timeouts, client
    database      - PostgreSQL connection and pool
    logging       - level, format, handlers
    features      - feature flags
    security      - JWT and secret validation

Relative paths found in settings (log file, token file) are anchored at the
project root, which is the nearest directory holding a .project_root file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from voicenotes.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)

SETTINGS_DIR = Path("config") / "settings"
ENV_FILE = Path("config") / ".env"


def find_project_root() -> Path:
    """Walk up from the working directory to the .project_root marker."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def resolve_project_path(path: str | Path) -> Path:
    """Return absolute paths unchanged and anchor relative ones at the project root."""
    path = Path(path)
    if path.is_absolute():
        return path
    return find_project_root() / path


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one file from config/settings/ as a dict (empty file gives {})."""
    config_path = find_project_root() / SETTINGS_DIR / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets. Nothing else belongs in config/.env."""

    db_password: str
    jwt_secret: str

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_section(schema_cls: type[BaseModel], filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """
    All YAML settings, validated when loaded.

    A missing key, a wrong type or an unknown field in any file fails here
    with the file name in the message.
    """

    SECTIONS: dict[str, tuple[type[BaseModel], str]] = {
        "application": (ApplicationSchema, "application.yaml"),
        "database": (DatabaseSchema, "database.yaml"),
        "logging": (LoggingSchema, "logging.yaml"),
        "features": (FeaturesSchema, "features.yaml"),
        "security": (SecuritySchema, "security.yaml"),
    }

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    features: FeaturesSchema
    security: SecuritySchema

    def __init__(self) -> None:
        for section, (schema_cls, filename) in self.SECTIONS.items():
            setattr(self, section, _load_section(schema_cls, filename))


@lru_cache
def get_settings() -> Settings:
    """Cached secrets, read from config/.env under the project root."""
    return Settings(_env_file=str(find_project_root() / ENV_FILE))


@lru_cache
def get_app_config() -> AppConfig:
    """Cached application configuration."""
    return AppConfig()


def get_database_url(async_driver: bool = True) -> str:
    """
    Build the PostgreSQL URL from database.yaml and DB_PASSWORD.

    Args:
        async_driver: asyncpg URL for the application, plain postgresql for tools.
    """
    db = get_app_config().database
    password = get_settings().db_password
    driver = "postgresql+asyncpg" if async_driver else "postgresql"
    return f"{driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"


def get_api_base_url() -> str:
    """URL of the versioned API on the configured server, e.g. http://127.0.0.1:8000/api/v1."""
    app = get_app_config().application
    return f"http://{app.server.host}:{app.server.port}{app.api_prefix}"
