"""
Configuration helpers for the Link Hub backend.

Exposes a frozen Settings object that reads environment variables (data source
type, connection parameters for every backend, local store path, logging) so
that repositories/routers do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_LOCAL_STORE = Path(__file__).resolve().parents[1] / "data.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    log_level: str
    data_source_type: str
    local_store_path: str
    postgres_connection_string: str
    postgres_host: str
    postgres_port: int | None
    postgres_user: str
    postgres_password: str
    postgres_db: str
    mongodb_uri: str
    mongodb_db_name: str
    firestore_project_id: str
    firestore_credentials_file: str
    cors_origins: tuple[str, ...]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int | None = None) -> int | None:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip().rstrip("/") for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        data_source_type=(os.getenv("DATA_SOURCE_TYPE") or "").strip().lower(),
        local_store_path=os.getenv("LOCAL_STORE_PATH") or str(DEFAULT_LOCAL_STORE),
        postgres_connection_string=(os.getenv("POSTGRES_CONNECTION_STRING") or "").strip(),
        postgres_host=(os.getenv("POSTGRES_HOST") or "").strip(),
        postgres_port=_int(os.getenv("POSTGRES_PORT")),
        postgres_user=os.getenv("POSTGRES_USER", ""),
        postgres_password=os.getenv("POSTGRES_PASSWORD", ""),
        postgres_db=(os.getenv("POSTGRES_DB") or "").strip(),
        mongodb_uri=(os.getenv("MONGODB_URI") or "").strip(),
        mongodb_db_name=(os.getenv("MONGODB_DB_NAME") or "").strip(),
        firestore_project_id=(os.getenv("FIRESTORE_PROJECT_ID") or "").strip(),
        firestore_credentials_file=(os.getenv("FIRESTORE_CREDENTIALS_FILE") or "").strip(),
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
    )
