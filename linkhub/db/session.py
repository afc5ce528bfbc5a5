"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from linkhub.core.config import Settings, get_settings
from linkhub.core.errors import ConfigurationError

Base = declarative_base()

_PG_SCHEMES = ("postgres://", "postgresql://")
_PG_DRIVER = "postgresql+psycopg"


def resolve_database_url(settings: Settings | None = None) -> str | URL:
    """Connection string, or a URL built from the discrete POSTGRES_* settings."""
    settings = settings or get_settings()
    url = settings.postgres_connection_string
    if url:
        for scheme in _PG_SCHEMES:
            if url.startswith(scheme):
                return f"{_PG_DRIVER}://{url[len(scheme):]}"
        return url
    discrete = (
        settings.postgres_host,
        settings.postgres_port,
        settings.postgres_user,
        settings.postgres_password,
        settings.postgres_db,
    )
    if all(discrete):
        return URL.create(
            _PG_DRIVER,
            username=settings.postgres_user,
            password=settings.postgres_password,
            host=settings.postgres_host,
            port=settings.postgres_port,
            database=settings.postgres_db,
        )
    raise ConfigurationError(
        "POSTGRES_CONNECTION_STRING or all of POSTGRES_HOST, POSTGRES_PORT, POSTGRES_USER, "
        "POSTGRES_PASSWORD and POSTGRES_DB must be configured to use the postgres backend."
    )


def build_engine(url: str | URL) -> Engine:
    return create_engine(url, future=True, pool_pre_ping=True)


def build_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session(factory: sessionmaker, connection: Connection | None = None) -> Iterator[Session]:
    session: Session = factory(bind=connection) if connection is not None else factory()
    try:
        yield session
    finally:
        session.close()
