"""Utility script to create the categories/links schema."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from linkhub.core.errors import ConfigurationError

from .session import Base, build_engine, resolve_database_url
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all() -> None:
    engine = build_engine(resolve_database_url())
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except (ConfigurationError, SQLAlchemyError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
