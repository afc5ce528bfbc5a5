"""Database helpers (engine/session export)."""

from .session import Base, build_engine, build_sessionmaker, get_session, resolve_database_url

__all__ = ["Base", "build_engine", "build_sessionmaker", "get_session", "resolve_database_url"]
