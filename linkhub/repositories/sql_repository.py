"""Relational data access backed by SQLAlchemy (the "postgres" data source)."""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import ArgumentError, DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from linkhub.core.config import Settings
from linkhub.core.errors import ConfigurationError, QueryError, StorageUnavailable
from linkhub.core.log import redact_dsn
from linkhub.db.models import CategoryRow, LinkRow
from linkhub.db.session import Base, build_engine, build_sessionmaker, get_session, resolve_database_url
from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem

logger = logging.getLogger(__name__)

# stored when a link has no icon source
NO_ICON_SOURCE = "none"


def _category(row: CategoryRow) -> Category:
    return Category(id=row.id, name=row.name, description=row.description, icon=row.icon)


def _link(row: LinkRow) -> LinkItem:
    return LinkItem(
        id=row.id,
        title=row.title,
        url=row.url,
        description=row.description,
        category_id=row.category_id,
        icon=row.icon,
        icon_source=row.icon_source,
    )


class SQLRepository:
    """CRUD helpers wrapping one SQLAlchemy engine (connection pool)."""

    def __init__(self, settings: Settings | None = None, *, url: str | URL | None = None) -> None:
        target = url or resolve_database_url(settings)
        try:
            self._engine = build_engine(target)
        except ArgumentError as exc:
            raise ConfigurationError(f"Invalid SQL connection settings: {exc}") from exc
        self._sessionmaker = build_sessionmaker(self._engine)
        logger.info("SQLRepository configured for %s", redact_dsn(str(target)))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            connection = self._engine.connect()
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"Cannot connect to the SQL database: {exc}") from exc
        try:
            with get_session(self._sessionmaker, connection) as session:
                yield session
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise StorageUnavailable(f"SQL connection lost: {exc}") from exc
            raise QueryError(f"SQL statement failed: {exc}") from exc
        except SQLAlchemyError as exc:
            raise QueryError(f"SQL statement failed: {exc}") from exc
        finally:
            connection.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(bind=self._engine)

    def health_check(self) -> None:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StorageUnavailable(f"SQL health check failed: {exc}") from exc

    def close(self) -> None:
        self._engine.dispose()

    # -------------------------- categories --------------------------
    def list_categories(self) -> list[Category]:
        with self._session() as session:
            return [_category(row) for row in session.execute(select(CategoryRow)).scalars().all()]

    def get_category(self, category_id: str) -> Optional[Category]:
        with self._session() as session:
            row = session.get(CategoryRow, category_id)
            return _category(row) if row else None

    def add_category(self, draft: CategoryDraft) -> Category:
        row = CategoryRow(id=str(uuid.uuid4()), name=draft.name, description=draft.description, icon=draft.icon)
        with self._session() as session:
            session.add(row)
            session.commit()
            return _category(row)

    def update_category(self, category: Category) -> Optional[Category]:
        with self._session() as session:
            row = session.get(CategoryRow, category.id)
            if not row:
                return None
            row.name = category.name
            row.description = category.description
            row.icon = category.icon
            session.commit()
            return _category(row)

    def delete_category(self, category_id: str) -> bool:
        with self._session() as session:
            with session.begin():
                session.execute(delete(LinkRow).where(LinkRow.category_id == category_id))
                result = session.execute(delete(CategoryRow).where(CategoryRow.id == category_id))
            return (result.rowcount or 0) > 0

    # -------------------------- links --------------------------
    def list_links(self) -> list[LinkItem]:
        with self._session() as session:
            return [_link(row) for row in session.execute(select(LinkRow)).scalars().all()]

    def list_links_by_category(self, category_id: str) -> list[LinkItem]:
        with self._session() as session:
            stmt = select(LinkRow).where(LinkRow.category_id == category_id)
            return [_link(row) for row in session.execute(stmt).scalars().all()]

    def get_link(self, link_id: str) -> Optional[LinkItem]:
        with self._session() as session:
            row = session.get(LinkRow, link_id)
            return _link(row) if row else None

    def add_link(self, draft: LinkDraft) -> LinkItem:
        row = LinkRow(
            id=str(uuid.uuid4()),
            title=draft.title,
            url=draft.url,
            description=draft.description,
            category_id=draft.category_id,
            icon=draft.icon,
            icon_source=draft.icon_source or NO_ICON_SOURCE,
        )
        with self._session() as session:
            session.add(row)
            session.commit()
            return _link(row)

    def update_link(self, link: LinkItem) -> Optional[LinkItem]:
        with self._session() as session:
            row = session.get(LinkRow, link.id)
            if not row:
                return None
            row.title = link.title
            row.url = link.url
            row.description = link.description
            row.category_id = link.category_id
            row.icon = link.icon
            row.icon_source = link.icon_source or NO_ICON_SOURCE
            session.commit()
            return _link(row)

    def delete_link(self, link_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(LinkRow).where(LinkRow.id == link_id))
            session.commit()
            return (result.rowcount or 0) > 0
