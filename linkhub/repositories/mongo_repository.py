"""MongoDB data access (the "mongodb" data source).

Documents live in the ``categories`` and ``links`` collections. The public id
is the hex form of the document ``_id``; strings that are not valid ObjectIds
are treated as unknown ids.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from linkhub.core.config import Settings, get_settings
from linkhub.core.errors import ConfigurationError, QueryError, StorageUnavailable
from linkhub.core.log import redact_dsn
from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem

logger = logging.getLogger(__name__)

CATEGORIES_COLLECTION = "categories"
LINKS_COLLECTION = "links"

# topologies where multi-document transactions are available
_TRANSACTIONAL_TOPOLOGIES = {"ReplicaSetWithPrimary", "Sharded", "LoadBalanced"}


def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _category(doc: dict) -> Category:
    return Category.from_dict(doc, id=str(doc["_id"]))


def _link(doc: dict) -> LinkItem:
    return LinkItem.from_dict(doc, id=str(doc["_id"]))


class MongoRepository:
    """CRUD helpers wrapping one MongoClient."""

    def __init__(self, settings: Settings | None = None, *, client: MongoClient | None = None) -> None:
        settings = settings or get_settings()
        if not settings.mongodb_uri or not settings.mongodb_db_name:
            raise ConfigurationError(
                "MONGODB_URI and MONGODB_DB_NAME must be configured to use the mongodb backend."
            )
        try:
            self._client = client if client is not None else MongoClient(settings.mongodb_uri)
        except PyMongoError as exc:
            raise ConfigurationError(f"Invalid MongoDB configuration: {exc}") from exc
        self._db = self._client[settings.mongodb_db_name]
        logger.info(
            "MongoRepository configured for %s (db=%s)",
            redact_dsn(settings.mongodb_uri),
            settings.mongodb_db_name,
        )

    @property
    def categories(self):
        return self._db[CATEGORIES_COLLECTION]

    @property
    def links(self):
        return self._db[LINKS_COLLECTION]

    @contextmanager
    def _translate(self) -> Iterator[None]:
        try:
            yield
        except (ConnectionFailure, ServerSelectionTimeoutError) as exc:
            raise StorageUnavailable(f"MongoDB unreachable: {exc}") from exc
        except PyMongoError as exc:
            raise QueryError(f"MongoDB operation failed: {exc}") from exc

    def health_check(self) -> None:
        with self._translate():
            self._client.admin.command("ping")

    def close(self) -> None:
        self._client.close()

    def supports_transactions(self) -> bool:
        # the client connects lazily; the topology is Unknown until the first round trip
        if self._client.topology_description.topology_type_name == "Unknown":
            self._client.admin.command("ping")
        return self._client.topology_description.topology_type_name in _TRANSACTIONAL_TOPOLOGIES

    # -------------------------- categories --------------------------
    def list_categories(self) -> list[Category]:
        with self._translate():
            return [_category(doc) for doc in self.categories.find()]

    def get_category(self, category_id: str) -> Optional[Category]:
        oid = _object_id(category_id)
        if oid is None:
            return None
        with self._translate():
            doc = self.categories.find_one({"_id": oid})
        return _category(doc) if doc else None

    def add_category(self, draft: CategoryDraft) -> Category:
        with self._translate():
            result = self.categories.insert_one(draft.to_document())
        return draft.with_id(str(result.inserted_id))

    def update_category(self, category: Category) -> Optional[Category]:
        oid = _object_id(category.id)
        if oid is None:
            return None
        with self._translate():
            result = self.categories.replace_one({"_id": oid}, category.to_document())
        return category if result.matched_count else None

    def delete_category(self, category_id: str) -> bool:
        oid = _object_id(category_id)
        if oid is None:
            return False
        with self._translate():
            if not self.supports_transactions():
                logger.warning(
                    "MongoDB deployment has no transaction support, deleting category %s and its links sequentially",
                    category_id,
                )
                self.links.delete_many({"categoryId": category_id})
                return self.categories.delete_one({"_id": oid}).deleted_count > 0

            def _cascade(session) -> int:
                self.links.delete_many({"categoryId": category_id}, session=session)
                return self.categories.delete_one({"_id": oid}, session=session).deleted_count

            with self._client.start_session() as session:
                deleted = session.with_transaction(_cascade)
            return deleted > 0

    # -------------------------- links --------------------------
    def list_links(self) -> list[LinkItem]:
        with self._translate():
            return [_link(doc) for doc in self.links.find()]

    def list_links_by_category(self, category_id: str) -> list[LinkItem]:
        with self._translate():
            return [_link(doc) for doc in self.links.find({"categoryId": category_id})]

    def get_link(self, link_id: str) -> Optional[LinkItem]:
        oid = _object_id(link_id)
        if oid is None:
            return None
        with self._translate():
            doc = self.links.find_one({"_id": oid})
        return _link(doc) if doc else None

    def add_link(self, draft: LinkDraft) -> LinkItem:
        with self._translate():
            result = self.links.insert_one(draft.to_document())
        return draft.with_id(str(result.inserted_id))

    def update_link(self, link: LinkItem) -> Optional[LinkItem]:
        oid = _object_id(link.id)
        if oid is None:
            return None
        with self._translate():
            result = self.links.replace_one({"_id": oid}, link.to_document())
        return link if result.matched_count else None

    def delete_link(self, link_id: str) -> bool:
        oid = _object_id(link_id)
        if oid is None:
            return False
        with self._translate():
            return self.links.delete_one({"_id": oid}).deleted_count > 0
