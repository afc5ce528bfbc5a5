"""Cloud Firestore data access (the "firebase" data source)."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from google.api_core import exceptions as gexc
from google.auth import exceptions as auth_exc
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from linkhub.core.config import Settings, get_settings
from linkhub.core.errors import ConfigurationError, QueryError, StorageUnavailable
from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem

logger = logging.getLogger(__name__)

CATEGORIES_COLLECTION = "categories"
LINKS_COLLECTION = "links"

_UNAVAILABLE = (
    gexc.ServiceUnavailable,
    gexc.DeadlineExceeded,
    gexc.RetryError,
    auth_exc.TransportError,
)


def _valid_id(value: str) -> bool:
    return bool(value) and "/" not in value


def _build_client(settings: Settings) -> firestore.Client:
    credentials = None
    if settings.firestore_credentials_file:
        try:
            credentials = service_account.Credentials.from_service_account_file(settings.firestore_credentials_file)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot load Firestore credentials from {settings.firestore_credentials_file}: {exc}"
            ) from exc
    try:
        return firestore.Client(project=settings.firestore_project_id, credentials=credentials)
    except auth_exc.DefaultCredentialsError as exc:
        raise ConfigurationError(f"No usable Google credentials for Firestore: {exc}") from exc


class FirestoreRepository:
    """CRUD helpers wrapping one Firestore client."""

    def __init__(self, settings: Settings | None = None, *, client: firestore.Client | None = None) -> None:
        settings = settings or get_settings()
        if not settings.firestore_project_id:
            raise ConfigurationError("FIRESTORE_PROJECT_ID must be configured to use the firebase backend.")
        self._client = client if client is not None else _build_client(settings)
        logger.info("FirestoreRepository configured for project %s", settings.firestore_project_id)

    @property
    def categories(self):
        return self._client.collection(CATEGORIES_COLLECTION)

    @property
    def links(self):
        return self._client.collection(LINKS_COLLECTION)

    @contextmanager
    def _translate(self) -> Iterator[None]:
        try:
            yield
        except _UNAVAILABLE as exc:
            raise StorageUnavailable(f"Firestore unreachable: {exc}") from exc
        except gexc.GoogleAPICallError as exc:
            raise QueryError(f"Firestore operation failed: {exc}") from exc

    def health_check(self) -> None:
        with self._translate():
            list(self.categories.limit(1).stream())

    def close(self) -> None:
        self._client.close()

    # -------------------------- categories --------------------------
    def list_categories(self) -> list[Category]:
        with self._translate():
            return [Category.from_dict(snap.to_dict() or {}, id=snap.id) for snap in self.categories.stream()]

    def get_category(self, category_id: str) -> Optional[Category]:
        if not _valid_id(category_id):
            return None
        with self._translate():
            snap = self.categories.document(category_id).get()
        return Category.from_dict(snap.to_dict() or {}, id=snap.id) if snap.exists else None

    def add_category(self, draft: CategoryDraft) -> Category:
        with self._translate():
            _, ref = self.categories.add(draft.to_document())
        return draft.with_id(ref.id)

    def update_category(self, category: Category) -> Optional[Category]:
        if not _valid_id(category.id):
            return None
        ref = self.categories.document(category.id)
        with self._translate():
            if not ref.get().exists:
                return None
            ref.set(category.to_document())
        return category

    def delete_category(self, category_id: str) -> bool:
        if not _valid_id(category_id):
            return False
        ref = self.categories.document(category_id)
        with self._translate():
            if not ref.get().exists:
                return False
            # single batch: the category and its links go together or not at all
            batch = self._client.batch()
            query = self.links.where(filter=FieldFilter("categoryId", "==", category_id))
            for snap in query.stream():
                batch.delete(snap.reference)
            batch.delete(ref)
            batch.commit()
        return True

    # -------------------------- links --------------------------
    def list_links(self) -> list[LinkItem]:
        with self._translate():
            return [LinkItem.from_dict(snap.to_dict() or {}, id=snap.id) for snap in self.links.stream()]

    def list_links_by_category(self, category_id: str) -> list[LinkItem]:
        query = self.links.where(filter=FieldFilter("categoryId", "==", category_id))
        with self._translate():
            return [LinkItem.from_dict(snap.to_dict() or {}, id=snap.id) for snap in query.stream()]

    def get_link(self, link_id: str) -> Optional[LinkItem]:
        if not _valid_id(link_id):
            return None
        with self._translate():
            snap = self.links.document(link_id).get()
        return LinkItem.from_dict(snap.to_dict() or {}, id=snap.id) if snap.exists else None

    def add_link(self, draft: LinkDraft) -> LinkItem:
        with self._translate():
            _, ref = self.links.add(draft.to_document())
        return draft.with_id(ref.id)

    def update_link(self, link: LinkItem) -> Optional[LinkItem]:
        if not _valid_id(link.id):
            return None
        ref = self.links.document(link.id)
        with self._translate():
            if not ref.get().exists:
                return None
            ref.set(link.to_document())
        return link

    def delete_link(self, link_id: str) -> bool:
        if not _valid_id(link_id):
            return False
        ref = self.links.document(link_id)
        with self._translate():
            if not ref.get().exists:
                return False
            ref.delete()
        return True
