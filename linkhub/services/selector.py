"""Pick, build and cache the repository for the configured data source."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from linkhub.core.config import Settings, get_settings
from linkhub.core.errors import StorageUnavailable
from linkhub.repositories.base import DataRepository, HealthCheckable
from linkhub.repositories.local_storage import LocalRepository

logger = logging.getLogger(__name__)

LOCAL = "local"
POSTGRES = "postgres"
MONGODB = "mongodb"
FIREBASE = "firebase"

KINDS = (LOCAL, POSTGRES, MONGODB, FIREBASE)
_ALIASES = {
    "relational": POSTGRES,
    "postgresql": POSTGRES,
    "sql": POSTGRES,
    "document": MONGODB,
    "mongo": MONGODB,
    "firestore": FIREBASE,
}

RepositoryFactory = Callable[[Settings], DataRepository]


def resolve_kind(value: str | None) -> str:
    """Normalise the configured data source; unset or unknown means local."""
    raw = (value or "").strip().lower()
    if not raw:
        return LOCAL
    kind = _ALIASES.get(raw, raw)
    if kind not in KINDS:
        logger.warning("Unknown DATA_SOURCE_TYPE %r, using the local data source", value)
        return LOCAL
    return kind


def _local(settings: Settings) -> DataRepository:
    return LocalRepository(settings.local_store_path)


def _postgres(settings: Settings) -> DataRepository:
    from linkhub.repositories.sql_repository import SQLRepository

    return SQLRepository(settings)


def _mongodb(settings: Settings) -> DataRepository:
    from linkhub.repositories.mongo_repository import MongoRepository

    return MongoRepository(settings)


def _firebase(settings: Settings) -> DataRepository:
    from linkhub.repositories.firestore_repository import FirestoreRepository

    return FirestoreRepository(settings)


DEFAULT_FACTORIES: Dict[str, RepositoryFactory] = {
    LOCAL: _local,
    POSTGRES: _postgres,
    MONGODB: _mongodb,
    FIREBASE: _firebase,
}


class ServiceSelector:
    """Hands out one live repository per process.

    Construction errors (ConfigurationError, StorageUnavailable) propagate to
    the caller. A cached networked repository is health-checked before reuse;
    when the probe fails it is closed and rebuilt once.
    """

    def __init__(
        self,
        settings_provider: Callable[[], Settings] = get_settings,
        factories: Optional[Dict[str, RepositoryFactory]] = None,
        *,
        cache: bool = True,
    ) -> None:
        self._settings_provider = settings_provider
        self._factories = dict(factories or DEFAULT_FACTORIES)
        self._cache = cache
        self._lock = threading.Lock()
        self._instance: Optional[DataRepository] = None
        self._kind: Optional[str] = None

    @property
    def kind(self) -> Optional[str]:
        return self._kind

    def _construct(self, kind: str, settings: Settings) -> DataRepository:
        logger.info("Initializing %s data service", kind)
        try:
            repo = self._factories[kind](settings)
        except Exception:
            logger.exception("Failed to initialize the %s data service", kind)
            raise
        logger.info("%s data service ready", kind)
        return repo

    def _drop(self) -> None:
        instance, self._instance, self._kind = self._instance, None, None
        if instance is not None:
            try:
                instance.close()
            except Exception:  # pragma: no cover - best effort
                logger.warning("Error while closing %s data service", type(instance).__name__, exc_info=True)

    def get(self) -> DataRepository:
        settings = self._settings_provider()
        kind = resolve_kind(settings.data_source_type)
        with self._lock:
            if self._instance is not None and self._kind != kind:
                self._drop()
            cached = self._instance

        # probes are network round trips; they run without holding the lock
        if cached is not None:
            if not isinstance(cached, HealthCheckable):
                return cached
            try:
                cached.health_check()
                return cached
            except StorageUnavailable as exc:
                logger.warning("Health check failed for cached %s data service, reconnecting: %s", kind, exc)
            with self._lock:
                if self._instance is cached:
                    self._drop()
            repo = self._construct(kind, settings)
            try:
                if isinstance(repo, HealthCheckable):
                    repo.health_check()
            except Exception:
                repo.close()
                raise
        else:
            repo = self._construct(kind, settings)

        if not self._cache:
            return repo
        with self._lock:
            if self._instance is not None and self._kind == kind:
                # another caller cached a live instance first
                winner = self._instance
            else:
                self._drop()
                self._instance, self._kind = repo, kind
                return repo
        if winner is not repo:
            repo.close()
        return winner

    def reset(self) -> None:
        with self._lock:
            self._drop()


_selector = ServiceSelector()


def get_data_service() -> DataRepository:
    return _selector.get()


def reset_data_service() -> None:
    """Close and forget the cached repository (config reload, tests)."""
    _selector.reset()
