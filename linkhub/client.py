"""
Browser-safe entry point.

Code shipped to an untrusted client may only use the local data source, so this
module imports nothing but the local repository: no database driver, no
credentials. Building the client service while a networked backend is
configured fails immediately with PolicyViolation; networked data is reachable
only through the HTTP API.
"""
from __future__ import annotations

from linkhub.core.config import Settings, get_settings
from linkhub.core.errors import PolicyViolation
from linkhub.repositories.local_storage import LocalRepository

LOCAL = "local"


def build_client_service(settings: Settings | None = None) -> LocalRepository:
    settings = settings or get_settings()
    kind = (settings.data_source_type or LOCAL).strip().lower()
    if kind != LOCAL:
        raise PolicyViolation(
            f"Client-side data access for non-local data source type {kind!r} is prohibited; "
            "use the HTTP API instead."
        )
    return LocalRepository(settings.local_store_path)
