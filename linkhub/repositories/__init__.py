"""
Persistence adapters.

Each module implements the DataRepository interface against one store (local
JSON file, SQL, MongoDB, Firestore). Networked adapters are imported lazily by
the service selector so that the local adapter can be used without their
drivers installed.
"""

from .base import DataRepository, HealthCheckable
from .local_storage import LocalRepository

__all__ = ["DataRepository", "HealthCheckable", "LocalRepository"]
