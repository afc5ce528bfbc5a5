"""Errors raised by repositories, the service selector and the facade.

"Not found" is not an error: lookups return None and update/delete return
None/False when the id does not exist.
"""
from __future__ import annotations


class LinkHubError(Exception):
    """Base exception for the data layer."""


class ConfigurationError(LinkHubError):
    """Required connection parameters for the selected backend are missing."""


class StorageUnavailable(LinkHubError, ConnectionError):
    """The store could not be reached (connect attempt or liveness probe failed)."""


class QueryError(LinkHubError):
    """An individual CRUD statement failed."""


class PolicyViolation(LinkHubError):
    """A networked backend was requested from browser-delivered code."""
