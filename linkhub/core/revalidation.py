"""Cache invalidation hooks.

Downstream consumers that materialise a view of a collection (an edge cache,
a rendered page) register a callback for a path; mutating actions call
``revalidate_path`` after a successful write. Hooks are per process: writes
made elsewhere do not fire them.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class _Revalidator:
    def __init__(self) -> None:
        self._hooks: Dict[str, List[Callable[[], None]]] = {}
        self._lock = threading.Lock()

    def register(self, path: str, callback: Callable[[], None]) -> None:
        with self._lock:
            hooks = self._hooks.setdefault(path, [])
            if callback not in hooks:
                hooks.append(callback)

    def unregister(self, path: str, callback: Callable[[], None]) -> None:
        with self._lock:
            hooks = self._hooks.get(path) or []
            if callback in hooks:
                hooks.remove(callback)

    def revalidate(self, path: str) -> int:
        with self._lock:
            hooks = list(self._hooks.get(path) or [])
        for hook in hooks:
            hook()
        logger.debug("revalidated %s (%d hooks)", path, len(hooks))
        return len(hooks)


_revalidator = _Revalidator()


def on_revalidate(path: str, callback: Callable[[], None]) -> None:
    _revalidator.register(path, callback)


def remove_hook(path: str, callback: Callable[[], None]) -> None:
    _revalidator.unregister(path, callback)


def revalidate_path(path: str) -> int:
    """Run every hook registered for ``path``; returns how many ran."""
    return _revalidator.revalidate(path)
