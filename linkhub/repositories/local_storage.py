"""
JSON-file persistence adapter (the "local" data source).

The file holds two slots, ``linkhub_categories`` and ``linkhub_links``, each a
JSON array. A missing slot is seeded with the default dataset on first use.
Every operation loads the whole slot, mutates it in memory and writes it back.

Deleting a category rewrites the links slot before the categories slot. There
is no transaction: a crash between the two writes leaves the category in place
with its links already gone.

The file lock is per process. Several workers or scripts sharing one
``LOCAL_STORE_PATH`` are not coordinated and can lose each other's writes;
run a single worker on the local data source.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Optional

from linkhub.core.config import get_settings
from linkhub.core.errors import QueryError, StorageUnavailable
from linkhub.domain.entities import (
    DEFAULT_CATEGORIES,
    DEFAULT_LINKS,
    Category,
    CategoryDraft,
    LinkDraft,
    LinkItem,
)

logger = logging.getLogger(__name__)

CATEGORIES_KEY = "linkhub_categories"
LINKS_KEY = "linkhub_links"

# one lock per file path, shared by every repository instance in the process
_locks: dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = str(path.resolve())
    with _locks_guard:
        return _locks.setdefault(key, threading.RLock())


def _next_id(existing: set[str]) -> str:
    candidate = int(time.time() * 1000)
    while str(candidate) in existing:
        candidate += 1
    return str(candidate)


class LocalRepository:
    """Key-value JSON store with the full CRUD contract."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or get_settings().local_store_path)
        self._lock = _lock_for(self.path)
        self._seed_missing_slots()

    # -------------------------- raw store --------------------------
    def load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                text = f.read()
        except OSError as exc:
            raise StorageUnavailable(f"Cannot read local store {self.path}: {exc}") from exc
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise QueryError(f"Local store {self.path} is not valid JSON: {exc}") from exc
        return data if isinstance(data, dict) else {}

    def save(self, db: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(db, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot write local store {self.path}: {exc}") from exc

    def _seed_missing_slots(self) -> None:
        with self._lock:
            db = self.load()
            seeded = False
            if db.get(CATEGORIES_KEY) is None:
                db[CATEGORIES_KEY] = [c.to_dict() for c in DEFAULT_CATEGORIES]
                seeded = True
            if db.get(LINKS_KEY) is None:
                db[LINKS_KEY] = [link.to_dict() for link in DEFAULT_LINKS]
                seeded = True
            if seeded:
                logger.info("Seeded local store %s with default data", self.path)
                self.save(db)

    def _read_slot(self, key: str) -> list[dict]:
        db = self.load()
        rows = db.get(key)
        if rows is None:
            defaults = DEFAULT_CATEGORIES if key == CATEGORIES_KEY else DEFAULT_LINKS
            return [item.to_dict() for item in defaults]
        return list(rows)

    def _write_slot(self, key: str, rows: list[dict]) -> None:
        db = self.load()
        db[key] = rows
        self.save(db)

    # -------------------------- categories --------------------------
    def list_categories(self) -> list[Category]:
        with self._lock:
            return [Category.from_dict(row) for row in self._read_slot(CATEGORIES_KEY)]

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.list_categories() if c.id == category_id), None)

    def add_category(self, draft: CategoryDraft) -> Category:
        with self._lock:
            rows = self._read_slot(CATEGORIES_KEY)
            category = draft.with_id(_next_id({str(r.get("id")) for r in rows}))
            rows.append(category.to_dict())
            self._write_slot(CATEGORIES_KEY, rows)
            return category

    def update_category(self, category: Category) -> Optional[Category]:
        with self._lock:
            rows = self._read_slot(CATEGORIES_KEY)
            for index, row in enumerate(rows):
                if str(row.get("id")) == category.id:
                    rows[index] = category.to_dict()
                    self._write_slot(CATEGORIES_KEY, rows)
                    return category
            return None

    def delete_category(self, category_id: str) -> bool:
        with self._lock:
            links = self._read_slot(LINKS_KEY)
            kept_links = [row for row in links if str(row.get("categoryId")) != category_id]
            self._write_slot(LINKS_KEY, kept_links)

            rows = self._read_slot(CATEGORIES_KEY)
            kept = [row for row in rows if str(row.get("id")) != category_id]
            if len(kept) == len(rows):
                return False
            self._write_slot(CATEGORIES_KEY, kept)
            return True

    # -------------------------- links --------------------------
    def list_links(self) -> list[LinkItem]:
        with self._lock:
            return [LinkItem.from_dict(row) for row in self._read_slot(LINKS_KEY)]

    def list_links_by_category(self, category_id: str) -> list[LinkItem]:
        return [link for link in self.list_links() if link.category_id == category_id]

    def get_link(self, link_id: str) -> Optional[LinkItem]:
        return next((link for link in self.list_links() if link.id == link_id), None)

    def add_link(self, draft: LinkDraft) -> LinkItem:
        with self._lock:
            rows = self._read_slot(LINKS_KEY)
            link = draft.with_id(_next_id({str(r.get("id")) for r in rows}))
            rows.append(link.to_dict())
            self._write_slot(LINKS_KEY, rows)
            return link

    def update_link(self, link: LinkItem) -> Optional[LinkItem]:
        with self._lock:
            rows = self._read_slot(LINKS_KEY)
            for index, row in enumerate(rows):
                if str(row.get("id")) == link.id:
                    rows[index] = link.to_dict()
                    self._write_slot(LINKS_KEY, rows)
                    return link
            return None

    def delete_link(self, link_id: str) -> bool:
        with self._lock:
            rows = self._read_slot(LINKS_KEY)
            kept = [row for row in rows if str(row.get("id")) != link_id]
            if len(kept) == len(rows):
                return False
            self._write_slot(LINKS_KEY, kept)
            return True

    def close(self) -> None:
        return None
