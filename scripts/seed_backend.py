#!/usr/bin/env python3
"""
Copy the local JSON dataset into the configured data source.

Usage:
  DATA_SOURCE_TYPE=postgres POSTGRES_CONNECTION_STRING=... python scripts/seed_backend.py [--source data.json] [--create-tables]

Categories get new ids in the target store; links are re-pointed at the new ids.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the linkhub package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from linkhub.core.config import get_settings
from linkhub.core.log import configure_logging
from linkhub.domain.entities import CategoryDraft, LinkDraft
from linkhub.repositories.local_storage import LocalRepository
from linkhub.services.selector import LOCAL, get_data_service, resolve_kind


def seed(source: LocalRepository, create_tables: bool = False) -> tuple[int, int]:
    target = get_data_service()
    if create_tables and hasattr(target, "ensure_schema"):
        target.ensure_schema()

    id_map: dict[str, str] = {}
    for category in source.list_categories():
        draft = CategoryDraft(name=category.name, description=category.description, icon=category.icon)
        id_map[category.id] = target.add_category(draft).id

    links = 0
    for link in source.list_links():
        new_category = id_map.get(link.category_id)
        if not new_category:
            print(f"  skipping link {link.title!r}: unknown category {link.category_id}")
            continue
        target.add_link(
            LinkDraft(
                title=link.title,
                url=link.url,
                category_id=new_category,
                description=link.description,
                icon=link.icon,
                icon_source=link.icon_source,
            )
        )
        links += 1
    return len(id_map), links


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the configured data source from a local JSON store")
    ap.add_argument("--source", help="Local JSON store (default: LOCAL_STORE_PATH)")
    ap.add_argument("--create-tables", action="store_true", help="Create the SQL schema first (postgres only)")
    args = ap.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    if resolve_kind(settings.data_source_type) == LOCAL:
        raise SystemExit("DATA_SOURCE_TYPE points at the local store; nothing to seed")

    source = LocalRepository(args.source or settings.local_store_path)
    categories, links = seed(source, create_tables=args.create_tables)
    print("OK: data source seeded")
    print(f"  Categories: {categories}")
    print(f"  Links: {links}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
