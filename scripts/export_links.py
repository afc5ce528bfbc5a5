#!/usr/bin/env python3
"""
Dump the active data source (categories with their links) as JSON.

Usage:
  python scripts/export_links.py [--output links.json]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from linkhub.core.config import get_settings
from linkhub.core.log import configure_logging
from linkhub.services import data_service


def export() -> dict:
    categories = data_service.get_categories()
    links = data_service.get_links()
    return {
        "categories": [c.to_dict() for c in categories],
        "links": [link.to_dict() for link in links],
    }


def main() -> None:
    ap = argparse.ArgumentParser(description="Export categories and links from the configured data source")
    ap.add_argument("--output", help="Write to this file instead of stdout")
    args = ap.parse_args()

    configure_logging(get_settings().log_level)
    payload = json.dumps(export(), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"OK: exported to {args.output}")
    else:
        print(payload)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
