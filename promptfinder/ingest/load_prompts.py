#!/usr/bin/env python3
# ================================================================
# load_prompts.py
# ----------------------------------------------------------------
# Loads prompt records from YAML or JSON files into the SQLite store
# used by the search service.
#
# Input files hold either a list of prompts or {"prompts": [...]}.
# Each prompt needs an "id"; the other keys follow the stored schema:
#   title, description, text, category, tags, isPrivate, userId
#
# Usage:
#   python -m promptfinder.ingest.load_prompts --src prompts.yaml [more.json] --db data/db/prompts.db
# ================================================================

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from promptfinder.settings import settings
from promptfinder.store.sqlite import SqliteRecordStore


def read_prompts(path: Path) -> List[Dict[str, Any]]:
    """Parse one YAML/JSON file (JSON is valid YAML) into prompt dicts."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    if isinstance(data, dict):
        data = data.get("prompts", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of prompts")
    prompts = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or not item.get("id"):
            raise ValueError(f"{path}: entry {i} has no id")
        prompts.append(item)
    return prompts


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Load prompts into the search store")
    ap.add_argument("--src", nargs="+", required=True, help="One or more YAML/JSON prompt files")
    ap.add_argument("--db", default=settings.DB_PATH, help="SQLite DB path")
    args = ap.parse_args(argv)

    prompts: List[Dict[str, Any]] = []
    for src in args.src:
        p = Path(src)
        try:
            prompts.extend(read_prompts(p))
        except (OSError, yaml.YAMLError, ValueError) as e:
            print(f"ERROR: cannot load {p}: {e}", file=sys.stderr, flush=True)
            return 2

    store = SqliteRecordStore(args.db)
    store.init_schema()
    written = store.upsert_records(prompts)
    print(f"✓ Loaded {written} prompts into {args.db} (total rows: {store.count()})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
