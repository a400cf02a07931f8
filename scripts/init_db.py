"""
Create the customers table ahead of the first request (idempotent).

The request handler runs the same check on every call; this script just lets
a deploy fail fast on a bad DATABASE_URL instead of on the first page view.

Usage:
  python scripts/init_db.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.registry.modules.customers.service import ensure_schema  # noqa: E402


def init_schema(*, database_url: str | None = None) -> None:
    db_url = (database_url or os.environ.get("DATABASE_URL") or "").strip()
    if not db_url:
        raise RuntimeError("Missing required environment variable DATABASE_URL.")
    engine = create_engine(db_url, future=True, pool_pre_ping=True)
    try:
        with Session(engine) as s, s.begin():
            ensure_schema(s)
    finally:
        engine.dispose()


def main() -> None:
    load_dotenv()
    try:
        init_schema()
    except Exception as e:
        print(f"Schema init failed: {e}", flush=True)
        sys.exit(1)
    print("customers table ready.", flush=True)


if __name__ == "__main__":
    main()
