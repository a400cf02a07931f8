#!/usr/bin/env python3
"""
Production startup script.

1. Creates the customers table if missing (init_db.py)
2. Starts gunicorn (replaces this process via os.execvp)

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    port = os.environ.get("PORT", "").strip()
    if not port:
        print("WARNING: PORT not set, using default 8080", flush=True)
        port = "8080"

    try:
        port_int = int(port)
        if port_int < 1 or port_int > 65535:
            raise ValueError("Port out of range")
    except ValueError:
        print(f"ERROR: Invalid PORT value '{port}'. Must be integer 1-65535.", flush=True)
        sys.exit(1)

    # Without DATABASE_URL the app still boots and shows setup instructions.
    if (os.environ.get("DATABASE_URL") or "").strip():
        print("=== Ensuring customers table ===", flush=True)
        from scripts.init_db import init_schema

        try:
            init_schema()
        except Exception as e:
            print(f"Schema init failed: {e}", flush=True)
            sys.exit(1)
    else:
        print("WARNING: DATABASE_URL not set; the UI will show setup instructions.", flush=True)

    print(f"=== Starting gunicorn on 0.0.0.0:{port} ===", flush=True)
    os.execvp(
        "gunicorn",
        [
            "gunicorn",
            "app.wsgi:app",
            "--bind", f"0.0.0.0:{port}",
            "--workers", "2",
            "--timeout", "60",
            "--preload",
            "--access-logfile", "-",
            "--error-logfile", "-",
        ],
    )


if __name__ == "__main__":
    main()
