"""
Release phase: migrate the record store schema, then seed default content.

Env:
    DATABASE_URL   required; sqlite is refused when ENV=production
    SKIP_SEED      "1" skips the seed step (schema-only releases)

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _database_url() -> str:
    db_url = (os.environ.get("DATABASE_URL") or "").strip()
    if not db_url:
        raise RuntimeError("DATABASE_URL is not set; refusing to release against an implicit SQLite file.")
    env = (os.environ.get("ENV") or "").strip().lower()
    if env in ("prod", "production") and db_url.startswith("sqlite"):
        raise RuntimeError("DATABASE_URL points at sqlite in production. Use Postgres.")
    return db_url


def migrate(db_url: str) -> None:
    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")


def seed(db_url: str) -> None:
    from scripts import init_db

    init_db.seed_only(database_url=db_url)


def run_release() -> None:
    db_url = _database_url()
    print("[release] alembic upgrade head", flush=True)
    migrate(db_url)
    if (os.environ.get("SKIP_SEED") or "").strip() == "1":
        print("[release] SKIP_SEED=1; not seeding", flush=True)
    else:
        print("[release] seeding community + sample questions", flush=True)
        seed(db_url)
    print("[release] done", flush=True)


if __name__ == "__main__":
    run_release()
