from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine

from app.ejama.db import make_sessionmaker
from app.ejama.store import SqlRecordStore


def create_script_engine(db_url: str):
    return create_engine(
        db_url,
        future=True,
        pool_pre_ping=True,
        pool_recycle=1800,
    )


@contextmanager
def script_store(db_url: str) -> Generator[SqlRecordStore, None, None]:
    """Record store over a short-lived engine; disposed on exit."""
    engine = create_script_engine(db_url)
    try:
        yield SqlRecordStore(sessions=make_sessionmaker(engine))
    finally:
        engine.dispose()
