from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.ejama.db import session_scope
from app.ejama.models import KvRecord
from app.ejama.records import Record

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreError(RuntimeError):
    pass


class RecordValidationError(StoreError):
    pass


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


class RecordStore:
    """
    Key -> JSON value persistence with prefix scans.

    ``get`` returns None for a missing key; backend failures raise StoreError.
    Scan order is unspecified.
    """

    def get(self, key: str) -> Any | None:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def scan_by_prefix(self, prefix: str) -> list[Any]:
        raise NotImplementedError

    # Typed access (validated at the boundary)
    def get_record(self, key: str, type_: type[T]) -> T | None:
        raw = self.get(key)
        if raw is None:
            return None
        return _validate(type_, raw, key)

    def set_record(self, key: str, record: Any) -> None:
        if isinstance(record, Record):
            self.set(key, record.to_json())
        else:
            self.set(key, _adapter(type(record)).dump_python(record, mode="json"))

    def scan_records(self, prefix: str, type_: type[T]) -> list[T]:
        return [_validate(type_, raw, prefix + "*") for raw in self.scan_by_prefix(prefix)]


def _validate(type_: Any, raw: Any, key: str) -> Any:
    try:
        return _adapter(type_).validate_python(raw)
    except ValidationError as e:
        logger.error("Malformed value under %s: %s", key, e)
        raise RecordValidationError(f"Malformed value under {key!r}") from e


@dataclass
class SqlRecordStore(RecordStore):
    sessions: sessionmaker

    def get(self, key: str) -> Any | None:
        try:
            with session_scope(self.sessions) as s:
                row = s.get(KvRecord, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            raise StoreError(f"get failed for {key!r}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            try:
                with session_scope(self.sessions) as s:
                    s.merge(KvRecord(key=key, value=value))
            except IntegrityError:
                # Lost an insert race on a fresh key; the row exists now.
                with session_scope(self.sessions) as s:
                    s.merge(KvRecord(key=key, value=value))
        except SQLAlchemyError as e:
            raise StoreError(f"set failed for {key!r}: {e}") from e

    def scan_by_prefix(self, prefix: str) -> list[Any]:
        try:
            with session_scope(self.sessions) as s:
                stmt = select(KvRecord.key, KvRecord.value).where(KvRecord.key.startswith(prefix, autoescape=True))
                # SQLite LIKE ignores ASCII case
                return [value for key, value in s.execute(stmt) if key.startswith(prefix)]
        except SQLAlchemyError as e:
            raise StoreError(f"scan failed for prefix {prefix!r}: {e}") from e


@dataclass
class MemoryRecordStore(RecordStore):
    data: dict[str, Any] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, key: str) -> Any | None:
        with self._lock:
            return _copy(self.data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self.data[key] = _copy(value)

    def scan_by_prefix(self, prefix: str) -> list[Any]:
        with self._lock:
            return [_copy(v) for k, v in self.data.items() if k.startswith(prefix)]


def _copy(value: Any) -> Any:
    # Callers mutate what they read; never hand out the stored object.
    if isinstance(value, dict):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy(v) for v in value]
    return value


def store_from_config(config: dict, sessions: sessionmaker | None = None) -> RecordStore:
    backend = (config.get("STORE_BACKEND") or "sql").strip().lower()
    if backend == "memory":
        return MemoryRecordStore()
    if backend != "sql":
        raise RuntimeError(f"Unknown STORE_BACKEND: {backend}")
    if sessions is None:
        raise RuntimeError("SQL record store requires an initialized sessionmaker.")
    return SqlRecordStore(sessions=sessions)


def current_store() -> RecordStore:
    """Record store bound to the running app."""
    from flask import current_app

    return current_app.extensions["record_store"]
