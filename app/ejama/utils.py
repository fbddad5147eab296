from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar

from app.ejama.store import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def new_id(prefix: str) -> str:
    """Random entity id, e.g. ``c-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex[:16]}"


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def clean_str(value: object) -> str:
    """Strip a request field; anything that is not a string counts as empty."""
    return value.strip() if isinstance(value, str) else ""


def read_or_default(
    read: Callable[[], T],
    default: Callable[[], T],
    *,
    degrade_to_default: bool,
    what: str,
) -> tuple[T, bool]:
    """
    Run a read path under an explicit failure policy.

    Returns ``(value, degraded)``. With ``degrade_to_default`` a StoreError is
    logged and replaced by ``default()``; otherwise it propagates.
    """
    try:
        return read(), False
    except StoreError as e:
        if not degrade_to_default:
            raise
        logger.warning("Degraded %s to defaults after store failure: %s", what, e)
        return default(), True
