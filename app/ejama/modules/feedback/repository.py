from __future__ import annotations

import secrets
import string

from app.ejama.modules.feedback.models import Feedback
from app.ejama.store import RecordStore

FEEDBACK_PREFIX = "feedback:"
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class FeedbackRepository:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def add(self, feedback: Feedback) -> str:
        """Store under a fresh time-ordered key and return the key."""
        suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(9))
        key = f"{FEEDBACK_PREFIX}{feedback.timestamp}:{suffix}"
        self.store.set_record(key, feedback)
        return key

    def list_all(self) -> list[Feedback]:
        return self.store.scan_records(FEEDBACK_PREFIX, Feedback)
