from __future__ import annotations

from app.ejama.errors import ValidationFailed
from app.ejama.modules.progress.models import CONTENT_DOMAINS, BookmarkSet, ProgressMap
from app.ejama.store import RecordStore


class ProgressRepository:
    """Bookmark sets and progress maps for one content domain."""

    def __init__(self, store: RecordStore, domain: str) -> None:
        if domain not in CONTENT_DOMAINS:
            raise ValidationFailed(f"Unknown content domain: {domain}")
        self.store = store
        self.domain = domain
        self._prefix = CONTENT_DOMAINS[domain]

    def _bookmarks_key(self, user_id: str) -> str:
        return f"{self._prefix}_bookmarks_{user_id}"

    def _progress_key(self, user_id: str) -> str:
        return f"{self._prefix}_progress_{user_id}"

    def bookmarks(self, user_id: str) -> BookmarkSet:
        return self.store.get_record(self._bookmarks_key(user_id), BookmarkSet) or []

    def save_bookmarks(self, user_id: str, bookmarks: BookmarkSet) -> None:
        self.store.set_record(self._bookmarks_key(user_id), list(bookmarks))

    def progress(self, user_id: str) -> ProgressMap:
        return self.store.get_record(self._progress_key(user_id), ProgressMap) or {}

    def save_progress(self, user_id: str, progress: ProgressMap) -> None:
        self.store.set_record(self._progress_key(user_id), dict(progress))
