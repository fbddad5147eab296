from __future__ import annotations

import math

from app.ejama.errors import ValidationFailed
from app.ejama.modules.progress.models import BookmarkSet, ProgressMap
from app.ejama.modules.progress.repository import ProgressRepository
from app.ejama.utils import clean_str, read_or_default

# Reading screens fall back to "nothing saved yet" when the store is down.
LOAD_DEGRADES_TO_DEFAULT = True


def _require_article_id(article_id: object) -> str:
    # Article ids come from static client content; numbers are accepted as-is.
    if isinstance(article_id, (int, float)) and not isinstance(article_id, bool):
        article_id = str(article_id)
    article_id = clean_str(article_id)
    if not article_id:
        raise ValidationFailed("articleId is required.")
    return article_id


def load_user_data(
    repo: ProgressRepository,
    user_id: str,
    *,
    degrade_to_default: bool = LOAD_DEGRADES_TO_DEFAULT,
) -> tuple[BookmarkSet, ProgressMap, bool]:
    """Return ``(bookmarks, progress, degraded)``; empty when never written."""
    (bookmarks, progress), degraded = read_or_default(
        lambda: (repo.bookmarks(user_id), repo.progress(user_id)),
        lambda: ([], {}),
        degrade_to_default=degrade_to_default,
        what=f"{repo.domain} user data",
    )
    return bookmarks, progress, degraded


def set_bookmark(repo: ProgressRepository, user_id: str, article_id: object, bookmarked: bool) -> bool:
    """Put the article in or out of the bookmark set. Returns the resulting state."""
    article_id = _require_article_id(article_id)
    bookmarks = repo.bookmarks(user_id)
    present = article_id in bookmarks
    if bookmarked and not present:
        bookmarks.append(article_id)
    elif not bookmarked and present:
        bookmarks = [a for a in bookmarks if a != article_id]
    else:
        return bookmarked
    repo.save_bookmarks(user_id, bookmarks)
    return bookmarked


def toggle_bookmark(repo: ProgressRepository, user_id: str, article_id: object) -> bool:
    """Flip the article's bookmark (reads current state, writes the complement)."""
    article_id = _require_article_id(article_id)
    return set_bookmark(repo, user_id, article_id, article_id not in repo.bookmarks(user_id))


def save_progress(repo: ProgressRepository, user_id: str, article_id: object, percent: object) -> ProgressMap:
    """Upsert one progress entry. The value is not clamped."""
    article_id = _require_article_id(article_id)
    if isinstance(percent, bool) or not isinstance(percent, (int, float)) or not math.isfinite(percent):
        raise ValidationFailed("progress must be a number.")
    progress = repo.progress(user_id)
    progress[article_id] = percent
    repo.save_progress(user_id, progress)
    return progress
