from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.ejama.errors import NotFound, ValidationFailed
from app.ejama.modules.community.models import Category, Post, Thread
from app.ejama.modules.community.repository import CommunityRepository
from app.ejama.modules.community.seed import SEED_CATEGORIES, SEED_POSTS, SEED_THREADS
from app.ejama.utils import clean_str, new_id, read_or_default, utcnow_iso

logger = logging.getLogger(__name__)

# Community load serves built-in defaults when the store is down.
LOAD_DEGRADES_TO_DEFAULT = True

MAX_TITLE_LENGTH = 120
MAX_DESCRIPTION_LENGTH = 500
MAX_POST_LENGTH = 5000


@dataclass
class CommunitySnapshot:
    categories: list[Category]
    threads: list[Thread]
    posts: list[Post]
    joined_categories: list[str] = field(default_factory=list)
    degraded: bool = False

    def to_json(self) -> dict:
        return {
            "categories": [c.to_json() for c in self.categories],
            "threads": [t.to_json() for t in self.threads],
            "posts": [p.to_json() for p in self.posts],
            "joinedCategories": list(self.joined_categories),
            "degraded": self.degraded,
        }


def seed_defaults(repo: CommunityRepository) -> None:
    """Write the default categories/threads/posts (plain overwrites of fixed keys)."""
    for category in SEED_CATEGORIES:
        repo.save_category(category)
    for thread in SEED_THREADS:
        repo.save_thread(thread)
    for post in SEED_POSTS:
        repo.save_post(post)


def _default_snapshot() -> CommunitySnapshot:
    return CommunitySnapshot(
        categories=list(SEED_CATEGORIES),
        threads=list(SEED_THREADS),
        posts=list(SEED_POSTS),
    )


def _read_snapshot(repo: CommunityRepository, user_id: str) -> CommunitySnapshot:
    categories = repo.list_categories()
    joined = repo.joined_categories(user_id)
    if not categories:
        logger.info("No community categories found; seeding defaults")
        seed_defaults(repo)
        snapshot = _default_snapshot()
        snapshot.joined_categories = joined
        return snapshot
    return CommunitySnapshot(
        categories=sorted(categories, key=lambda c: c.id),
        threads=sorted(repo.list_threads(), key=lambda t: t.id),
        posts=sorted(repo.list_posts(), key=lambda p: p.id),
        joined_categories=joined,
    )


def load_community_data(
    repo: CommunityRepository,
    user_id: str,
    *,
    degrade_to_default: bool = LOAD_DEGRADES_TO_DEFAULT,
) -> CommunitySnapshot:
    """Categories, threads, posts and the caller's memberships; seeds on first use."""
    snapshot, degraded = read_or_default(
        lambda: _read_snapshot(repo, user_id),
        _default_snapshot,
        degrade_to_default=degrade_to_default,
        what="community data",
    )
    snapshot.degraded = degraded
    return snapshot


def _require_category(repo: CommunityRepository, category_id: str) -> Category:
    category = repo.get_category(category_id)
    if category is None:
        raise NotFound("Community not found.")
    return category


def join_community(repo: CommunityRepository, user_id: str, category_id: str) -> list[str]:
    """Add category to the user's joined set. Joining twice is a no-op."""
    category_id = clean_str(category_id)
    if not category_id:
        raise ValidationFailed("categoryId is required.")
    joined = repo.joined_categories(user_id)
    if category_id in joined:
        return joined
    _require_category(repo, category_id)
    joined.append(category_id)
    repo.save_joined_categories(user_id, joined)
    return joined


def leave_community(repo: CommunityRepository, user_id: str, category_id: str) -> list[str]:
    category_id = clean_str(category_id)
    if not category_id:
        raise ValidationFailed("categoryId is required.")
    joined = repo.joined_categories(user_id)
    if category_id not in joined:
        return joined
    joined = [cid for cid in joined if cid != category_id]
    repo.save_joined_categories(user_id, joined)
    return joined


def validate_community_payload(payload: dict) -> list[str]:
    """Validate community creation payload. Returns list of errors."""
    errors = []
    title = clean_str(payload.get("title"))
    if not title:
        errors.append("Title is required.")
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append(f"Title must be at most {MAX_TITLE_LENGTH} characters.")
    if len(clean_str(payload.get("description"))) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters.")
    return errors


def create_community(
    repo: CommunityRepository,
    user_id: str,
    title: str,
    description: str = "",
    icon: str = "",
) -> Category:
    """
    Create a new category owned by ``user_id``.

    The creator is not added to their own joined set.
    """
    errors = validate_community_payload({"title": title, "description": description})
    if errors:
        raise ValidationFailed(errors)
    category = Category(
        id=new_id("c"),
        title=clean_str(title),
        description=clean_str(description),
        icon=clean_str(icon),
        members_count=1,
        created_by=user_id,
    )
    repo.save_category(category)
    logger.info("Community %s created by %s", category.id, user_id)
    return category


def create_thread(repo: CommunityRepository, user_id: str, category_id: str, title: str) -> Thread:
    title = clean_str(title)
    if not title:
        raise ValidationFailed("Title is required.")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationFailed(f"Title must be at most {MAX_TITLE_LENGTH} characters.")
    category = _require_category(repo, clean_str(category_id))
    thread = Thread(
        id=new_id("t"),
        category_id=category.id,
        title=title,
        created_by=user_id,
        created_at=utcnow_iso(),
    )
    repo.save_thread(thread)
    return thread


def add_post(repo: CommunityRepository, author: str, thread_id: str, content: str) -> Post:
    content = clean_str(content)
    if not content:
        raise ValidationFailed("Content is required.")
    if len(content) > MAX_POST_LENGTH:
        raise ValidationFailed(f"Content must be at most {MAX_POST_LENGTH} characters.")
    thread = repo.get_thread(thread_id)
    if thread is None:
        raise NotFound("Thread not found.")
    post = Post(
        id=new_id("p"),
        thread_id=thread.id,
        author=author,
        created_at=utcnow_iso(),
        content=content,
        likes=0,
    )
    repo.save_post(post)
    return post


def like_post(repo: CommunityRepository, post_id: str) -> Post:
    """Increment a post's like counter (read-modify-write, not atomic)."""
    post = repo.get_post(post_id)
    if post is None:
        raise NotFound("Post not found.")
    post.likes += 1
    repo.save_post(post)
    return post
