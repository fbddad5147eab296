from __future__ import annotations

from app.ejama.modules.community.models import Category, Post, Thread
from app.ejama.store import RecordStore

CATEGORY_PREFIX = "community_category_"
THREAD_PREFIX = "community_thread_"
POST_PREFIX = "community_post_"
JOINED_PREFIX = "community_joined_"


class CommunityRepository:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    # Categories
    def list_categories(self) -> list[Category]:
        return self.store.scan_records(CATEGORY_PREFIX, Category)

    def get_category(self, category_id: str) -> Category | None:
        return self.store.get_record(CATEGORY_PREFIX + category_id, Category)

    def save_category(self, category: Category) -> None:
        self.store.set_record(CATEGORY_PREFIX + category.id, category)

    # Threads
    def list_threads(self) -> list[Thread]:
        return self.store.scan_records(THREAD_PREFIX, Thread)

    def get_thread(self, thread_id: str) -> Thread | None:
        return self.store.get_record(THREAD_PREFIX + thread_id, Thread)

    def save_thread(self, thread: Thread) -> None:
        self.store.set_record(THREAD_PREFIX + thread.id, thread)

    # Posts
    def list_posts(self) -> list[Post]:
        return self.store.scan_records(POST_PREFIX, Post)

    def get_post(self, post_id: str) -> Post | None:
        return self.store.get_record(POST_PREFIX + post_id, Post)

    def save_post(self, post: Post) -> None:
        self.store.set_record(POST_PREFIX + post.id, post)

    # Membership
    def joined_categories(self, user_id: str) -> list[str]:
        return self.store.get_record(JOINED_PREFIX + user_id, list[str]) or []

    def save_joined_categories(self, user_id: str, category_ids: list[str]) -> None:
        self.store.set_record(JOINED_PREFIX + user_id, list(category_ids))
