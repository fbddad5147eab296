from __future__ import annotations

from pydantic import Field

from app.ejama.records import Record


class Category(Record):
    id: str
    title: str
    description: str = ""
    icon: str = ""
    # Display counter set at creation; not kept in sync with joins.
    members_count: int = Field(default=0, ge=0)
    created_by: str | None = None


class Thread(Record):
    id: str
    category_id: str
    title: str
    created_by: str
    created_at: str


class Post(Record):
    id: str
    thread_id: str
    author: str
    created_at: str
    content: str
    likes: int = Field(default=0, ge=0)
