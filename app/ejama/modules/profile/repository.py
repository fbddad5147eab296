from __future__ import annotations

from app.ejama.store import RecordStore

PICTURE_PREFIX = "profile_picture_"


class ProfileRepository:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def picture(self, user_id: str) -> str | None:
        return self.store.get_record(PICTURE_PREFIX + user_id, str)

    def save_picture(self, user_id: str, picture: str) -> None:
        self.store.set_record(PICTURE_PREFIX + user_id, picture)
