from app.ejama.store import RecordStore, StoreError

USER_TOKEN = "tok-user"
OTHER_TOKEN = "tok-other"
MOD_TOKEN = "tok-mod"


class FailingStore(RecordStore):
    """Store double whose every call fails like an unreachable database."""

    def get(self, key):
        raise StoreError("store unreachable")

    def set(self, key, value):
        raise StoreError("store unreachable")

    def scan_by_prefix(self, prefix):
        raise StoreError("store unreachable")


def auth(token: str = USER_TOKEN) -> dict:
    return {"Authorization": f"Bearer {token}"}
