from __future__ import annotations

from app.ejama.modules.period.models import PeriodLog
from app.ejama.store import RecordStore

PERIOD_PREFIX = "period_"


class PeriodRepository:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def _user_prefix(self, user_id: str) -> str:
        return f"{PERIOD_PREFIX}{user_id}_"

    def save(self, log: PeriodLog) -> None:
        self.store.set_record(self._user_prefix(log.user_id) + log.start_date, log)

    def list_for_user(self, user_id: str) -> list[PeriodLog]:
        logs = self.store.scan_records(self._user_prefix(user_id), PeriodLog)
        # "period_ab_" also prefixes keys of a user named "ab_c"
        return [log for log in logs if log.user_id == user_id]
