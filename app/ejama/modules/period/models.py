from __future__ import annotations

from pydantic import Field

from app.ejama.records import Record

FLOW_LEVELS = ("light", "medium", "heavy", "spotting")


class PeriodLog(Record):
    start_date: str
    end_date: str | None = None
    flow: str | None = None
    symptoms: list[str] = Field(default_factory=list)
    notes: str | None = None
    user_id: str
