from __future__ import annotations

from typing import Literal

from app.ejama.records import Record

PENDING = "pending"
ANSWERED = "answered"

QuestionStatus = Literal["pending", "answered"]

# Listing filter -> required status (None = no filter)
STATUS_FILTERS: dict[str, str | None] = {
    "all": None,
    "answered": ANSWERED,
    "unanswered": PENDING,
    "pending": PENDING,
}

ANONYMOUS = "anonymous"


class Question(Record):
    id: str
    question: str
    category: str = ""
    is_private: bool = False
    asked_by: str = ANONYMOUS
    asked_at: str
    answer: str | None = None
    answered_by: str | None = None
    answered_at: str | None = None
    status: QuestionStatus = PENDING

    @property
    def is_answered(self) -> bool:
        return self.status == ANSWERED

    def public_view(self) -> dict:
        """Shape shown to askers and readers; drafts of pending questions stay hidden."""
        data = self.to_json()
        if not self.is_answered:
            for k in ("answer", "answeredBy", "answeredAt"):
                data.pop(k, None)
        return data

    def matches(
        self,
        *,
        status: str | None = None,
        category: str | None = None,
        search: str | None = None,
        search_drafts: bool = True,
    ) -> bool:
        """``search_drafts=False`` ignores the stored answer of a pending question."""
        if status is not None and self.status != status:
            return False
        if category and self.category != category:
            return False
        if search:
            needle = search.lower()
            answer = self.answer if (self.is_answered or search_drafts) else None
            haystacks = (self.question, answer or "", self.category)
            if not any(needle in h.lower() for h in haystacks):
                return False
        return True
