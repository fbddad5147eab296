from __future__ import annotations

from app.ejama.modules.questions.models import Question
from app.ejama.store import RecordStore

QUESTION_PREFIX = "ask_expert_question_"
USER_QUESTIONS_PREFIX = "ask_expert_user_questions_"


class QuestionRepository:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def get(self, question_id: str) -> Question | None:
        return self.store.get_record(QUESTION_PREFIX + question_id, Question)

    def save(self, question: Question) -> None:
        self.store.set_record(QUESTION_PREFIX + question.id, question)

    def list_all(self) -> list[Question]:
        return self.store.scan_records(QUESTION_PREFIX, Question)

    def user_question_ids(self, user_id: str) -> list[str]:
        """Newest first."""
        return self.store.get_record(USER_QUESTIONS_PREFIX + user_id, list[str]) or []

    def save_user_question_ids(self, user_id: str, question_ids: list[str]) -> None:
        self.store.set_record(USER_QUESTIONS_PREFIX + user_id, list(question_ids))
