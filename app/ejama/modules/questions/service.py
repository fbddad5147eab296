"""
Anonymous Q&A workflow.

State machine: ``pending`` <-> ``answered``. Answer text changes only through
``save_answer`` (blank clears it) or ``mark_answered(True, staged_answer=...)``.
Un-answering via ``mark_answered(False)`` keeps the stored text as a draft;
``Question.public_view`` hides it while the question is pending.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from app.ejama.errors import NotFound, ValidationFailed
from app.ejama.modules.questions.models import (
    ANONYMOUS,
    ANSWERED,
    PENDING,
    STATUS_FILTERS,
    Question,
)
from app.ejama.modules.questions.repository import QuestionRepository
from app.ejama.modules.questions.seed import build_seed_questions
from app.ejama.utils import clean_str, new_id, read_or_default, utcnow_iso

logger = logging.getLogger(__name__)

# Listings surface store failures instead of showing stale defaults.
LIST_DEGRADES_TO_DEFAULT = False

MAX_QUESTION_LENGTH = 2000
MAX_ANSWER_LENGTH = 5000
MAX_CATEGORY_LENGTH = 80


def validate_question_payload(payload: dict) -> list[str]:
    """Validate question submission payload. Returns list of errors."""
    errors = []
    text = clean_str(payload.get("question"))
    if not text:
        errors.append("Question text is required.")
    elif len(text) > MAX_QUESTION_LENGTH:
        errors.append(f"Question must be at most {MAX_QUESTION_LENGTH} characters.")
    if len(clean_str(payload.get("category"))) > MAX_CATEGORY_LENGTH:
        errors.append(f"Category must be at most {MAX_CATEGORY_LENGTH} characters.")
    is_private = payload.get("isPrivate")
    if is_private is not None and not isinstance(is_private, bool):
        errors.append("isPrivate must be true or false.")
    return errors


def submit_question(
    repo: QuestionRepository,
    asker_id: str,
    question: str,
    category: str = "",
    is_private: bool = False,
) -> Question:
    """Create a pending question and index it under the asker (unless anonymous)."""
    errors = validate_question_payload({"question": question, "category": category, "isPrivate": is_private})
    if errors:
        raise ValidationFailed(errors)
    q = Question(
        id=new_id("q"),
        question=clean_str(question),
        category=clean_str(category),
        is_private=bool(is_private),
        asked_by=asker_id or ANONYMOUS,
        asked_at=utcnow_iso(),
        status=PENDING,
    )
    repo.save(q)
    if q.asked_by != ANONYMOUS:
        ids = repo.user_question_ids(q.asked_by)
        repo.save_user_question_ids(q.asked_by, [q.id] + [i for i in ids if i != q.id])
    logger.info("Question %s submitted (private=%s)", q.id, q.is_private)
    return q


def _asked_at_key(q: Question) -> datetime:
    # Records from older clients may carry free text ("2 days ago"); those sort last.
    try:
        asked = datetime.fromisoformat(q.asked_at.replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if asked.tzinfo is None:
        asked = asked.replace(tzinfo=timezone.utc)
    return asked


def _newest_first(questions: list[Question]) -> list[Question]:
    return sorted(questions, key=_asked_at_key, reverse=True)


def list_questions(
    repo: QuestionRepository,
    status_filter: str = "all",
    category: str | None = None,
    search: str | None = None,
    *,
    include_private: bool = True,
    degrade_to_default: bool = LIST_DEGRADES_TO_DEFAULT,
) -> list[Question]:
    """
    Questions matching the status filter (all/answered/unanswered), an exact
    category and a case-insensitive search over question, answer or category.

    Without ``include_private`` the listing is public: private questions are
    dropped and drafts on pending questions are not searched.
    """
    status_filter = clean_str(status_filter).lower() or "all"
    if status_filter not in STATUS_FILTERS:
        raise ValidationFailed("Invalid status filter. Must be one of: all, answered, unanswered")
    status = STATUS_FILTERS[status_filter]
    category = clean_str(category) or None
    search = clean_str(search) or None

    questions, _ = read_or_default(
        repo.list_all,
        list,
        degrade_to_default=degrade_to_default,
        what="question listing",
    )
    return _newest_first(
        [
            q
            for q in questions
            if (include_private or not q.is_private)
            and q.matches(status=status, category=category, search=search, search_drafts=include_private)
        ]
    )


def seed_questions(repo: QuestionRepository) -> list[Question]:
    seeded = build_seed_questions()
    for q in seeded:
        repo.save(q)
    return seeded


def list_public_questions(repo: QuestionRepository, *, seed_if_empty: bool = True) -> list[Question]:
    """Non-private questions; seeds the sample questions when there are none."""
    public = [q for q in repo.list_all() if not q.is_private]
    if not public and seed_if_empty:
        logger.info("No public questions found; seeding samples")
        public = seed_questions(repo)
    return _newest_first(public)


def list_user_questions(repo: QuestionRepository, user_id: str) -> list[Question]:
    """The caller's own questions, newest first. Ids with no record are skipped."""
    questions = []
    for question_id in repo.user_question_ids(user_id):
        q = repo.get(question_id)
        if q is not None:
            questions.append(q)
    return questions


def _require_question(repo: QuestionRepository, question_id: str) -> Question:
    q = repo.get(clean_str(question_id))
    if q is None:
        raise NotFound("Question not found.")
    return q


def _clean_answer(answer_text: object) -> str:
    if answer_text is not None and not isinstance(answer_text, str):
        raise ValidationFailed("answer must be a string.")
    text = clean_str(answer_text)
    if len(text) > MAX_ANSWER_LENGTH:
        raise ValidationFailed(f"Answer must be at most {MAX_ANSWER_LENGTH} characters.")
    return text


def save_answer(repo: QuestionRepository, question_id: str, answer_text: object, moderator_id: str) -> Question:
    """Non-blank text answers the question; blank text clears the answer and reopens it."""
    text = _clean_answer(answer_text)
    q = _require_question(repo, question_id)
    if text:
        was_answered = q.is_answered
        q.answer = text
        q.status = ANSWERED
        q.answered_by = moderator_id
        if not was_answered or not q.answered_at:
            q.answered_at = utcnow_iso()
    else:
        q.answer = None
        q.answered_by = None
        q.answered_at = None
        q.status = PENDING
    repo.save(q)
    logger.info("Answer saved for %s by %s (status=%s)", q.id, moderator_id, q.status)
    return q


def mark_answered(
    repo: QuestionRepository,
    question_id: str,
    answered: bool,
    moderator_id: str,
    staged_answer: object = None,
) -> Question:
    """
    Set the status directly. Answering adopts a non-blank staged answer, else
    keeps the stored one; un-answering leaves the stored text in place.
    """
    if not isinstance(answered, bool):
        raise ValidationFailed("answered must be true or false.")
    staged = _clean_answer(staged_answer)
    q = _require_question(repo, question_id)
    if answered:
        if staged:
            q.answer = staged
        if not q.is_answered:
            q.answered_at = utcnow_iso()
        q.answered_by = moderator_id
        q.status = ANSWERED
    else:
        q.status = PENDING
    repo.save(q)
    logger.info("Question %s marked %s by %s", q.id, q.status, moderator_id)
    return q
