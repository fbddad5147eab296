from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.ejama.modules.questions.models import ANONYMOUS, ANSWERED, PENDING, Question

SEED_QUESTION_IDS = ("q-1", "q-2", "q-3")


def _days_before(now: datetime, days: int) -> str:
    return (now - timedelta(days=days)).isoformat(timespec="seconds").replace("+00:00", "Z")


def build_seed_questions(now: datetime | None = None) -> list[Question]:
    """Sample questions dated a few days before ``now``."""
    now = now or datetime.now(timezone.utc)
    return [
        Question(
            id="q-1",
            question="What's considered a normal amount of bleeding during a period?",
            category="Menstrual Health",
            is_private=False,
            asked_by=ANONYMOUS,
            asked_at=_days_before(now, 2),
            answer=(
                "A typical period involves losing about 30-40ml of blood over 3-7 days. Heavy bleeding "
                "(menorrhagia) is when you lose more than 80ml or need to change protection every 1-2 hours. "
                "If you're soaking through pads/tampons frequently or passing large clots, consult a "
                "healthcare provider."
            ),
            answered_by="Dr. Amina Hassan",
            answered_at=_days_before(now, 1),
            status=ANSWERED,
        ),
        Question(
            id="q-2",
            question="Are menstrual cups safe to use?",
            category="Products & Hygiene",
            is_private=False,
            asked_by=ANONYMOUS,
            asked_at=_days_before(now, 3),
            answer=(
                "Yes, menstrual cups are safe when used correctly. They're made from medical-grade silicone "
                "and can be worn for up to 12 hours. Make sure to wash your hands before insertion/removal, "
                "clean the cup thoroughly, and boil it between cycles. If you experience any irritation or "
                "unusual symptoms, discontinue use and consult a healthcare provider."
            ),
            answered_by="Dr. Sarah Okonkwo",
            answered_at=_days_before(now, 2),
            status=ANSWERED,
        ),
        Question(
            id="q-3",
            question="How can I reduce severe period cramps naturally?",
            category="Pain Management",
            is_private=False,
            asked_by=ANONYMOUS,
            asked_at=_days_before(now, 5),
            status=PENDING,
        ),
    ]
