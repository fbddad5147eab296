from __future__ import annotations

import logging

from pydantic import ValidationError

from app.ejama.errors import ValidationFailed
from app.ejama.modules.feedback.models import Feedback
from app.ejama.modules.feedback.repository import FeedbackRepository
from app.ejama.utils import clean_str, utcnow_iso

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


def submit_feedback(repo: FeedbackRepository, payload: dict) -> str:
    """Store submitted feedback with a server timestamp. Returns the record key."""
    message = clean_str(payload.get("message"))
    if not message:
        raise ValidationFailed("Feedback message is required.")
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationFailed(f"Feedback message must be at most {MAX_MESSAGE_LENGTH} characters.")
    try:
        feedback = Feedback.model_validate({**payload, "message": message, "timestamp": utcnow_iso()})
    except ValidationError as e:
        raise ValidationFailed([err["msg"] for err in e.errors()]) from e
    key = repo.add(feedback)
    logger.info("Feedback stored under %s", key)
    return key
