from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.ejama.modules.feedback.repository import FeedbackRepository
from app.ejama.modules.feedback.service import submit_feedback
from app.ejama.store import current_store

bp = Blueprint("feedback", __name__)


@bp.post("/feedback")
def feedback_submit():
    payload = request.get_json(silent=True)
    submit_feedback(FeedbackRepository(current_store()), payload if isinstance(payload, dict) else {})
    return jsonify({"success": True, "message": "Feedback submitted successfully"})
