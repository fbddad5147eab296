from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from app.ejama.modules.questions.repository import QuestionRepository
from app.ejama.modules.questions.service import list_questions, mark_answered, save_answer
from app.ejama.rbac import require_moderator
from app.ejama.store import current_store

bp = Blueprint("questions_admin", __name__)


def _repo() -> QuestionRepository:
    return QuestionRepository(current_store())


def _current_user_id() -> str:
    uid = getattr(g, "current_user_id", None)
    if not uid:
        raise RuntimeError("No current user")
    return uid


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------- List ----------
@bp.get("/questions")
@require_moderator
def questions_list():
    questions = list_questions(
        _repo(),
        request.args.get("status") or "all",
        category=request.args.get("category"),
        search=request.args.get("q"),
    )
    categories = sorted({q.category for q in questions if q.category})
    return jsonify({"questions": [q.to_json() for q in questions], "categories": categories})


# ---------- Moderate ----------
@bp.post("/questions/<question_id>/answer")
@require_moderator
def question_answer(question_id: str):
    q = save_answer(_repo(), question_id, _payload().get("answer"), _current_user_id())
    return jsonify({"question": q.to_json()})


@bp.post("/questions/<question_id>/status")
@require_moderator
def question_status(question_id: str):
    payload = _payload()
    q = mark_answered(
        _repo(),
        question_id,
        payload.get("answered"),
        _current_user_id(),
        staged_answer=payload.get("answer"),
    )
    return jsonify({"question": q.to_json()})
