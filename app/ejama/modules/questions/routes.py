from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from app.ejama.modules.questions.models import ANONYMOUS
from app.ejama.modules.questions.repository import QuestionRepository
from app.ejama.modules.questions.service import (
    list_public_questions,
    list_questions,
    list_user_questions,
    submit_question,
)
from app.ejama.rbac import require_auth
from app.ejama.store import current_store

bp = Blueprint("questions", __name__)


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


# ---------- Ask the expert ----------
@bp.get("/ask-expert/questions")
@require_auth
def public_questions():
    questions = list_public_questions(_repo())
    return jsonify({"questions": [q.public_view() for q in questions]})


@bp.get("/ask-expert/my-questions")
@require_auth
def my_questions():
    questions = list_user_questions(_repo(), _current_user_id())
    return jsonify({"questions": [q.public_view() for q in questions]})


@bp.post("/ask-expert/submit")
@require_auth
def submit():
    payload = _payload()
    q = submit_question(
        _repo(),
        _current_user_id(),
        payload.get("question"),
        payload.get("category"),
        payload.get("isPrivate", False),
    )
    return jsonify({"question": q.public_view()})


# ---------- Anonymous questions (search/list variant) ----------
@bp.post("/questions/anonymous")
@require_auth
def anonymous_submit():
    payload = _payload()
    submit_question(
        _repo(),
        ANONYMOUS,
        payload.get("question"),
        payload.get("category"),
        payload.get("isPrivate", False),
    )
    return jsonify({"success": True})


@bp.get("/questions/anonymous")
@require_auth
def anonymous_list():
    items = list_questions(
        _repo(),
        request.args.get("status") or "all",
        category=request.args.get("category"),
        search=request.args.get("q"),
        include_private=False,
    )
    return jsonify({"items": [q.public_view() for q in items]})
