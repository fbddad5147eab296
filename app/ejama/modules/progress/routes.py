from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from app.ejama.errors import NotFound
from app.ejama.modules.progress.models import CONTENT_DOMAINS
from app.ejama.modules.progress.repository import ProgressRepository
from app.ejama.modules.progress.service import load_user_data, save_progress, set_bookmark, toggle_bookmark
from app.ejama.rbac import require_auth
from app.ejama.store import current_store

bp = Blueprint("progress", __name__)


def _repo(domain: str) -> ProgressRepository:
    if domain not in CONTENT_DOMAINS:
        raise NotFound("Unknown content domain.")
    return ProgressRepository(current_store(), domain)


def _current_user_id() -> str:
    uid = getattr(g, "current_user_id", None)
    if not uid:
        raise RuntimeError("No current user")
    return uid


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.get("/<domain>/user-data")
@require_auth
def user_data(domain: str):
    bookmarks, progress, degraded = load_user_data(_repo(domain), _current_user_id())
    return jsonify({"bookmarks": bookmarks, "progress": progress, "degraded": degraded})


@bp.post("/<domain>/bookmark")
@require_auth
def bookmark(domain: str):
    repo = _repo(domain)
    payload = _payload()
    # Explicit direction when the client sends one, otherwise flip.
    if isinstance(payload.get("bookmarked"), bool):
        state = set_bookmark(repo, _current_user_id(), payload.get("articleId"), payload["bookmarked"])
    else:
        state = toggle_bookmark(repo, _current_user_id(), payload.get("articleId"))
    return jsonify({"success": True, "bookmarked": state})


@bp.post("/<domain>/progress")
@require_auth
def progress(domain: str):
    repo = _repo(domain)
    payload = _payload()
    save_progress(repo, _current_user_id(), payload.get("articleId"), payload.get("progress"))
    return jsonify({"success": True})
