from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from app.ejama.modules.community.repository import CommunityRepository
from app.ejama.modules.community.service import (
    add_post,
    create_community,
    create_thread,
    join_community,
    leave_community,
    like_post,
    load_community_data,
)
from app.ejama.rbac import require_auth
from app.ejama.store import current_store

bp = Blueprint("community", __name__)


def _repo() -> CommunityRepository:
    return CommunityRepository(current_store())


def _current_user_id() -> str:
    uid = getattr(g, "current_user_id", None)
    if not uid:
        raise RuntimeError("No current user")
    return uid


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.get("/community/data")
@require_auth
def community_data():
    snapshot = load_community_data(_repo(), _current_user_id())
    return jsonify(snapshot.to_json())


@bp.post("/community/create")
@require_auth
def community_create():
    payload = _payload()
    category = create_community(
        _repo(),
        _current_user_id(),
        payload.get("title"),
        payload.get("description"),
        payload.get("icon"),
    )
    return jsonify({"category": category.to_json()})


@bp.post("/community/join")
@require_auth
def community_join():
    payload = _payload()
    category_id = payload.get("categoryId")
    # {"join": false} leaves; anything else joins
    if payload.get("join", True) is False:
        joined = leave_community(_repo(), _current_user_id(), category_id)
    else:
        joined = join_community(_repo(), _current_user_id(), category_id)
    return jsonify({"success": True, "joinedCategories": joined})


@bp.post("/community/leave")
@require_auth
def community_leave():
    joined = leave_community(_repo(), _current_user_id(), _payload().get("categoryId"))
    return jsonify({"success": True, "joinedCategories": joined})


@bp.post("/community/threads")
@require_auth
def thread_create():
    payload = _payload()
    thread = create_thread(_repo(), _current_user_id(), payload.get("categoryId"), payload.get("title"))
    return jsonify({"thread": thread.to_json()}), 201


@bp.post("/community/threads/<thread_id>/posts")
@require_auth
def post_create(thread_id: str):
    post = add_post(_repo(), _current_user_id(), thread_id, _payload().get("content"))
    return jsonify({"post": post.to_json()}), 201


@bp.post("/community/posts/<post_id>/like")
@require_auth
def post_like(post_id: str):
    post = like_post(_repo(), post_id)
    return jsonify({"post": post.to_json()})
