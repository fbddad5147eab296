from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, request

from app.ejama.modules.profile.repository import ProfileRepository
from app.ejama.modules.profile.service import get_profile_picture, save_profile_picture
from app.ejama.rbac import require_auth
from app.ejama.store import current_store

bp = Blueprint("profile", __name__)


def _current_user_id() -> str:
    uid = getattr(g, "current_user_id", None)
    if not uid:
        raise RuntimeError("No current user")
    return uid


@bp.post("/profile/picture")
@require_auth
def picture_upload():
    payload = request.get_json(silent=True) or {}
    url = save_profile_picture(
        ProfileRepository(current_store()),
        _current_user_id(),
        payload.get("picture") if isinstance(payload, dict) else None,
        max_bytes=current_app.config["MAX_PROFILE_PICTURE_BYTES"],
    )
    return jsonify({"url": url})


@bp.get("/profile/picture")
@require_auth
def picture_get():
    return jsonify({"url": get_profile_picture(ProfileRepository(current_store()), _current_user_id())})
