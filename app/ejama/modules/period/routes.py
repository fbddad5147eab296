from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from app.ejama.modules.period.repository import PeriodRepository
from app.ejama.modules.period.service import log_period, period_history
from app.ejama.rbac import require_auth
from app.ejama.store import current_store

bp = Blueprint("period", __name__)


def _current_user_id() -> str:
    uid = getattr(g, "current_user_id", None)
    if not uid:
        raise RuntimeError("No current user")
    return uid


@bp.post("/period/log")
@require_auth
def period_log():
    payload = request.get_json(silent=True)
    log = log_period(PeriodRepository(current_store()), _current_user_id(), payload if isinstance(payload, dict) else {})
    return jsonify({"success": True, "period": log.to_json()})


@bp.get("/period/history")
@require_auth
def period_history_get():
    logs = period_history(PeriodRepository(current_store()), _current_user_id())
    return jsonify({"periods": [log.to_json() for log in logs]})
