from flask import Blueprint, current_app, jsonify, request

from app.ejama.errors import ValidationFailed
from app.ejama.identity import current_identity

bp = Blueprint("routes", __name__)

MIN_PASSWORD_LENGTH = 6


@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"status": "ok"}


@bp.get("/healthz")
def healthz():
    """
    Fast health check for container probes. No store access, minimal overhead.
    """
    return "ok", 200


def validate_signup_payload(payload: dict) -> list[str]:
    """Validate signup payload. Returns list of errors."""
    errors = []
    email = payload.get("email")
    password = payload.get("password")
    if not isinstance(email, str) or "@" not in email.strip():
        errors.append("A valid email is required.")
    if not isinstance(password, str) or not password:
        errors.append("Password is required.")
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    name = payload.get("name")
    if name is not None and not isinstance(name, str):
        errors.append("Name must be a string.")
    return errors


@bp.post("/api/signup")
def signup():
    payload = request.get_json(silent=True)
    payload = payload if isinstance(payload, dict) else {}
    errors = validate_signup_payload(payload)
    if errors:
        raise ValidationFailed(errors)

    email = payload["email"].strip().lower()
    user = current_identity().create_user(
        email=email,
        password=payload["password"],
        name=(payload.get("name") or "").strip() or None,
    )
    current_app.logger.info("Account created for user id=%s", user.get("id"))
    return jsonify({"user": user})
