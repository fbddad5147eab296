from __future__ import annotations

import uuid

from flask import current_app, g, request

from app.ejama.identity import current_identity


def bearer_token() -> str | None:
    header = request.headers.get("Authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def load_request_context() -> None:
    """
    Assigns a per-request request_id (for log correlation) and resets the
    resolved identity. Token resolution is deferred to the first protected call.
    """
    if not getattr(g, "request_id", None):
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    g.current_user_id = None
    g.identity_resolved = False


def current_user_id() -> str | None:
    """
    Resolves the bearer token once per request; None when missing or invalid.
    IdentityError (provider down) propagates.
    """
    if getattr(g, "identity_resolved", False):
        return g.current_user_id
    token = bearer_token()
    user_id = current_identity().resolve(token) if token else None
    if token and not user_id:
        current_app.logger.info("Bearer token rejected (request_id=%s)", getattr(g, "request_id", None))
    g.current_user_id = user_id
    g.identity_resolved = True
    return user_id
