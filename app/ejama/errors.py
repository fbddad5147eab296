"""
Error kinds surfaced to API callers.

Every kind maps to one HTTP status and renders as ``{"error": message}``.
Handlers are registered on the app in ``register_error_handlers``.
"""
from __future__ import annotations

import logging

from flask import Flask, g, jsonify

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    default_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"error": self.message}


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Moderator access required."


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found."


class ValidationFailed(ApiError):
    status_code = 400
    default_message = "Invalid request data"

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or None)

    def to_dict(self) -> dict:
        return {"error": self.message, "errors": self.errors}


def register_error_handlers(app: Flask) -> None:
    from app.ejama.identity import IdentityError, IdentityRejected
    from app.ejama.store import StoreError

    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):  # type: ignore[no-redef]
        if e.status_code == 403:
            logger.warning(
                "Forbidden: missing_permission=%s request_id=%s",
                getattr(g, "missing_permission", None),
                getattr(g, "request_id", None),
            )
        elif e.status_code == 401:
            logger.warning("Unauthorized: %s request_id=%s", e.message, getattr(g, "request_id", None))
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(StoreError)
    def _store_error(e: StoreError):  # type: ignore[no-redef]
        app.logger.error("Record store failure (request_id=%s): %s", getattr(g, "request_id", None), e)
        return jsonify({"error": "Service temporarily unavailable. Please retry."}), 503

    @app.errorhandler(IdentityError)
    def _identity_error(e: IdentityError):  # type: ignore[no-redef]
        if isinstance(e, IdentityRejected):
            return jsonify({"error": str(e)}), 400
        app.logger.error("Identity provider failure (request_id=%s): %s", getattr(g, "request_id", None), e)
        return jsonify({"error": "Authentication service temporarily unavailable. Please retry."}), 503

    @app.errorhandler(404)
    def _err_404(e):  # type: ignore[no-redef]
        return jsonify({"error": "Not found."}), 404

    @app.errorhandler(405)
    def _err_405(e):  # type: ignore[no-redef]
        return jsonify({"error": "Method not allowed."}), 405

    @app.errorhandler(413)
    def _err_413(e):  # type: ignore[no-redef]
        return jsonify({"error": "Request body too large."}), 413

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        # Ensure stack trace shows in logs.
        app.logger.exception("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None))
        return jsonify({"error": "Internal server error."}), 500
