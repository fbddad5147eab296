from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g

from app.ejama.auth import current_user_id
from app.ejama.errors import Forbidden, Unauthorized


def is_moderator(user_id: str | None) -> bool:
    if not user_id:
        return False
    return user_id in (current_app.config.get("MODERATOR_USER_IDS") or frozenset())


def require_auth(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        # Reject before the handler touches the store.
        if not current_user_id():
            raise Unauthorized()
        return fn(*args, **kwargs)

    return wrapped


def require_moderator(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        user_id = current_user_id()
        # Unauthenticated → 401; authenticated but not a moderator → 403
        if not user_id:
            raise Unauthorized()
        if not is_moderator(user_id):
            g.missing_permission = "questions.moderate"
            raise Forbidden()
        return fn(*args, **kwargs)

    return wrapped

