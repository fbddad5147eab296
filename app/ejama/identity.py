from __future__ import annotations

import json
import urllib.error
import urllib.request
import uuid
from dataclasses import dataclass, field
from typing import Any

from app.ejama.config import parse_csv


class IdentityError(RuntimeError):
    """Identity provider unreachable or returned garbage."""


class IdentityRejected(IdentityError):
    """Identity provider refused the request (bad signup data, duplicate email...)."""


class IdentityResolver:
    def resolve(self, token: str) -> str | None:
        """Return the user id for a bearer token, or None when the token is not valid."""
        raise NotImplementedError

    def create_user(self, *, email: str, password: str, name: str | None = None) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class SupabaseIdentityResolver(IdentityResolver):
    base_url: str
    anon_key: str
    service_role_key: str
    timeout_seconds: int = 10

    def _request_json(self, path: str, *, method: str = "GET", token: str, body: dict | None = None) -> dict[str, Any]:
        url = self.base_url.rstrip("/") + path
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(url, data=data, method=method)
        req.add_header("apikey", self.anon_key or self.service_role_key)
        req.add_header("Authorization", f"Bearer {token}")
        req.add_header("Accept", "application/json")
        if data is not None:
            req.add_header("Content-Type", "application/json")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            try:
                detail = json.loads(e.read().decode("utf-8", errors="ignore") or "{}")
            except ValueError:
                detail = {}
            message = ""
            if isinstance(detail, dict):
                message = detail.get("msg") or detail.get("message") or detail.get("error_description") or ""
            if 400 <= e.code < 500:
                raise IdentityRejected(message or f"HTTP {e.code} from identity provider") from e
            raise IdentityError(f"HTTP {e.code} from identity provider: {message}") from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise IdentityError(f"Identity provider unreachable: {e}") from e
        try:
            payload = json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise IdentityError(f"Invalid JSON from identity provider ({path})") from e
        return payload if isinstance(payload, dict) else {}

    def resolve(self, token: str) -> str | None:
        try:
            user = self._request_json("/auth/v1/user", token=token)
        except IdentityRejected:
            return None
        user_id = user.get("id")
        return str(user_id) if user_id else None

    def create_user(self, *, email: str, password: str, name: str | None = None) -> dict[str, Any]:
        body = {
            "email": email,
            "password": password,
            "user_metadata": {"name": name},
            # No email server is configured, so accounts are confirmed on creation.
            "email_confirm": True,
        }
        return self._request_json("/auth/v1/admin/users", method="POST", token=self.service_role_key, body=body)


@dataclass
class StaticIdentityResolver(IdentityResolver):
    """Fixed token -> user id table for local development and tests."""

    tokens: dict[str, str] = field(default_factory=dict)
    users: dict[str, dict[str, Any]] = field(default_factory=dict)

    def resolve(self, token: str) -> str | None:
        return self.tokens.get(token)

    def create_user(self, *, email: str, password: str, name: str | None = None) -> dict[str, Any]:
        email = email.strip().lower()
        if email in self.users:
            raise IdentityRejected("A user with this email address has already been registered")
        user = {"id": str(uuid.uuid4()), "email": email, "user_metadata": {"name": name}}
        self.users[email] = user
        return user


def parse_static_tokens(raw: str | None) -> dict[str, str]:
    tokens: dict[str, str] = {}
    for pair in parse_csv(raw):
        token, sep, user_id = pair.partition(":")
        if sep and token.strip() and user_id.strip():
            tokens[token.strip()] = user_id.strip()
    return tokens


def identity_from_config(config: dict) -> IdentityResolver:
    backend = (config.get("IDENTITY_BACKEND") or "supabase").strip().lower()
    if backend == "static":
        return StaticIdentityResolver(tokens=parse_static_tokens(config.get("STATIC_TOKENS")))
    if backend != "supabase":
        raise RuntimeError(f"Unknown IDENTITY_BACKEND: {backend}")
    return SupabaseIdentityResolver(
        base_url=(config.get("SUPABASE_URL") or "").strip(),
        anon_key=(config.get("SUPABASE_ANON_KEY") or "").strip(),
        service_role_key=(config.get("SUPABASE_SERVICE_ROLE_KEY") or "").strip(),
    )


def current_identity() -> IdentityResolver:
    from flask import current_app

    return current_app.extensions["identity_resolver"]
