import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    store_backend: str
    identity_backend: str
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str
    static_tokens: str
    moderator_user_ids: str

    max_profile_picture_bytes: int
    cors_allow_origin: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer (got {raw!r}).")


def parse_csv(raw: str | None) -> list[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_getenv("DATABASE_URL", "sqlite:///ejama.db"),
        store_backend=_getenv("STORE_BACKEND", "sql").lower(),
        identity_backend=_getenv("IDENTITY_BACKEND", "supabase").lower(),
        supabase_url=_getenv("SUPABASE_URL", ""),
        supabase_anon_key=_getenv("SUPABASE_ANON_KEY", ""),
        supabase_service_role_key=_getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
        static_tokens=_getenv("STATIC_TOKENS", ""),
        moderator_user_ids=_getenv("MODERATOR_USER_IDS", ""),
        max_profile_picture_bytes=_getenv_int("MAX_PROFILE_PICTURE_BYTES", 2 * 1024 * 1024),
        cors_allow_origin=_getenv("CORS_ALLOW_ORIGIN", "*"),
    )


def load_config() -> dict:
    s = load_settings()
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "STORE_BACKEND": s.store_backend,
        "IDENTITY_BACKEND": s.identity_backend,
        "SUPABASE_URL": s.supabase_url,
        "SUPABASE_ANON_KEY": s.supabase_anon_key,
        "SUPABASE_SERVICE_ROLE_KEY": s.supabase_service_role_key,
        "STATIC_TOKENS": s.static_tokens,
        "MODERATOR_USER_IDS": frozenset(parse_csv(s.moderator_user_ids)),
        "MAX_PROFILE_PICTURE_BYTES": s.max_profile_picture_bytes,
        "CORS_ALLOW_ORIGIN": s.cors_allow_origin,
        # JSON bodies only; profile pictures arrive as data URLs
        "MAX_CONTENT_LENGTH": s.max_profile_picture_bytes + 64 * 1024,
        "JSON_SORT_KEYS": False,
    }
