import logging

from flask import Flask, request
from dotenv import load_dotenv
from sqlalchemy import inspect as sa_inspect

from app.ejama.auth import load_request_context
from app.ejama.config import load_config
from app.ejama.db import init_db
from app.ejama.errors import register_error_handlers
from app.ejama.identity import identity_from_config
from app.ejama.models import KvRecord
from app.ejama.routes import bp as routes_bp
from app.ejama.store import store_from_config
from app.ejama.modules.community.routes import bp as community_bp
from app.ejama.modules.progress.routes import bp as progress_bp
from app.ejama.modules.questions.routes import bp as questions_bp
from app.ejama.modules.questions.admin import bp as questions_admin_bp
from app.ejama.modules.period.routes import bp as period_bp
from app.ejama.modules.profile.routes import bp as profile_bp
from app.ejama.modules.feedback.routes import bp as feedback_bp


def _check_production_config(app: Flask) -> None:
    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env not in ("prod", "production"):
        return
    if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
        raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")
    if app.config.get("STORE_BACKEND") == "memory":
        raise RuntimeError("STORE_BACKEND=memory is not allowed in production.")
    if str(app.config.get("DATABASE_URL") or "").startswith("sqlite"):
        raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
    if app.config.get("IDENTITY_BACKEND") == "static":
        raise RuntimeError("IDENTITY_BACKEND=static is not allowed in production.")
    missing = [k for k in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY") if not app.config.get(k)]
    if missing:
        raise RuntimeError(f"Missing required identity provider settings: {', '.join(missing)}")


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    _check_production_config(app)

    sessions = None
    if app.config.get("STORE_BACKEND") == "sql":
        init_db(app)
        sessions = app.extensions["sqlalchemy_sessionmaker"]

        def _dispose_engine_on_fork() -> None:
            import os
            if hasattr(os, "register_at_fork"):
                def _after_fork_child():
                    engine = app.extensions.get("sqlalchemy_engine")
                    if engine:
                        engine.dispose()
                        app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

                os.register_at_fork(after_in_child=_after_fork_child)

        _dispose_engine_on_fork()

    app.extensions["record_store"] = store_from_config(app.config, sessions)
    app.extensions["identity_resolver"] = identity_from_config(app.config)

    register_error_handlers(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(community_bp, url_prefix="/api")
    app.register_blueprint(progress_bp, url_prefix="/api")
    app.register_blueprint(questions_bp, url_prefix="/api")
    app.register_blueprint(questions_admin_bp, url_prefix="/api/admin")
    app.register_blueprint(period_bp, url_prefix="/api")
    app.register_blueprint(profile_bp, url_prefix="/api")
    app.register_blueprint(feedback_bp, url_prefix="/api")

    app.before_request(load_request_context)

    @app.after_request
    def _cors_headers(response):  # type: ignore[no-redef]
        response.headers["Access-Control-Allow-Origin"] = app.config.get("CORS_ALLOW_ORIGIN") or "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        response.headers["Access-Control-Expose-Headers"] = "Content-Length"
        response.headers["Access-Control-Max-Age"] = "600"
        if request.method == "OPTIONS":
            response.status_code = 204
        return response

    # Schema health (lean): the record store needs its one table.
    engine = app.extensions.get("sqlalchemy_engine")
    if engine is not None:
        try:
            if not sa_inspect(engine).has_table(KvRecord.__tablename__):
                app.logger.error(
                    "DB schema out of date; run `alembic upgrade head`. Missing: %s (table)",
                    KvRecord.__tablename__,
                )
        except Exception as e:
            app.logger.exception("Schema health check failed: %s", e)

    # Startup logging
    logging.getLogger(__name__).info(
        "create_app() complete; store=%s identity=%s",
        app.config.get("STORE_BACKEND"),
        app.config.get("IDENTITY_BACKEND"),
    )

    return app
