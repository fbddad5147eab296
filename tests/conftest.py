import pytest

from app.ejama import create_app
from app.ejama.models import Base
from tests.helpers import MOD_TOKEN, OTHER_TOKEN, USER_TOKEN


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("STORE_BACKEND", "sql")
    monkeypatch.setenv("IDENTITY_BACKEND", "static")
    monkeypatch.setenv("STATIC_TOKENS", f"{USER_TOKEN}:user-1,{OTHER_TOKEN}:user-2,{MOD_TOKEN}:mod-1")
    monkeypatch.setenv("MODERATOR_USER_IDS", "mod-1")
    for k in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY", "MAX_PROFILE_PICTURE_BYTES"):
        monkeypatch.delenv(k, raising=False)

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return app.extensions["record_store"]
