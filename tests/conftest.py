import os
import tempfile

# Must be set before blog_backend.config is imported
_tmp = tempfile.mkdtemp(prefix="blog_api_tests_")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_tmp, "uploads"))
os.environ.setdefault("LOG_DIR", os.path.join(_tmp, "logs"))
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blog_backend.db import Base, get_db
from blog_backend.main import app
from blog_backend.models import Article
from tests.helpers import register, login, create_article


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield TestingSession
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = db_session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    register(client, "alice")
    return login(client, "alice")


@pytest.fixture
def bob(client):
    register(client, "bob")
    return login(client, "bob")


@pytest.fixture
def article_id(client, alice):
    res = create_article(client, alice)
    assert res.status_code == 201
    return res.json()["article"]["id"]


@pytest.fixture
def fetch_article(db_session):
    def _fetch(article_id):
        with db_session() as session:
            return session.get(Article, article_id)
    return _fetch
