import os

os.environ.setdefault("EMBEDDINGS_PROVIDER", "stub")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import app, get_embedder
from app.db import create_schema, get_session_factory, insert_prompt
from app.embedding.stub_provider import StubEmbeddingProvider


@pytest.fixture()
def embedder():
    return StubEmbeddingProvider(dims=64)


@pytest.fixture()
def engine():
    """
    In-memory SQLite shared across threads, since the scoring pipeline
    runs store lookups in the threadpool.
    """
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = SessionLocal()
    try:
        insert_prompt(db, prompt_id="p1", prompt="a cat on a mat")
    finally:
        db.close()
    return SessionLocal


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_client(session_factory):
    """
    Build a TestClient whose collaborators are the given fakes.
    The lifespan is not entered, so no real clients are constructed.
    """

    def _make(embedder, sessions=None):
        factory = sessions or session_factory
        app.dependency_overrides[get_session_factory] = lambda: factory
        app.dependency_overrides[get_embedder] = lambda: embedder
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client, embedder):
    return make_client(embedder)
