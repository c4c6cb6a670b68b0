"""Shared fixtures: an isolated SQLite store per test and an app wired to a mock LLM."""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todoai.llm_util.response_mockllm import ResponseMockLLM
from todoai_api.api import app, get_llm
from todoai_api.config import DatabaseSettings
from todoai_api.database import (
    TodoDatabaseService, create_database_engine, create_session_factory, create_tables, get_database,
)


@pytest.fixture
def session_factory(tmp_path: Path):
    engine = create_database_engine(DatabaseSettings(url=f"sqlite:///{tmp_path / 'todoai.db'}"))
    create_tables(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db_service(session_factory):
    db = session_factory()
    yield TodoDatabaseService(db)
    db.close()


@pytest.fixture
def make_client(session_factory):
    """Build a TestClient whose /ai endpoint answers with the given model responses."""

    def override_get_database():
        db = session_factory()
        try:
            yield TodoDatabaseService(db)
        finally:
            db.close()

    def _make(responses=None):
        llm = ResponseMockLLM(responses=responses or ['{"intent": "read"}'])
        app.dependency_overrides[get_database] = override_get_database
        app.dependency_overrides[get_llm] = lambda: llm
        return TestClient(app), llm

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_service):
    """Insert todos in order and return the stored rows."""

    def _seed(*tasks: str) -> list:
        return [db_service.insert_todo(task) for task in tasks]

    return _seed
