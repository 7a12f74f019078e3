"""Shared fixtures for the Idea Board test-suite."""

from typing import List

import pytest
from fastapi.testclient import TestClient

from idea_board_api.app.core.config import Settings
from idea_board_api.app.core.exceptions import StoreError
from idea_board_api.app.main import create_app
from idea_board_api.app.schemas.idea import IdeaRead
from idea_board_api.app.services.idea_store import IdeaStore, MemoryIdeaStore
from idea_board_api.app.services.sql_store import SQLiteIdeaStore


class BrokenStore(IdeaStore):
    """Store whose every operation fails like a lost database connection."""

    def list(self) -> List[IdeaRead]:
        raise StoreError("connection refused at 10.0.0.5:5432")

    def create(self, text: str) -> IdeaRead:
        raise StoreError("connection refused at 10.0.0.5:5432")

    def upvote(self, idea_id: str) -> IdeaRead:
        raise StoreError("connection refused at 10.0.0.5:5432")


@pytest.fixture
def memory_store():
    return MemoryIdeaStore()


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteIdeaStore(str(tmp_path / "ideas.db"))
    store.init()
    return store


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Each store implementation, ready for use."""
    if request.param == "memory":
        return MemoryIdeaStore()
    store = SQLiteIdeaStore(str(tmp_path / "ideas.db"))
    store.init()
    return store


@pytest.fixture
def client(memory_store):
    app = create_app(store=memory_store, config=Settings())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def broken_client():
    app = create_app(store=BrokenStore(), config=Settings())
    with TestClient(app) as test_client:
        yield test_client
