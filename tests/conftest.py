"""
Pytest configuration and fixtures for testing.

Tests run against an in-memory SQLite database (StaticPool keeps a single
shared connection alive), so no PostgreSQL instance is required.
"""
import pytest
from contextlib import asynccontextmanager
from typing import Any, Dict, Generator, List, Optional, Tuple

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.api.error_handlers import register_error_handlers
from app.api.router import api_router
from app.core.config import settings
from app.core.database import get_engine
from app.domain.forum_operations import ForumOperations
from app.domain.forum_store import SQLForumStore, StoreResult
from app.models.database.forums import Forum


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

VALID_FORUM = {
    "name": "Belize Coding Circle",
    "level": "University",
    "contact": "Ana Chan",
    "phone": "+501 622-1234",
    "email": "hello@codingcircle.bz",
    "website": "https://codingcircle.bz",
    "address": "12 Regent Street, Belize City",
    "mode": ["in-person"],
}


@pytest.fixture
def forum_payload() -> Dict[str, Any]:
    """Fresh copy of a fully valid create payload."""
    payload = dict(VALID_FORUM)
    payload["mode"] = list(VALID_FORUM["mode"])
    return payload


@pytest.fixture
def make_forum():
    """Build an unsaved Forum entity, overriding any fields."""
    def _make(**overrides) -> Forum:
        fields = dict(VALID_FORUM)
        fields["mode"] = list(VALID_FORUM["mode"])
        fields.update(overrides)
        return Forum(**fields)
    return _make


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture(name="engine", scope="function")
def engine_fixture() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the forums table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine, tables=[Forum.__table__])
    try:
        yield engine
    finally:
        SQLModel.metadata.drop_all(engine, tables=[Forum.__table__])
        engine.dispose()


@pytest.fixture
def store(engine: Engine) -> SQLForumStore:
    return SQLForumStore(engine)


@pytest.fixture
def ops(store: SQLForumStore) -> ForumOperations:
    return ForumOperations(store)


class FakeForumStore:
    """In-memory stand-in that records calls and returns queued results."""

    def __init__(self, *results: StoreResult):
        self.results: List[StoreResult] = list(results)
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def _next(self, name: str, *args: Any) -> StoreResult:
        self.calls.append((name, args))
        if not self.results:
            raise AssertionError(f"unexpected store call: {name}{args}")
        return self.results.pop(0)

    def insert(self, values: Dict[str, Any]) -> StoreResult:
        return self._next("insert", values)

    def fetch(self, forum_id: int) -> StoreResult:
        return self._next("fetch", forum_id)

    def update(self, forum_id: int, expected_version: int, values: Dict[str, Any]) -> StoreResult:
        return self._next("update", forum_id, expected_version, values)

    def delete(self, forum_id: int) -> StoreResult:
        return self._next("delete", forum_id)

    def ping(self) -> StoreResult:
        return self._next("ping")


@pytest.fixture
def fake_store_factory():
    def _make(*results: StoreResult) -> FakeForumStore:
        return FakeForumStore(*results)
    return _make


# ---------------------------------------------------------------------------
# App Factory (no lifespan - skips database verification)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def test_lifespan(app: FastAPI):
    """Minimal lifespan that skips database verification."""
    yield


def create_test_app(engine: Optional[Engine] = None) -> FastAPI:
    """FastAPI app with production routers and error handlers, no rate limiting."""
    app = FastAPI(
        title="Forums Test API",
        lifespan=test_lifespan,
    )
    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    if engine is not None:
        app.dependency_overrides[get_engine] = lambda: engine
    return app


@pytest.fixture
def app(engine: Engine) -> FastAPI:
    return create_test_app(engine)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_forum(client: TestClient, forum_payload: Dict[str, Any]):
    """POST a forum (valid payload plus overrides) and return the forum JSON."""
    def _create(**overrides) -> Dict[str, Any]:
        body = dict(forum_payload)
        body.update(overrides)
        response = client.post("/forums", json=body)
        assert response.status_code == 201, response.text
        return response.json()["forum"]
    return _create
