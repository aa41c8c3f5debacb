"""HTTP-level tests: the FastAPI app with its session and use cases swapped for fakes."""

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from app import main
from app.adapters.persistence.database import get_session
from app.infrastructure.api.auth import get_current_user
from app.infrastructure.api.dependencies import get_get_assignment_uc, get_update_assignment_uc
from app.main import app


class FakeSession:
    def __init__(self, reachable: bool = True):
        self.reachable = reachable
        self.commits = 0
        self.rollbacks = 0

    async def scalar(self, statement):
        if not self.reachable:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        return 1

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client_for(session, update_uc, get_uc):
    def _client(user):
        app.dependency_overrides[get_session] = lambda: session
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_update_assignment_uc] = lambda: update_uc
        app.dependency_overrides[get_get_assignment_uc] = lambda: get_uc
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    yield _client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health_ok(client_for):
    async with client_for(None) as client:
        response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok", "database": "connected", "service": "lms-assignments",
    }


@pytest.mark.asyncio
async def test_health_degraded(client_for, session):
    session.reachable = False
    async with client_for(None) as client:
        response = await client.get("/api/health")
    assert response.json()["status"] == "degraded"


@pytest.mark.asyncio
async def test_graphql_mutation_commits_session(client_for, session, teacher):
    query = """
    mutation { updateAssignment(input: {id: "100", name: "Renamed"}) {
      assignment { name } errors { message } } }
    """
    async with client_for(teacher) as client:
        response = await client.post("/graphql", json={"query": query})

    assert response.status_code == 200
    assert response.json()["data"]["updateAssignment"] == {
        "assignment": {"name": "Renamed"}, "errors": None,
    }
    assert session.commits == 1


@pytest.mark.asyncio
async def test_graphql_permission_error(client_for, session, student):
    query = 'mutation { updateAssignment(input: {id: "100", state: deleted}) { errors { message } } }'
    async with client_for(student) as client:
        response = await client.post("/graphql", json={"query": query})

    body = response.json()
    assert body["data"] is None
    assert body["errors"][0]["message"] == "insufficient permission"
    assert session.rollbacks == 1


class FakeEngine:
    def __init__(self, reachable: bool):
        self.reachable = reachable
        self.disposed = False

    def connect(self):
        return self

    async def __aenter__(self):
        if not self.reachable:
            raise OSError("connection refused")
        return FakeSession()

    async def __aexit__(self, *exc):
        return False

    async def dispose(self):
        self.disposed = True


@pytest.mark.asyncio
async def test_startup_tolerates_missing_database(monkeypatch):
    engine = FakeEngine(reachable=False)
    monkeypatch.setattr(main, "engine", engine)
    async with main.lifespan(app):
        pass
    assert engine.disposed
