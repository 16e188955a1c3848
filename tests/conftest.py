import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.store import LocalTaskStore


@pytest.fixture
def store():
    return LocalTaskStore(None)


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c


@pytest.fixture
def make_task(client):
    def _make(text: str = "Buy milk") -> dict:
        resp = client.post("/api/todos", json={"task": text})
        assert resp.status_code == 201
        return resp.json()["data"]

    return _make
