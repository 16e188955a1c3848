import json
from pathlib import Path
from unittest import mock

import pytest
import requests
from fastapi.testclient import TestClient

from todo_api.config import Settings
from todo_api.errors import StorageError
from todo_api.main import create_app
from todo_api.models.task import Task
from todo_api.store import KVTaskStore, LocalTaskStore, build_store


def _response(status_code: int = 200, text: str = "") -> mock.MagicMock:
    resp = mock.MagicMock(status_code=status_code, text=text)
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp


def _kv_store(session) -> KVTaskStore:
    return KVTaskStore("acct", "ns", "token", base_url="https://kv.test/v4", session=session)


# ------------------- Local -------------------

def test_local_store_roundtrips_through_file(tmp_path: Path):
    data_file = tmp_path / "tasks.json"
    store = LocalTaskStore(data_file)
    task = Task(task="Buy milk")
    store.save([task])

    on_disk = json.loads(data_file.read_text(encoding="utf-8"))
    assert on_disk == [task.to_json()]
    assert "createdAt" in on_disk[0]

    reopened = LocalTaskStore(data_file)
    assert reopened.load() == [task]


def test_local_store_missing_file_is_empty(tmp_path: Path):
    assert LocalTaskStore(tmp_path / "nope.json").load() == []


def test_local_store_corrupt_file_is_empty(tmp_path: Path):
    data_file = tmp_path / "tasks.json"
    data_file.write_text("{broken", encoding="utf-8")
    assert LocalTaskStore(data_file).load() == []


def test_local_store_load_returns_copies():
    store = LocalTaskStore(None)
    store.save([Task(task="a")])

    loaded = store.load()
    loaded.append(Task(task="b"))
    loaded[0].completed = True

    assert [t.task for t in store.load()] == ["a"]
    assert store.load()[0].completed is False


def test_local_store_write_failure_keeps_memory(tmp_path: Path):
    store = LocalTaskStore(tmp_path / "missing-dir" / "tasks.json")
    store.save([Task(task="a")])
    assert [t.task for t in store.load()] == ["a"]


def test_local_store_interrupted_write_keeps_old_file(tmp_path: Path):
    data_file = tmp_path / "tasks.json"
    store = LocalTaskStore(data_file)
    first = Task(task="a")
    store.save([first])

    with mock.patch("todo_api.store.json.dump", side_effect=OSError("disk full")):
        store.save([first, Task(task="b")])

    assert json.loads(data_file.read_text(encoding="utf-8")) == [first.to_json()]
    assert [p.name for p in tmp_path.iterdir()] == ["tasks.json"]
    assert LocalTaskStore(data_file).load() == [first]


# ------------------- KV -------------------

def test_kv_load_parses_list():
    task = Task(task="Buy milk")
    session = mock.MagicMock()
    session.get.return_value = _response(200, json.dumps([task.to_json()]))

    store = _kv_store(session)
    assert store.load() == [task]
    url = session.get.call_args.args[0]
    assert url == "https://kv.test/v4/accounts/acct/storage/kv/namespaces/ns/values/tasks"
    session.headers.update.assert_called_once_with({"Authorization": "Bearer token"})


@pytest.mark.parametrize("resp", [_response(404), _response(200, ""), _response(200, "  ")])
def test_kv_load_without_data_is_empty(resp):
    session = mock.MagicMock()
    session.get.return_value = resp
    assert _kv_store(session).load() == []


@pytest.mark.parametrize(
    "outcome",
    [
        requests.ConnectionError("down"),
        _response(500),
        _response(200, "not json"),
        _response(200, '{"tasks": []}'),
    ],
)
def test_kv_load_failure_raises(outcome):
    session = mock.MagicMock()
    if isinstance(outcome, Exception):
        session.get.side_effect = outcome
    else:
        session.get.return_value = outcome

    with pytest.raises(StorageError) as exc:
        _kv_store(session).load()
    assert exc.value.status_code == 500


def test_kv_save_puts_whole_list():
    tasks = [Task(task="a"), Task(task="b")]
    session = mock.MagicMock()
    session.put.return_value = _response(200)

    _kv_store(session).save(tasks)

    kwargs = session.put.call_args.kwargs
    assert json.loads(kwargs["data"].decode("utf-8")) == [t.to_json() for t in tasks]


def test_kv_save_failure_raises():
    session = mock.MagicMock()
    session.put.side_effect = requests.Timeout("slow")

    with pytest.raises(StorageError):
        _kv_store(session).save([])


def test_kv_save_failure_surfaces_as_500():
    task = Task(task="Buy milk")
    session = mock.MagicMock()
    session.get.return_value = _response(200, json.dumps([task.to_json()]))
    session.put.side_effect = requests.ConnectionError("down")

    with TestClient(create_app(store=_kv_store(session))) as c:
        created = c.post("/api/todos", json={"task": "Walk dog"})
        updated = c.put(f"/api/todos/{task.id}", json={"completed": True})
        listed = c.get("/api/todos").json()["data"]

    for resp in (created, updated):
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Failed to save tasks"}
    assert session.put.call_count == 2
    assert listed == [task.to_json()]


def test_kv_failure_surfaces_as_500():
    session = mock.MagicMock()
    session.get.side_effect = requests.ConnectionError("down")

    with TestClient(create_app(store=_kv_store(session))) as c:
        resp = c.get("/api/todos")
        health = c.get("/health").json()

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Failed to load tasks"}
    assert health["status"] == "degraded"
    assert health["store"] == "kv"


# ------------------- Selection -------------------

def test_build_store_defaults_to_local(tmp_path: Path):
    settings = Settings(LOCAL_DATA_FILE=tmp_path / "tasks.json", KV_ACCOUNT_ID=None)
    assert isinstance(build_store(settings), LocalTaskStore)


def test_build_store_uses_kv_when_configured():
    settings = Settings(KV_ACCOUNT_ID="acct", KV_NAMESPACE_ID="ns", KV_API_TOKEN="token")
    store = build_store(settings)
    assert isinstance(store, KVTaskStore)
    assert store.describe() == "kv"
