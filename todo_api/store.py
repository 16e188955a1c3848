# todo_api/store.py
import json
import os
import tempfile
from pathlib import Path
from threading import Lock
from typing import List, Optional

import requests

from todo_api.config import Settings
from todo_api.errors import StorageError
from todo_api.logger import get_logger
from todo_api.models.task import Task, tasks_from_json, tasks_to_json

logger = get_logger("store")


class TaskStore:
    """
    Persistence for the whole task list.

    load() returns the current collection, save() replaces it. There is no
    partial update: every mutation writes the full list back.
    """

    name = "base"

    def load(self) -> List[Task]:
        raise NotImplementedError

    def save(self, tasks: List[Task]) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return self.name


# ------------------- Remote KV -------------------

class KVTaskStore(TaskStore):
    """
    Cloudflare Workers KV over its REST API. The list lives as JSON text
    under a single key.
    """

    name = "kv"

    def __init__(
        self,
        account_id: str,
        namespace_id: str,
        api_token: str,
        key: str = "tasks",
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.key = key
        self.timeout = timeout
        self._url = (
            f"{base_url.rstrip('/')}/accounts/{account_id}"
            f"/storage/kv/namespaces/{namespace_id}/values/{key}"
        )
        self._session = session or requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {api_token}"})

    def load(self) -> List[Task]:
        try:
            resp = self._session.get(self._url, timeout=self.timeout)
            if resp.status_code == 404:
                return []
            resp.raise_for_status()
            if not resp.text.strip():
                return []
            return tasks_from_json(json.loads(resp.text))
        except (requests.RequestException, ValueError) as exc:
            logger.exception("Failed to load tasks from KV | key=%s | error=%s", self.key, exc)
            raise StorageError("Failed to load tasks") from exc

    def save(self, tasks: List[Task]) -> None:
        payload = json.dumps(tasks_to_json(tasks))
        try:
            resp = self._session.put(
                self._url,
                data=payload.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.exception("Failed to save tasks to KV | key=%s | error=%s", self.key, exc)
            raise StorageError("Failed to save tasks") from exc


# ------------------- Local fallback -------------------

class LocalTaskStore(TaskStore):
    """
    DEV MODE store: tasks kept in process memory and mirrored to a JSON
    file so they survive restarts. data_file=None keeps everything in memory.
    """

    name = "local"

    def __init__(self, data_file: Optional[Path] = None):
        self.data_file = Path(data_file) if data_file is not None else None
        self._tasks: List[Task] = []
        self._lock = Lock()
        self._load_from_file()

    # ------------------- Persistence -------------------

    def _load_from_file(self):
        if self.data_file is None or not self.data_file.exists():
            return
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                self._tasks = tasks_from_json(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning("Failed to load local tasks from %s, starting empty: %s", self.data_file, e)
            self._tasks = []

    def _save_to_file(self):
        if self.data_file is None:
            return
        # Write next to the target and swap in, so a crash never leaves half a file.
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.data_file.parent,
                prefix=f".{self.data_file.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                json.dump(tasks_to_json(self._tasks), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.data_file)
        except OSError as e:
            logger.error("Failed to save local tasks to %s: %s", self.data_file, e)
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    # ------------------- Store API -------------------

    def load(self) -> List[Task]:
        with self._lock:
            return [t.model_copy() for t in self._tasks]

    def save(self, tasks: List[Task]) -> None:
        with self._lock:
            self._tasks = [t.model_copy() for t in tasks]
            self._save_to_file()


# ------------------- Selection -------------------

def build_store(settings: Settings) -> TaskStore:
    if settings.kv_enabled():
        logger.info("Using KV task store | namespace=%s | key=%s", settings.KV_NAMESPACE_ID, settings.KV_KEY)
        return KVTaskStore(
            account_id=settings.KV_ACCOUNT_ID,
            namespace_id=settings.KV_NAMESPACE_ID,
            api_token=settings.KV_API_TOKEN,
            key=settings.KV_KEY,
            base_url=settings.KV_BASE_URL,
            timeout=settings.KV_TIMEOUT_SECONDS,
        )

    logger.info("KV not configured, using local task store | file=%s", settings.LOCAL_DATA_FILE)
    return LocalTaskStore(settings.LOCAL_DATA_FILE)
