from threading import Lock
from typing import Any, List, Tuple

from todo_api.errors import TaskNotFoundError
from todo_api.logger import get_logger
from todo_api.models.requests import parse_create, parse_update
from todo_api.models.task import Task
from todo_api.store import TaskStore

logger = get_logger("service")


class TaskService:
    """
    List/create/update/delete over a TaskStore.

    Every operation loads the full list, scans it linearly and saves it back.
    The lock serialises load-mutate-save within this process only.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self._lock = Lock()

    def _find(self, tasks: List[Task], task_id: str) -> Tuple[int, Task]:
        for index, task in enumerate(tasks):
            if task.id == task_id:
                return index, task
        raise TaskNotFoundError(task_id)

    def list_tasks(self) -> List[Task]:
        return self.store.load()

    def create_task(self, body: Any) -> Task:
        payload = parse_create(body)
        task = Task(task=payload.task)

        with self._lock:
            tasks = self.store.load()
            tasks.append(task)
            self.store.save(tasks)

        logger.info("Task created | id=%s", task.id)
        return task

    def update_task(self, task_id: str, body: Any) -> Task:
        with self._lock:
            tasks = self.store.load()
            index, task = self._find(tasks, task_id)

            changes = parse_update(body).changes()
            updated = task.model_copy(update=changes)
            tasks[index] = updated
            self.store.save(tasks)

        logger.info("Task updated | id=%s | fields=%s", task_id, sorted(changes))
        return updated

    def delete_task(self, task_id: str) -> Task:
        with self._lock:
            tasks = self.store.load()
            index, task = self._find(tasks, task_id)
            del tasks[index]
            self.store.save(tasks)

        logger.info("Task deleted | id=%s", task_id)
        return task
