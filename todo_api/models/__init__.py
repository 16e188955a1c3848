from todo_api.models.requests import TaskCreate, TaskUpdate, parse_create, parse_update
from todo_api.models.task import Envelope, Task, fail, ok, tasks_from_json, tasks_to_json

__all__ = [
    "Envelope",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "fail",
    "ok",
    "parse_create",
    "parse_update",
    "tasks_from_json",
    "tasks_to_json",
]
