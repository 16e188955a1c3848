# models/task.py

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def iso_now() -> str:
    """UTC timestamp with millisecond precision, e.g. 2026-10-19T08:15:30.123Z"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def new_task_id() -> str:
    return str(uuid.uuid4())


# -----------------------------
# Task
# -----------------------------
class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_task_id)
    task: str
    completed: bool = False
    created_at: str = Field(default_factory=iso_now, alias="createdAt")

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


def tasks_to_json(tasks: List[Task]) -> list[dict]:
    return [t.to_json() for t in tasks]


def tasks_from_json(data: Any) -> List[Task]:
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of tasks, got {type(data).__name__}")
    return [Task.model_validate(item) for item in data]


# -----------------------------
# Response envelope
# -----------------------------
class Envelope(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


def ok(data: Any) -> dict:
    return {"success": True, "data": data}


def fail(error: str) -> dict:
    return {"success": False, "error": error}
