# models/requests.py
from typing import Any, Optional

from pydantic import BaseModel, StrictBool, StrictStr, ValidationError, field_validator

from todo_api.errors import (
    COMPLETED_BOOLEAN,
    REQUEST_FAILED,
    TASK_NON_EMPTY,
    TASK_REQUIRED,
    TaskValidationError,
)


def _non_empty(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class TaskCreate(BaseModel):
    task: StrictStr

    @field_validator("task")
    @classmethod
    def _strip_task(cls, value: str) -> str:
        return _non_empty(value)


class TaskUpdate(BaseModel):
    task: Optional[StrictStr] = None
    completed: Optional[StrictBool] = None

    @field_validator("task", "completed", mode="before")
    @classmethod
    def _reject_null(cls, value):
        # An explicit null is a present field with a wrong type.
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("task")
    @classmethod
    def _strip_task(cls, value: str) -> str:
        return _non_empty(value)

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


# -----------------------------
# Body parsing
# -----------------------------
def _first_bad_field(exc: ValidationError) -> str | None:
    for err in exc.errors():
        loc = err.get("loc") or ()
        if loc:
            return str(loc[0])
    return None


def parse_create(body: Any) -> TaskCreate:
    if not isinstance(body, dict):
        raise TaskValidationError(REQUEST_FAILED)
    try:
        return TaskCreate.model_validate(body)
    except ValidationError:
        raise TaskValidationError(TASK_REQUIRED)


def parse_update(body: Any) -> TaskUpdate:
    if not isinstance(body, dict):
        raise TaskValidationError(REQUEST_FAILED)
    try:
        return TaskUpdate.model_validate(body)
    except ValidationError as exc:
        field = _first_bad_field(exc)
        if field == "completed":
            raise TaskValidationError(COMPLETED_BOOLEAN)
        raise TaskValidationError(TASK_NON_EMPTY)
