from fastapi import status

# -----------------------------
# Error messages
# -----------------------------
TASK_REQUIRED = 'The "task" field is required and must be a non-empty string'
TASK_NON_EMPTY = 'The "task" field must be a non-empty string'
COMPLETED_BOOLEAN = 'The "completed" field must be a boolean'
TASK_NOT_FOUND = "Task not found"
REQUEST_FAILED = "Could not process the request"


class TodoAPIError(Exception):
    """Base error carrying the HTTP status used in the response envelope."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class TaskValidationError(TodoAPIError):
    status_code = status.HTTP_400_BAD_REQUEST


class TaskNotFoundError(TodoAPIError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, task_id: str):
        super().__init__(TASK_NOT_FOUND)
        self.task_id = task_id


class StorageError(TodoAPIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
