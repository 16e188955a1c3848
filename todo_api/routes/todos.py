# routes/todos.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from todo_api.models.task import Envelope, ok, tasks_to_json
from todo_api.service import TaskService

router = APIRouter()


def get_service(request: Request) -> TaskService:
    return request.app.state.task_service


@router.get("", response_model=Envelope, response_model_exclude_none=True)
def list_todos(service: TaskService = Depends(get_service)):
    return ok(tasks_to_json(service.list_tasks()))


@router.post(
    "",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_todo(body: Any = Body(None), service: TaskService = Depends(get_service)):
    task = service.create_task(body)
    return ok(task.to_json())


@router.put("/{task_id}", response_model=Envelope, response_model_exclude_none=True)
def update_todo(task_id: str, body: Any = Body(None), service: TaskService = Depends(get_service)):
    task = service.update_task(task_id, body)
    return ok(task.to_json())


@router.delete("/{task_id}", response_model=Envelope, response_model_exclude_none=True)
def delete_todo(task_id: str, service: TaskService = Depends(get_service)):
    task = service.delete_task(task_id)
    return ok(task.to_json())
