from datetime import datetime, timezone

from fastapi import APIRouter, Request

from todo_api.errors import StorageError

router = APIRouter()


def build_health_snapshot(request: Request) -> dict:
    store = request.app.state.task_service.store
    store_status = "connected"
    error = None

    try:
        store.load()
    except StorageError as exc:
        store_status = "error"
        error = exc.message

    payload = {
        "status": "healthy" if store_status == "connected" else "degraded",
        "service": "todo-api",
        "store": store.describe(),
        "store_status": store_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if error:
        payload["error"] = error
    return payload


@router.get("/health", summary="Service health check")
def health_check(request: Request):
    return build_health_snapshot(request)
