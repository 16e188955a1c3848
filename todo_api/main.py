from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_api.config import Settings, settings as default_settings
from todo_api.errors import REQUEST_FAILED, TodoAPIError
from todo_api.logger import logger
from todo_api.models.task import fail
from todo_api.routes import health, todos
from todo_api.service import TaskService
from todo_api.store import TaskStore, build_store


# -----------------------------
# Error handlers
# -----------------------------
async def todo_error_handler(request: Request, exc: TodoAPIError):
    if exc.status_code >= 500:
        logger.error("[ERROR] %s %s | %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=fail(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Bodies are validated by the service; this only sees undecodable JSON.
    logger.warning("[REQUEST] %s %s | invalid body: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=fail(REQUEST_FAILED))


async def failure_boundary(request: Request, call_next):
    # Runs inside CORSMiddleware so the envelope keeps its CORS headers.
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("[ERROR] %s %s | Exception: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=fail(REQUEST_FAILED))


# -----------------------------
# App factory
# -----------------------------
def create_app(store: Optional[TaskStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    store = store or build_store(settings)

    app = FastAPI(title="Todo API", version="1.0.0")
    app.state.settings = settings
    app.state.task_service = TaskService(store)

    # Unexpected errors; must be registered before CORS to sit inside it
    app.middleware("http")(failure_boundary)

    # CORS setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(TodoAPIError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(todos.router, prefix="/api/todos", tags=["Todos"])
    app.include_router(health.router, tags=["Health"])

    @app.get("/")
    def root():
        return {"message": "Todo API", "todos": "/api/todos", "docs": "/docs"}

    @app.on_event("startup")
    def on_startup():
        logger.info("Todo API ready | store=%s", store.describe())

    return app


app = create_app()
