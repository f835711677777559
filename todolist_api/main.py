import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todolist_api.core.config import Settings, get_settings
from todolist_api.core.logging_config import setup_logging
from todolist_api.dependencies import create_store
from todolist_api.errors import TodoError
from todolist_api.routers import todolists, todos

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


async def todo_error_handler(request: Request, exc: TodoError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def validation_detail(request: Request, exc: RequestValidationError) -> str:
    """Client-facing message; a bad path id wins over a bad body."""
    for err in exc.errors():
        loc = err.get("loc", ())
        if not loc or loc[0] != "path":
            continue
        if loc[-1] == "todo_id":
            return "Invalid Todo ID format"
        if "/todos" in request.url.path:
            return "Invalid List ID format"
        return "Invalid ID format"
    return "Invalid request body"


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Bad JSON and non-numeric ids are client errors, reported as 400
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": validation_detail(request, exc),
            "errors": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = create_store(settings)
        await store.startup()
        app.state.store = store
        try:
            yield
        finally:
            await store.shutdown()

    app = FastAPI(
        title="Todo List API",
        description="Todo lists and their tasks, kept in memory or in SQL Server",
        swagger_ui_parameters={"displayRequestDuration": True},
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_exception_handler(TodoError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(todolists.router)
    app.include_router(todos.router)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to Todo List API",
            "docs": "/docs",
            "version": VERSION,
        }

    @app.get("/health")
    async def health_check(request: Request):
        return {"status": "healthy", "backend": request.app.state.store.name}

    return app


app = create_app()
