"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager import __version__
from taskmanager.api import tasks, users
from taskmanager.config import Settings, get_settings
from taskmanager.database import init_db
from taskmanager.errors import TaskManagerError
from taskmanager.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# First path segments owned by the API; never served from the static bundle
API_PREFIXES = ("user", "tasks", "health")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    yield


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None, **extra
) -> JSONResponse:
    """Build the ``{"success": false, "message": ...}`` error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
        headers=headers,
    )


def _field_name(loc: tuple) -> str:
    names = [str(part) for part in loc if part not in ("body", "query", "path")]
    if names:
        return names[-1]
    return str(loc[-1]) if loc else "body"


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Convert every failure into the JSON error envelope."""

    @app.exception_handler(TaskManagerError)
    async def handle_app_error(request: Request, exc: TaskManagerError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": _field_name(tuple(error.get("loc", ()))),
                "message": error.get("msg", "Invalid value").removeprefix("Value error, "),
            }
            for error in exc.errors()
        ]
        message = errors[0]["message"] if errors else "Invalid request"
        return error_response(status.HTTP_400_BAD_REQUEST, message, errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        extra = {"detail": str(exc)} if settings.debug else {}
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", **extra
        )


def register_spa_fallback(app: FastAPI, static_dir: Path) -> None:
    """Serve the built front-end, falling back to index.html for client routes."""
    root = static_dir.resolve()
    index_file = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa_fallback(full_path: str):
        if full_path.split("/", 1)[0] in API_PREFIXES:
            return error_response(status.HTTP_404_NOT_FOUND, "Not Found")
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index_file)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Manager API",
        description="Personal task lists with cookie-based sessions",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app, settings)

    # Register routers
    app.include_router(users.router)
    app.include_router(tasks.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    # Must come last: the fallback matches every GET path
    if settings.static_dir:
        static_dir = Path(settings.static_dir)
        if (static_dir / "index.html").is_file():
            register_spa_fallback(app, static_dir)
        else:
            logger.warning(f"Static bundle not found in {static_dir}, SPA fallback disabled")

    return app


app = create_app()
