"""FastAPI application for IssueTrack"""

import logging
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from issuetrack.api.issues import router as issues_router
from issuetrack.config import get_storage_backend
from issuetrack.errors import IssueTrackError
from issuetrack.lifecycle.engine import IssueLifecycle
from issuetrack.storage.repository import InMemoryRepository, IssueRepository

logger = logging.getLogger(__name__)


def error_response(message: str, code: int) -> JSONResponse:
    return JSONResponse(status_code=code, content={"error": message, "code": code})


def describe_validation_error(exc: RequestValidationError) -> str:
    """Single-line message for a request FastAPI could not parse"""
    errors = exc.errors()
    if not errors:
        return "Invalid JSON format"
    first = errors[0]
    loc = tuple(first.get("loc", ()))
    if loc and loc[0] == "path":
        return "Invalid issue ID"
    if first.get("type") == "json_invalid" or len(loc) < 2:
        return "Invalid JSON format"
    field = ".".join(str(part) for part in loc[1:])
    return f"Invalid field {field}: {first.get('msg')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {"error": ..., "code": ...}"""

    @app.exception_handler(IssueTrackError)
    async def issuetrack_error_handler(request: Request, exc: IssueTrackError):
        logger.warning(
            "Rejected %s %s: %s (%s)",
            request.method, request.url.path, exc.message, type(exc).__name__,
        )
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
        return error_response(message, 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code)


def create_app(
    repository: Optional[IssueRepository] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Build the application around ``repository``.

    Without a repository the storage backend is chosen from project
    configuration; the sqlite backend migrates its database on startup.
    """
    app = FastAPI(
        title="IssueTrack API",
        description="Issue tracker with an assignee-driven status lifecycle",
        version="0.1.0",
    )

    storage = None
    if repository is None:
        storage = get_storage_backend()
        if storage == "sqlite":
            from issuetrack.storage.sql_repository import SqlAlchemyRepository
            repository = SqlAlchemyRepository()
        else:
            repository = InMemoryRepository()

    app.state.lifecycle = IssueLifecycle(repository, clock=clock)
    app.include_router(issues_router, tags=["issues"])
    register_exception_handlers(app)

    @app.get("/health", response_class=PlainTextResponse)
    async def health_check():
        """Health check endpoint"""
        return "OK"

    if storage == "sqlite":
        @app.on_event("startup")
        async def startup_event():
            """Initialize database and run migrations on startup"""
            from issuetrack.storage.migrations import initialize_database
            initialize_database()

    logger.debug("Created app with %s storage", storage or type(repository).__name__)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8080)
