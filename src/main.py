"""taskboard - kanban task manager REST API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import Settings, constants, settings as default_settings
from src.core.db_client import Database
from src.core.errors import ErrorCategory, build_error_response
from src.core.logging import SERVICE_VERSION, configure_logfire, instrument_fastapi
from src.core.schema import init_db
from src.interface.task_router import router as task_router


logger = logging.getLogger(__name__)


def _describe_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("path", "body", "query"))
    return f"{location} {error.get('msg', 'is invalid')}".strip()


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request errors (e.g. a non-integer task id) in the task API error shape."""
    messages = [_describe_request_error(error) for error in exc.errors()]
    body = build_error_response(ErrorCategory.INVALID_REQUEST, errors=messages)
    return JSONResponse(status_code=constants.HTTP_BAD_REQUEST, content=body.model_dump(exclude_none=True))


def create_app(app_settings: Settings | None = None, *, database: Database | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded settings)
        database: Pre-built database handle; one is created from
            ``sqlite_db_path`` when omitted

    Returns:
        Configured FastAPI application
    """
    current = app_settings or default_settings
    db = database or Database(current.sqlite_db_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan context manager."""
        # Startup
        configure_logfire(current)

        await init_db(db)
        app.state.db = db
        logger.info("Database initialized", extra={"db_path": str(db.path)})

        try:
            yield
        finally:
            # Shutdown
            await db.close()

    app = FastAPI(
        title="taskboard",
        description="Kanban task manager",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    # Instrument FastAPI with Logfire
    instrument_fastapi(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=current.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register routers
    app.include_router(task_router)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"}, status_code=constants.HTTP_OK)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
