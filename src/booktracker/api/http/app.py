"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.booktracker.api.http.routers.books import router as books_router
from src.booktracker.api.http.routers.health import router as health_router
from src.booktracker.runtime.logging_setup import configure_logging
from src.booktracker.core.exceptions import InvalidArgumentError, NotFoundError
from src.booktracker.runtime.app_data import ApplicationDependencies
from src.booktracker.runtime.config.config_data import ConfigData
from src.booktracker.runtime.context import get_config

__all__ = ["create_app"]


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application; dependencies are created on startup."""
    config = config or get_config()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting book tracker API")
        app.state.app_dependencies = ApplicationDependencies.build(config)
        try:
            yield
        finally:
            app.state.app_dependencies.close()
            logger.info("Book tracker API stopped")

    app = FastAPI(
        title="Book Tracker",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    app.middleware("http")(log_requests)
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)

    app.include_router(health_router)
    app.include_router(books_router)

    return app
