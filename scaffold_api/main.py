"""Scaffold API service - FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import time

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import structlog

from shared.logging import (
    CORRELATION_HEADER,
    new_correlation_id,
    request_context,
    setup_logging,
)

from . import __version__, routers
from .config import Settings, get_settings
from .delays import DelayStrategy, NoDelay, SimulatedDelay
from .dependencies import GENERAL_LIMIT, GENERATE_LIMIT, general_rate_limit
from .handlers import register_exception_handlers
from .orchestrator import GenerationOrchestrator
from .rate_limit import SlidingWindowRateLimiter
from .store import ProjectStore, build_store

DESCRIPTION = "Generates starter projects from a stack and feature selection"


def build_delay(settings: Settings) -> DelayStrategy:
    if not settings.generation_delay_enabled:
        return NoDelay()
    return SimulatedDelay(
        base=settings.generation_base_delay,
        per_point=settings.generation_delay_per_point,
        maximum=settings.generation_max_delay,
        steps=settings.generation_progress_steps,
    )


def build_rate_limiters(settings: Settings) -> dict[str, SlidingWindowRateLimiter]:
    if not settings.rate_limit_enabled:
        return {}
    return {
        GENERAL_LIMIT: SlidingWindowRateLimiter(
            settings.rate_limit_requests,
            settings.rate_limit_window_seconds,
        ),
        GENERATE_LIMIT: SlidingWindowRateLimiter(
            settings.generate_rate_limit_requests,
            settings.generate_rate_limit_window_seconds,
            message="Generation limit reached. Please try again later.",
        ),
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    setup_logging(**settings.logging_options())
    structlog.get_logger().info(
        "scaffold_api_started",
        store_backend=settings.store_backend,
        delay_enabled=settings.generation_delay_enabled,
        rate_limit_enabled=settings.rate_limit_enabled,
    )
    yield
    await app.state.orchestrator.shutdown()
    await app.state.store.close()


def create_app(
    settings: Settings | None = None,
    *,
    store: ProjectStore | None = None,
    delay: DelayStrategy | None = None,
) -> FastAPI:
    """Build the application. ``store`` and ``delay`` override the configured ones."""
    settings = settings or get_settings()
    store = store or build_store(settings)

    app = FastAPI(
        title="Scaffold API",
        description=DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.orchestrator = GenerationOrchestrator(store, delay or build_delay(settings))
    app.state.rate_limiters = build_rate_limiters(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def correlation_middleware(request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
        start = time.time()
        logger = structlog.get_logger()

        with request_context(correlation_id, method=request.method, path=request.url.path):
            try:
                response = await call_next(request)
            except Exception as e:
                duration_ms = (time.time() - start) * 1000
                logger.error(
                    "http_request_exception",
                    error=str(e),
                    error_type=type(e).__name__,
                    duration_ms=round(duration_ms, 2),
                    exc_info=True,
                )
                raise

            duration_ms = (time.time() - start) * 1000
            if response.status_code >= 500:  # noqa: PLR2004
                logger.error(
                    "http_request_failed",
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                )
            else:
                logger.info(
                    "http_request",
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Scaffold API",
            "version": __version__,
            "description": DESCRIPTION,
        }

    app.include_router(routers.health.router)
    api_dependencies = [Depends(general_rate_limit)]
    app.include_router(routers.generate.router, prefix="/api", dependencies=api_dependencies)
    app.include_router(routers.projects.router, prefix="/api", dependencies=api_dependencies)

    return app


app = create_app()
