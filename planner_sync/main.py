"""FastAPI application factory — the planner's composition root."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from planner_sync.config import Settings, get_settings
from planner_sync.infrastructure.dependencies import PlannerRuntime, build_runtime
from planner_sync.infrastructure.logging.log_config import setup_logging
from planner_sync.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create remote tables, load data, drain on shutdown."""
    runtime: PlannerRuntime = app.state.runtime
    setup_logging(app.state.settings)

    await runtime.start()
    logger.info(
        "Planner ready — %d clients, %d cards (remote %s)",
        len(runtime.store.state.clients),
        len(runtime.store.state.cards),
        "enabled" if runtime.store.remote_enabled else "disabled",
    )

    yield

    # Shutdown
    await runtime.stop()


def create_app(
    settings: Settings | None = None,
    runtime: PlannerRuntime | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    The app owns exactly one ``PlannerRuntime``; pass one in to share a store
    with other code (or a test).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.runtime = runtime or build_runtime(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "planner_sync.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
