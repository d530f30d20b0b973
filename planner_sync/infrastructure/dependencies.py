"""Composition root helpers and FastAPI dependency injection.

``build_runtime`` wires the infrastructure adapters to the application layer
once per process; the resulting objects are owned by the FastAPI app
(``app.state.runtime``) and handed to endpoints through dependencies.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from planner_sync.application.services import PlannerStore, StateContainer, StateEventStream
from planner_sync.config import Settings
from planner_sync.infrastructure.cache.json_state_cache import JsonFileStateCache
from planner_sync.infrastructure.database.session import (
    create_remote_engine,
    create_session_factory,
)
from planner_sync.infrastructure.remote.sqlalchemy_remote_store import SQLAlchemyRemoteStore

logger = logging.getLogger(__name__)


@dataclass
class PlannerRuntime:
    """Everything the application owns for the lifetime of the process."""

    store: PlannerStore
    events: StateEventStream
    remote: SQLAlchemyRemoteStore | None = None
    engine: AsyncEngine | None = None

    async def start(self) -> None:
        """Create the remote schema (if configured) and run the initial load."""
        if self.remote is not None and self.engine is not None:
            try:
                await self.remote.create_schema(self.engine)
            except Exception:
                logger.exception("Could not create remote schema — continuing")
        await self.store.load_initial_data()

    async def stop(self) -> None:
        await self.store.wait_for_reconciliation()
        await self.events.shutdown()
        if self.engine is not None:
            await self.engine.dispose()


def build_runtime(settings: Settings) -> PlannerRuntime:
    """Build one explicit PlannerStore from settings.

    The remote store is only created when ``database_url`` is set; otherwise
    the store runs in local-only mode.
    """
    container = StateContainer(JsonFileStateCache(settings.cache_file))

    engine: AsyncEngine | None = None
    remote: SQLAlchemyRemoteStore | None = None
    if settings.remote_enabled:
        try:
            engine = create_remote_engine(settings.database_url, echo=settings.database_echo)
            remote = SQLAlchemyRemoteStore(create_session_factory(engine))
        except Exception:
            logger.exception("Failed to initialize remote store — running locally")
            engine, remote = None, None
    else:
        logger.warning("DATABASE_URL is not configured; planner runs in local-only mode.")

    store = PlannerStore(container, remote)
    return PlannerRuntime(
        store=store,
        events=StateEventStream(store),
        remote=remote,
        engine=engine,
    )


def get_runtime(request: Request) -> PlannerRuntime:
    return request.app.state.runtime


def get_planner_store(request: Request) -> PlannerStore:
    """Provides the application's PlannerStore."""
    return get_runtime(request).store


def get_event_stream(request: Request) -> StateEventStream:
    """Provides the application's StateEventStream."""
    return get_runtime(request).events
