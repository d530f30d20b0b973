"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from planner_sync.presentation.api.v1.endpoints.health import router as health_router
from planner_sync.presentation.api.v1.endpoints.state import router as state_router
from planner_sync.presentation.api.v1.endpoints.clients import router as clients_router
from planner_sync.presentation.api.v1.endpoints.cards import router as cards_router
from planner_sync.presentation.api.v1.endpoints.events import router as events_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(state_router)
router.include_router(clients_router)
router.include_router(cards_router)
router.include_router(events_router)
