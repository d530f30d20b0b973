"""Health check endpoint — no dependencies beyond settings and the store."""

from fastapi import APIRouter, Depends, Request

from planner_sync.application.services import PlannerStore
from planner_sync.infrastructure.dependencies import get_planner_store

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request, store: PlannerStore = Depends(get_planner_store)) -> dict:
    """Returns the current application health status."""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "remote_enabled": store.remote_enabled,
        "pending_reconciliations": store.pending_count,
    }
