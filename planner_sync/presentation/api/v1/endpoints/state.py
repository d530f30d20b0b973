"""State, selection and sync endpoints."""

from fastapi import APIRouter, Depends

from planner_sync.application.schemas import SelectionUpdate, StateResponse
from planner_sync.application.services import PlannerStore
from planner_sync.infrastructure.dependencies import get_planner_store

router = APIRouter(tags=["State"])


@router.get("/state", response_model=StateResponse)
async def get_state(store: PlannerStore = Depends(get_planner_store)) -> StateResponse:
    """Return the full current state."""
    return StateResponse.from_state(store.state)


@router.put("/selection", response_model=StateResponse)
async def set_selection(
    data: SelectionUpdate,
    store: PlannerStore = Depends(get_planner_store),
) -> StateResponse:
    """Set (or clear) the currently selected client."""
    store.set_current_client_id(data.client_id)
    return StateResponse.from_state(store.state)


@router.post("/sync", response_model=StateResponse)
async def sync_from_remote(store: PlannerStore = Depends(get_planner_store)) -> StateResponse:
    """Reload both collections from the remote store, keeping local data on failure."""
    await store.load_initial_data()
    return StateResponse.from_state(store.state)
