"""Client endpoints — thin wrappers over the optimistic store actions."""

from fastapi import APIRouter, Depends, HTTPException, status

from planner_sync.application.schemas import ClientCreate, ClientResponse, ClientUpdate
from planner_sync.application.services import PlannerStore
from planner_sync.domain.exceptions import EntityNotFoundError
from planner_sync.infrastructure.dependencies import get_planner_store

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=list[ClientResponse])
async def list_clients(store: PlannerStore = Depends(get_planner_store)) -> list[ClientResponse]:
    """Return every client in local order."""
    return [ClientResponse.from_entity(c) for c in store.state.clients]


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    store: PlannerStore = Depends(get_planner_store),
) -> ClientResponse:
    """Create a client. The response carries the optimistic (temporary) record."""
    client = await store.add_client(data.model_dump(exclude_unset=True))
    return ClientResponse.from_entity(client)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    store: PlannerStore = Depends(get_planner_store),
) -> ClientResponse:
    """Update a client's fields."""
    if store.state.find_client(client_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError("Client", client_id)),
        )
    await store.update_client(client_id, data.model_dump(exclude_unset=True))
    return ClientResponse.from_entity(store.state.find_client(client_id))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: str,
    store: PlannerStore = Depends(get_planner_store),
) -> None:
    """Delete a client and its cards. Deleting an unknown id is a no-op."""
    await store.delete_client(client_id)
