"""Content card endpoints — thin wrappers over the optimistic store actions."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from planner_sync.application.schemas import CardCreate, CardResponse, CardUpdate
from planner_sync.application.services import PlannerStore
from planner_sync.domain.exceptions import EntityNotFoundError
from planner_sync.infrastructure.dependencies import get_planner_store

router = APIRouter(prefix="/cards", tags=["Cards"])


def _not_found(card_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(EntityNotFoundError("ContentCard", card_id)),
    )


@router.get("", response_model=list[CardResponse])
async def list_cards(
    client_id: str | None = Query(None, description="Filter by owning client ID"),
    store: PlannerStore = Depends(get_planner_store),
) -> list[CardResponse]:
    """Return cards in local order, optionally for one client."""
    cards = store.state.cards
    if client_id is not None:
        cards = tuple(c for c in cards if c.client_id == client_id)
    return [CardResponse.from_entity(c) for c in cards]


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    data: CardCreate,
    store: PlannerStore = Depends(get_planner_store),
) -> CardResponse:
    """Create a card. The response carries the optimistic (temporary) record."""
    card = await store.add_card(data.model_dump(exclude_unset=True))
    return CardResponse.from_entity(card)


@router.patch("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: str,
    data: CardUpdate,
    store: PlannerStore = Depends(get_planner_store),
) -> CardResponse:
    """Update a card's fields."""
    if store.state.find_card(card_id) is None:
        raise _not_found(card_id)
    await store.update_card(card_id, data.model_dump(exclude_unset=True))
    return CardResponse.from_entity(store.state.find_card(card_id))


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: str,
    store: PlannerStore = Depends(get_planner_store),
) -> None:
    """Delete a card. Deleting an unknown id is a no-op."""
    await store.delete_card(card_id)


@router.post(
    "/{card_id}/duplicate",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_card(
    card_id: str,
    store: PlannerStore = Depends(get_planner_store),
) -> CardResponse:
    """Copy a card under a new id with a suffixed title."""
    copy = await store.duplicate_card(card_id)
    if copy is None:
        raise _not_found(card_id)
    return CardResponse.from_entity(copy)
