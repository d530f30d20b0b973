"""SSE endpoint streaming planner state changes."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from planner_sync.application.schemas import CardResponse, ClientResponse
from planner_sync.application.services import StateEventStream
from planner_sync.infrastructure.dependencies import get_event_stream

router = APIRouter(tags=["Events"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _dump(items: list) -> list[dict]:
    return [item.model_dump(by_alias=True) for item in items]


@router.get("/events")
async def state_event_stream(
    client_id: str | None = Query(
        None, description="Stream only this client's cards instead of the client list"
    ),
    events: StateEventStream = Depends(get_event_stream),
) -> StreamingResponse:
    """SSE endpoint for state changes.

    Without ``client_id`` clients receive 'clients' events whenever the client
    list changes. With ``client_id`` they receive 'cards' events whenever the
    card collection changes, filtered to that client.
    """
    if client_id is None:
        stream = events.subscribe(
            "clients",
            lambda view: view.clients,
            lambda clients: _dump([ClientResponse.from_entity(c) for c in clients]),
        )
    else:
        stream = events.subscribe(
            "cards",
            lambda view: view.cards,
            lambda cards: _dump(
                [CardResponse.from_entity(c) for c in cards if c.client_id == client_id]
            ),
        )
    return StreamingResponse(stream, media_type="text/event-stream", headers=_SSE_HEADERS)
