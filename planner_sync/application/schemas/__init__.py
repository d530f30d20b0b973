from .planner import (
    CardCreate,
    CardResponse,
    CardUpdate,
    ClientCreate,
    ClientResponse,
    ClientUpdate,
    SelectionUpdate,
    StateResponse,
)

__all__ = [
    "CardCreate",
    "CardResponse",
    "CardUpdate",
    "ClientCreate",
    "ClientResponse",
    "ClientUpdate",
    "SelectionUpdate",
    "StateResponse",
]
