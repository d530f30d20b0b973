"""Domain value objects for the planner's in-memory state."""

from dataclasses import dataclass, field, fields
from typing import Any

from .client import Client
from .content_card import ContentCard


@dataclass(frozen=True)
class StateSnapshot:
    """The durable part of the state — what the local cache stores."""

    clients: tuple[Client, ...] = ()
    cards: tuple[ContentCard, ...] = ()
    daily_notes: tuple[Any, ...] = ()


@dataclass(frozen=True)
class StoreState:
    """The full in-memory state held by the state container.

    ``current_client_id`` and ``is_loading`` are transient and never written
    to the local cache.
    """

    clients: tuple[Client, ...] = ()
    cards: tuple[ContentCard, ...] = ()
    daily_notes: tuple[Any, ...] = field(default=())
    current_client_id: str | None = None
    is_loading: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: StateSnapshot) -> "StoreState":
        return cls(
            clients=snapshot.clients,
            cards=snapshot.cards,
            daily_notes=snapshot.daily_notes,
        )

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            clients=self.clients,
            cards=self.cards,
            daily_notes=self.daily_notes,
        )

    def find_client(self, client_id: str) -> Client | None:
        return next((c for c in self.clients if c.id == client_id), None)

    def find_card(self, card_id: str) -> ContentCard | None:
        return next((c for c in self.cards if c.id == card_id), None)


STATE_FIELDS: frozenset[str] = frozenset(f.name for f in fields(StoreState))
