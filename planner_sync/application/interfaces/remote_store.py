"""Abstract interface (port) for the optional remote relational store."""

from abc import ABC, abstractmethod
from typing import Any

RemoteRow = dict[str, Any]


class RemoteStore(ABC):
    """Port for the remote ``clients`` / ``cards`` tables.

    Rows cross this boundary in the remote (snake_case column) shape; mapping
    to domain entities is the normalizer's job. Every method raises
    ``RemoteStoreError`` on failure.
    """

    # ── clients ──────────────────────────────────────────────────────

    @abstractmethod
    async def list_clients(self) -> list[RemoteRow]:
        """Return every client row, ordered by name ascending."""
        ...

    @abstractmethod
    async def create_client(self, payload: RemoteRow) -> RemoteRow:
        """Insert one client row and return it as stored."""
        ...

    @abstractmethod
    async def update_client(self, client_id: str, payload: RemoteRow) -> None:
        """Update the client row with the given id."""
        ...

    @abstractmethod
    async def delete_client(self, client_id: str) -> None:
        """Delete the client row with the given id."""
        ...

    # ── cards ────────────────────────────────────────────────────────

    @abstractmethod
    async def list_cards(self) -> list[RemoteRow]:
        """Return every card row, unordered."""
        ...

    @abstractmethod
    async def create_card(self, payload: RemoteRow) -> RemoteRow:
        """Insert one card row and return it as stored."""
        ...

    @abstractmethod
    async def update_card(self, card_id: str, payload: RemoteRow) -> None:
        """Update the card row with the given id."""
        ...

    @abstractmethod
    async def delete_card(self, card_id: str) -> None:
        """Delete the card row with the given id."""
        ...
