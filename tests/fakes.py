"""In-memory fakes for the planner's ports."""

import asyncio
import itertools
from datetime import datetime, timezone

from planner_sync.application.interfaces import RemoteRow, RemoteStore, StateCache
from planner_sync.domain.entities import StateSnapshot
from planner_sync.domain.exceptions import CacheError, RemoteStoreError


class FakeStateCache(StateCache):
    """Keeps the last saved snapshot in memory."""

    def __init__(self, initial: StateSnapshot | None = None, *, fail_writes: bool = False):
        self.saved: StateSnapshot | None = None
        self.save_count = 0
        self._initial = initial or StateSnapshot()
        self._fail_writes = fail_writes

    def load(self) -> StateSnapshot:
        return self._initial

    def save(self, snapshot: StateSnapshot) -> None:
        self.save_count += 1
        if self._fail_writes:
            raise CacheError("memory://", "quota exceeded")
        self.saved = snapshot


class FakeRemoteStore(RemoteStore):
    """In-memory remote store that assigns server ids and records every call.

    ``fail`` makes every call raise ``RemoteStoreError``; ``fail_on`` does the
    same for selected ``"operation:table"`` keys only. ``gate`` (an
    asyncio.Event) holds every call until it is set.
    """

    def __init__(
        self,
        *,
        fail: bool = False,
        fail_on: set[str] | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.clients: dict[str, RemoteRow] = {}
        self.cards: dict[str, RemoteRow] = {}
        self.calls: list[tuple[str, ...]] = []
        self.fail = fail
        self.fail_on = fail_on or set()
        self.gate = gate
        self._ids = itertools.count(1)

    async def _enter(self, operation: str, table: str, *args: str) -> None:
        self.calls.append((operation, table, *args))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail or f"{operation}:{table}" in self.fail_on:
            raise RemoteStoreError(operation, table, "connection refused")

    def _new_row(self, payload: RemoteRow) -> RemoteRow:
        return {
            **payload,
            "id": f"srv-{next(self._ids)}",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat(),
        }

    async def list_clients(self) -> list[RemoteRow]:
        await self._enter("select", "clients")
        return sorted(self.clients.values(), key=lambda r: r.get("name", ""))

    async def create_client(self, payload: RemoteRow) -> RemoteRow:
        await self._enter("insert", "clients")
        row = self._new_row(payload)
        self.clients[row["id"]] = row
        return row

    async def update_client(self, client_id: str, payload: RemoteRow) -> None:
        await self._enter("update", "clients", client_id)
        if client_id in self.clients:
            self.clients[client_id].update(payload)

    async def delete_client(self, client_id: str) -> None:
        await self._enter("delete", "clients", client_id)
        self.clients.pop(client_id, None)

    async def list_cards(self) -> list[RemoteRow]:
        await self._enter("select", "cards")
        return list(self.cards.values())

    async def create_card(self, payload: RemoteRow) -> RemoteRow:
        await self._enter("insert", "cards")
        row = self._new_row(payload)
        self.cards[row["id"]] = row
        return row

    async def update_card(self, card_id: str, payload: RemoteRow) -> None:
        await self._enter("update", "cards", card_id)
        if card_id in self.cards:
            self.cards[card_id].update(payload)

    async def delete_card(self, card_id: str) -> None:
        await self._enter("delete", "cards", card_id)
        self.cards.pop(card_id, None)
