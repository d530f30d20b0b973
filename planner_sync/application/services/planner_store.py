"""Planner store — optimistic mutation actions with background reconciliation.

Every action first applies its change to the local state container (which
persists the snapshot and notifies subscribers), then, when a remote store is
configured, schedules a best-effort background task against it.

Reconciliation contract: each remote call runs at most once and is never
retried. A failed remote call is logged and the optimistic local state stays
final; no error from the remote layer ever reaches the action's caller.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine, Mapping
from typing import Any

from planner_sync.application import normalizer
from planner_sync.application.interfaces import RemoteStore
from planner_sync.application.services.state_container import Listener, StateContainer
from planner_sync.domain.entities import (
    COPY_SUFFIX,
    Client,
    ContentCard,
    StoreState,
    new_temporary_id,
    utc_now_iso,
)
from planner_sync.infrastructure.logging.colored_logger import SyncLogger, SyncStage

logger = logging.getLogger(__name__)
slog = SyncLogger("PlannerStore")

ACTION_NAMES: tuple[str, ...] = (
    "set_current_client_id",
    "load_initial_data",
    "add_client",
    "update_client",
    "delete_client",
    "add_card",
    "update_card",
    "delete_card",
    "duplicate_card",
)


class StoreView:
    """Read-only combined view of the current state and the store's actions.

    Attribute access resolves state fields first (``view.clients``,
    ``view.current_client_id``) and then actions (``view.add_client``).
    Action callables are bound once per store, so selecting one returns the
    same object on every notification.
    """

    __slots__ = ("_state", "_actions")

    def __init__(self, state: StoreState, actions: Mapping[str, Callable[..., Any]]) -> None:
        self._state = state
        self._actions = actions

    @property
    def state(self) -> StoreState:
        return self._state

    def __getattr__(self, name: str) -> Any:
        try:
            return getattr(self._state, name)
        except AttributeError:
            pass
        try:
            return self._actions[name]
        except KeyError:
            raise AttributeError(name) from None


class PlannerStore:
    """Public operation set for clients and content cards.

    Owned by the composition root and passed to consumers explicitly.
    ``remote`` is optional; without it the store runs purely locally.
    """

    def __init__(self, container: StateContainer, remote: RemoteStore | None = None) -> None:
        self._container = container
        self._remote = remote
        self._pending: set[asyncio.Task[None]] = set()
        self._actions: dict[str, Callable[..., Any]] = {
            name: getattr(self, name) for name in ACTION_NAMES
        }

    # ── State access ─────────────────────────────────────────────────

    @property
    def state(self) -> StoreState:
        return self._container.state

    @property
    def remote_enabled(self) -> bool:
        return self._remote is not None

    @property
    def pending_count(self) -> int:
        """Number of background reconciliation tasks still in flight."""
        return len(self._pending)

    def view(self) -> StoreView:
        return StoreView(self._container.state, self._actions)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._container.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._container.unsubscribe(listener)

    async def wait_for_reconciliation(self) -> None:
        """Wait until every scheduled background task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ── Selection / load ─────────────────────────────────────────────

    def set_current_client_id(self, client_id: str | None) -> None:
        self._container.apply(
            {"current_client_id": client_id if isinstance(client_id, str) else None}
        )

    async def load_initial_data(self) -> None:
        """Replace both collections with the remote contents.

        On any fetch error the existing (cache-seeded) state is kept. The
        loading flag is cleared either way.
        """
        if self._remote is None:
            slog.warning(SyncStage.LOAD, "Remote store not configured — running in local-only mode")
            return

        self._container.apply({"is_loading": True})
        try:
            with slog.timed_step(SyncStage.LOAD, "Fetching clients and cards"):
                client_rows = await self._remote.list_clients()
                card_rows = await self._remote.list_cards()
        except Exception:
            logger.exception("Initial load failed — keeping local data")
            self._container.apply({"is_loading": False})
            return

        self._container.apply({
            "clients": tuple(normalizer.client_from_row(row) for row in client_rows),
            "cards": tuple(normalizer.card_from_row(row) for row in card_rows),
            "is_loading": False,
        })
        slog.step_complete(
            SyncStage.LOAD, "Local state replaced", clients=len(client_rows), cards=len(card_rows)
        )

    # ── Clients ──────────────────────────────────────────────────────

    async def add_client(self, data: Mapping[str, Any]) -> Client:
        """Create a client optimistically; returns the temporary record."""
        fields = normalizer.normalize_client_input(data)
        fields.pop("created_at", None)
        temp = Client(
            id=new_temporary_id(),
            created_at=utc_now_iso(),
            **{"name": "", **fields},
        )
        self._container.apply(lambda prev: {"clients": (*prev.clients, temp)})
        slog.step_start(SyncStage.OPTIMISTIC, "add_client", id=temp.id)

        if self._remote is not None:
            self._schedule(self._reconcile_new_client(temp), f"add_client {temp.id}")
        return temp

    async def _reconcile_new_client(self, temp: Client) -> None:
        with slog.timed_step(SyncStage.REMOTE, "clients.insert", temp_id=temp.id):
            row = await self._remote.create_client(normalizer.client_to_insert(temp))
        saved = normalizer.client_from_row(row)

        # The remote schema is authoritative for clients: replace the whole record.
        self._container.apply(lambda prev: {
            "clients": tuple(saved if c.id == temp.id else c for c in prev.clients),
        })
        slog.step_complete(SyncStage.RECONCILE, "client id reconciled", temp_id=temp.id, id=saved.id)

    async def update_client(self, client_id: str, updates: Mapping[str, Any]) -> None:
        fields = normalizer.normalize_client_input(updates)
        fields.pop("created_at", None)
        self._container.apply(lambda prev: {
            "clients": tuple(
                c.with_updates(**fields) if c.id == client_id else c for c in prev.clients
            ),
        })
        slog.step_start(SyncStage.OPTIMISTIC, "update_client", id=client_id)

        if self._remote is None:
            return
        payload = normalizer.client_to_update(updates)
        if payload:
            self._schedule(
                self._remote_call("clients.update", self._remote.update_client(client_id, payload)),
                f"update_client {client_id}",
            )

    async def delete_client(self, client_id: str) -> None:
        """Remove a client and, locally, every card assigned to it.

        Only the client row is deleted remotely; its remote cards are left
        in place.
        """
        self._container.apply(lambda prev: {
            "clients": tuple(c for c in prev.clients if c.id != client_id),
            "cards": tuple(c for c in prev.cards if c.client_id != client_id),
            "current_client_id": (
                None if prev.current_client_id == client_id else prev.current_client_id
            ),
        })
        slog.step_start(SyncStage.OPTIMISTIC, "delete_client", id=client_id)

        if self._remote is not None:
            self._schedule(
                self._remote_call("clients.delete", self._remote.delete_client(client_id)),
                f"delete_client {client_id}",
            )

    # ── Cards ────────────────────────────────────────────────────────

    async def add_card(self, data: Mapping[str, Any] | None = None) -> ContentCard:
        """Create a card optimistically; returns the temporary record.

        Cards without a client are never sent to the remote store.
        """
        card = ContentCard(id=new_temporary_id(), **normalizer.normalize_card_input(data))
        self._container.apply(lambda prev: {"cards": (*prev.cards, card)})
        slog.step_start(SyncStage.OPTIMISTIC, "add_card", id=card.id)

        if self._remote is not None and card.client_id:
            self._schedule(self._reconcile_new_card(card), f"add_card {card.id}")
        return card

    async def _reconcile_new_card(self, temp: ContentCard) -> None:
        with slog.timed_step(SyncStage.REMOTE, "cards.insert", temp_id=temp.id):
            row = await self._remote.create_card(normalizer.card_to_insert(temp))
        saved_id = normalizer.card_from_row(row).id

        # Most card fields are local-only: substitute the id, keep everything else.
        self._container.apply(lambda prev: {
            "cards": tuple(
                c.with_updates(id=saved_id) if c.id == temp.id else c for c in prev.cards
            ),
        })
        slog.step_complete(SyncStage.RECONCILE, "card id reconciled", temp_id=temp.id, id=saved_id)

    async def update_card(self, card_id: str, updates: Mapping[str, Any]) -> None:
        fields = normalizer.normalize_card_input(updates)
        self._container.apply(lambda prev: {
            "cards": tuple(
                c.with_updates(**fields) if c.id == card_id else c for c in prev.cards
            ),
        })
        slog.step_start(SyncStage.OPTIMISTIC, "update_card", id=card_id)

        if self._remote is None:
            return
        payload = normalizer.card_to_update(updates)
        if payload:
            self._schedule(
                self._remote_call("cards.update", self._remote.update_card(card_id, payload)),
                f"update_card {card_id}",
            )

    async def delete_card(self, card_id: str) -> None:
        self._container.apply(lambda prev: {
            "cards": tuple(c for c in prev.cards if c.id != card_id),
        })
        slog.step_start(SyncStage.OPTIMISTIC, "delete_card", id=card_id)

        if self._remote is not None:
            self._schedule(
                self._remote_call("cards.delete", self._remote.delete_card(card_id)),
                f"delete_card {card_id}",
            )

    async def duplicate_card(self, card_id: str) -> ContentCard | None:
        """Copy a card under a new temporary id with a suffixed title.

        The remote insert for the copy is issued only when it has a client,
        and its remote id is not written back to the local state.
        """
        original = self._container.state.find_card(card_id)
        if original is None:
            return None

        copy = original.with_updates(
            id=new_temporary_id(),
            title=f"{original.title}{COPY_SUFFIX}",
        )
        self._container.apply(lambda prev: {"cards": (*prev.cards, copy)})
        slog.step_start(SyncStage.OPTIMISTIC, "duplicate_card", source=card_id, id=copy.id)

        if self._remote is not None and copy.client_id:
            # TODO: write the remote id back like add_card once duplicate ids are settled
            self._schedule(
                self._remote_call("cards.insert", self._remote.create_card(normalizer.card_to_insert(copy))),
                f"duplicate_card {copy.id}",
            )
        return copy

    # ── Background reconciliation ────────────────────────────────────

    async def _remote_call(self, operation: str, call: Coroutine[Any, Any, Any]) -> None:
        with slog.timed_step(SyncStage.REMOTE, operation):
            await call

    def _schedule(self, coro: Coroutine[Any, Any, None], description: str) -> None:
        task = asyncio.create_task(self._run_reconciliation(coro, description))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_reconciliation(self, coro: Coroutine[Any, Any, None], description: str) -> None:
        try:
            await coro
        except Exception as e:
            slog.step_error(
                SyncStage.RECONCILE, f"{description} — keeping optimistic local state", error=e
            )
