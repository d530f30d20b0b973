"""Unit tests for the PlannerStore optimistic actions and reconciliation."""

import asyncio
import dataclasses
import logging
from datetime import datetime

import pytest

from planner_sync.application.services import ACTION_NAMES, PlannerStore, StateContainer
from planner_sync.domain.entities import Client, ContentCard, StateSnapshot
from tests.fakes import FakeRemoteStore, FakeStateCache


def _store(remote: FakeRemoteStore | None = None, snapshot: StateSnapshot | None = None) -> PlannerStore:
    return PlannerStore(StateContainer(FakeStateCache(snapshot)), remote)


def _local_shape(store: PlannerStore) -> dict:
    """State with generated ids and timestamps replaced by client names."""
    state = store.state
    names = {c.id: c.name for c in state.clients}
    cards = []
    for card in state.cards:
        fields = dataclasses.asdict(card)
        del fields["id"]
        fields["client_id"] = names.get(card.client_id, card.client_id)
        cards.append(fields)
    return {
        "clients": [c.name for c in state.clients],
        "cards": cards,
        "current_client": names.get(state.current_client_id),
    }


# ── Local-only mode ──


@pytest.mark.asyncio
async def test_add_client_without_remote():
    store = _store()

    client = await store.add_client({"name": "Acme"})

    assert len(store.state.clients) == 1
    assert store.state.clients[0] is client
    assert client.name == "Acme"
    assert isinstance(client.id, str) and client.id
    assert datetime.fromisoformat(client.created_at)
    assert store.pending_count == 0


@pytest.mark.asyncio
async def test_add_client_accepts_legacy_name_alias():
    store = _store()
    client = await store.add_client({"nome": "  Legacy Co "})
    assert client.name == "Legacy Co"


@pytest.mark.asyncio
async def test_load_without_remote_keeps_cached_state():
    snapshot = StateSnapshot(clients=(Client(id="c1", name="Cached"),))
    store = _store(snapshot=snapshot)

    await store.load_initial_data()

    assert store.state.clients == snapshot.clients
    assert store.state.is_loading is False


def test_set_current_client_id_rejects_non_strings():
    store = _store()
    store.set_current_client_id("c1")
    assert store.state.current_client_id == "c1"
    store.set_current_client_id(42)  # type: ignore[arg-type]
    assert store.state.current_client_id is None


def test_view_exposes_state_and_every_action():
    store = _store()
    view = store.view()
    assert view.clients == ()
    for name in ACTION_NAMES:
        assert callable(getattr(view, name))
    with pytest.raises(AttributeError):
        view.not_there


# ── Optimistic visibility and reconciliation ──


@pytest.mark.asyncio
async def test_new_client_visible_before_remote_resolves():
    gate = asyncio.Event()
    remote = FakeRemoteStore(gate=gate)
    store = _store(remote)

    temp = await store.add_client({"name": "Acme", "niche": "coffee"})

    assert [c.id for c in store.state.clients] == [temp.id]
    assert store.pending_count == 1

    gate.set()
    await store.wait_for_reconciliation()

    saved = store.state.clients[0]
    assert saved.id == "srv-1"
    assert saved.name == "Acme"
    assert saved.niche == "coffee"
    assert saved.created_at == "2024-01-01T00:00:00+00:00"
    assert remote.clients["srv-1"]["name"] == "Acme"


@pytest.mark.asyncio
async def test_card_reconciliation_only_substitutes_id():
    remote = FakeRemoteStore()
    store = _store(remote)

    temp = await store.add_card(
        {"clientId": "c1", "title": "Reel", "caption": "local only", "tags": ["x"]}
    )
    await store.wait_for_reconciliation()

    saved = store.state.cards[0]
    assert saved.id == "srv-1"
    assert saved == temp.with_updates(id="srv-1")
    assert remote.cards["srv-1"] == {
        "title": "Reel",
        "client_id": "c1",
        "id": "srv-1",
        "created_at": "2024-01-01T00:00:00+00:00",
    }


@pytest.mark.asyncio
async def test_unassigned_card_never_sent_to_remote():
    remote = FakeRemoteStore()
    store = _store(remote)

    card = await store.add_card({"title": "Draft"})
    await store.wait_for_reconciliation()

    assert store.state.cards == (card,)
    assert remote.calls == []


@pytest.mark.asyncio
async def test_add_card_defaults():
    store = _store()
    card = await store.add_card()
    assert card.client_id == ""
    assert card.title == "Untitled post"
    assert card.type == "Post"
    assert card.status == "To Do"
    assert card.is_favorite is False


@pytest.mark.asyncio
async def test_reconciliation_after_local_delete_is_noop():
    gate = asyncio.Event()
    store = _store(FakeRemoteStore(gate=gate))

    card = await store.add_card({"clientId": "c1"})
    await store.delete_card(card.id)
    gate.set()
    await store.wait_for_reconciliation()

    assert store.state.cards == ()


# ── Remote failures ──


@pytest.mark.asyncio
async def test_remote_failure_keeps_optimistic_state():
    remote = FakeRemoteStore(fail=True)
    store = _store(remote)

    client = await store.add_client({"name": "Acme"})
    await store.update_client(client.id, {"name": "Acme 2"})
    await store.wait_for_reconciliation()

    assert store.state.clients == (client.with_updates(name="Acme 2"),)
    assert ("insert", "clients") in remote.calls


@pytest.mark.asyncio
async def test_failed_remote_call_is_logged_once(caplog):
    store = _store(FakeRemoteStore(fail=True))

    with caplog.at_level(logging.DEBUG):
        await store.add_client({"name": "Acme"})
        await store.wait_for_reconciliation()

    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert len(errors) == 1
    assert "add_client" in errors[0].getMessage()


@pytest.mark.asyncio
async def test_unconfigured_remote_equals_failing_remote():
    async def scenario(store: PlannerStore) -> None:
        a = await store.add_client({"name": "A"})
        b = await store.add_client({"name": "B"})
        store.set_current_client_id(a.id)
        first = await store.add_card({"clientId": a.id, "title": "one"})
        await store.add_card({"clientId": b.id, "title": "two"})
        await store.update_card(first.id, {"status": "Done"})
        await store.duplicate_card(first.id)
        await store.update_client(b.id, {"nome": "B2"})
        await store.delete_client(a.id)
        await store.wait_for_reconciliation()

    local_only = _store()
    failing = _store(FakeRemoteStore(fail=True))
    await scenario(local_only)
    await scenario(failing)

    assert _local_shape(local_only) == _local_shape(failing)


@pytest.mark.asyncio
async def test_initial_load_replaces_collections():
    remote = FakeRemoteStore()
    remote.clients = {
        "s2": {"id": "s2", "name": "Zeta", "created_at": "2024-01-02"},
        "s1": {"id": "s1", "name": "Alpha", "created_at": "2024-01-01"},
    }
    remote.cards = {"k1": {"id": "k1", "title": "Hello", "client_id": "s1"}}
    store = _store(remote, StateSnapshot(clients=(Client(id="old", name="Old"),)))
    seen_loading: list[bool] = []
    store.subscribe(lambda: seen_loading.append(store.state.is_loading))

    await store.load_initial_data()

    assert [c.id for c in store.state.clients] == ["s1", "s2"]
    assert [c.name for c in store.state.clients] == ["Alpha", "Zeta"]
    assert store.state.cards == (ContentCard(id="k1", title="Hello", client_id="s1"),)
    assert seen_loading == [True, False]


@pytest.mark.asyncio
async def test_initial_load_failure_keeps_local_state():
    snapshot = StateSnapshot(
        clients=(Client(id="c1", name="Cached"),),
        cards=(ContentCard(id="k1", client_id="c1"),),
    )
    store = _store(FakeRemoteStore(fail=True), snapshot)

    await store.load_initial_data()

    assert store.state.clients == snapshot.clients
    assert store.state.cards == snapshot.cards
    assert store.state.is_loading is False


@pytest.mark.asyncio
async def test_initial_load_keeps_local_state_when_only_cards_fail():
    snapshot = StateSnapshot(
        clients=(Client(id="c1", name="Cached"),),
        cards=(ContentCard(id="k1", client_id="c1"),),
    )
    remote = FakeRemoteStore(fail_on={"select:cards"})
    remote.clients = {"s1": {"id": "s1", "name": "Remote"}}
    store = _store(remote, snapshot)

    await store.load_initial_data()

    assert ("select", "clients") in remote.calls
    assert ("select", "cards") in remote.calls
    assert store.state.clients == snapshot.clients
    assert store.state.cards == snapshot.cards
    assert store.state.is_loading is False


# ── Updates and deletes ──


@pytest.mark.asyncio
async def test_update_card_applies_locally_and_sends_remote_columns_only():
    remote = FakeRemoteStore()
    store = _store(remote, StateSnapshot(cards=(ContentCard(id="k1", client_id="c1"),)))

    await store.update_card("k1", {"status": "Done", "isFavorite": 1})
    await store.update_card("k1", {"title": "Renamed"})
    await store.wait_for_reconciliation()

    card = store.state.cards[0]
    assert (card.status, card.is_favorite, card.title) == ("Done", True, "Renamed")
    assert remote.calls == [("update", "cards", "k1")]


@pytest.mark.asyncio
async def test_update_preserves_collection_order():
    store = _store()
    first = await store.add_card({"title": "1"})
    await store.add_card({"title": "2"})
    await store.update_card(first.id, {"title": "1b"})
    assert [c.title for c in store.state.cards] == ["1b", "2"]


@pytest.mark.asyncio
async def test_delete_client_cascades_cards_locally_only():
    remote = FakeRemoteStore()
    a, b = Client(id="a", name="A"), Client(id="b", name="B")
    cards = tuple(ContentCard(id=f"k{i}", client_id="a") for i in range(3)) + (
        ContentCard(id="kb", client_id="b"),
    )
    store = _store(remote, StateSnapshot(clients=(a, b), cards=cards))
    store.set_current_client_id("a")

    await store.delete_client("a")
    await store.wait_for_reconciliation()

    assert store.state.clients == (b,)
    assert [c.id for c in store.state.cards] == ["kb"]
    assert store.state.current_client_id is None
    assert remote.calls == [("delete", "clients", "a")]


@pytest.mark.asyncio
async def test_delete_client_keeps_other_selection():
    store = _store(snapshot=StateSnapshot(clients=(Client(id="a"), Client(id="b"))))
    store.set_current_client_id("b")
    await store.delete_client("a")
    assert store.state.current_client_id == "b"


@pytest.mark.asyncio
async def test_delete_client_is_idempotent():
    store = _store(snapshot=StateSnapshot(clients=(Client(id="a"),)))
    await store.delete_client("a")
    await store.delete_client("a")
    await store.delete_client("missing")
    assert store.state.clients == ()


# ── Duplication ──


@pytest.mark.asyncio
async def test_duplicate_card_copies_fields_with_new_id_and_suffix():
    original = ContentCard(
        id="k1", client_id="c1", title="Launch", caption="cap", tags=("a", "b"), is_favorite=True
    )
    remote = FakeRemoteStore()
    store = _store(remote, StateSnapshot(cards=(original,)))

    copy = await store.duplicate_card("k1")
    await store.wait_for_reconciliation()

    assert copy is not None
    assert copy.id != original.id
    assert copy.title == "Launch (Copy)"
    assert copy == original.with_updates(id=copy.id, title="Launch (Copy)")
    assert store.state.cards == (original, copy)
    # the remote insert happens but its id is not written back
    assert remote.calls == [("insert", "cards")]
    assert store.state.cards[1].id == copy.id


@pytest.mark.asyncio
async def test_duplicate_unassigned_card_stays_local():
    remote = FakeRemoteStore()
    store = _store(remote, StateSnapshot(cards=(ContentCard(id="k1"),)))
    await store.duplicate_card("k1")
    await store.wait_for_reconciliation()
    assert len(store.state.cards) == 2
    assert remote.calls == []


@pytest.mark.asyncio
async def test_duplicate_unknown_card_is_noop():
    store = _store()
    assert await store.duplicate_card("missing") is None
    assert store.state.cards == ()
