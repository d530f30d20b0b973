"""Integration tests for the SQLAlchemy remote store against SQLite (aiosqlite)."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from planner_sync.application.services import PlannerStore, StateContainer
from planner_sync.domain.exceptions import RemoteStoreError
from planner_sync.infrastructure.database.session import (
    create_remote_engine,
    create_session_factory,
)
from planner_sync.infrastructure.remote.sqlalchemy_remote_store import SQLAlchemyRemoteStore
from tests.fakes import FakeStateCache


async def _remote(tmp_path) -> tuple[SQLAlchemyRemoteStore, AsyncEngine]:
    engine = create_remote_engine(f"sqlite:///{tmp_path / 'remote.db'}")
    remote = SQLAlchemyRemoteStore(create_session_factory(engine))
    await remote.create_schema(engine)
    return remote, engine


@pytest.mark.asyncio
async def test_client_crud(tmp_path):
    remote, engine = await _remote(tmp_path)
    try:
        zeta = await remote.create_client({"name": "Zeta", "niche": "tea", "unknown": "x"})
        alpha = await remote.create_client({"name": "Alpha"})

        assert zeta["id"] and zeta["id"] != alpha["id"]
        assert zeta["niche"] == "tea"
        assert "unknown" not in zeta
        assert isinstance(zeta["created_at"], str)

        await remote.update_client(zeta["id"], {"name": "Zeta 2", "created_at": "ignored"})
        rows = await remote.list_clients()
        assert [r["name"] for r in rows] == ["Alpha", "Zeta 2"]

        await remote.delete_client(alpha["id"])
        await remote.delete_client("missing")  # no row, no error
        assert [r["id"] for r in await remote.list_clients()] == [zeta["id"]]
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_card_crud_with_empty_client_as_null(tmp_path):
    remote, engine = await _remote(tmp_path)
    try:
        client = await remote.create_client({"name": "Acme"})
        card = await remote.create_card({"title": "Hello", "client_id": client["id"]})
        assert card["client_id"] == client["id"]

        await remote.update_card(card["id"], {"client_id": "", "title": "Unassigned"})
        rows = await remote.list_cards()
        assert rows[0]["title"] == "Unassigned"
        assert rows[0]["client_id"] is None

        await remote.delete_card(card["id"])
        assert await remote.list_cards() == []
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_missing_tables_raise_remote_store_error(tmp_path):
    engine = create_remote_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    remote = SQLAlchemyRemoteStore(create_session_factory(engine))
    try:
        with pytest.raises(RemoteStoreError) as exc_info:
            await remote.list_clients()
        assert exc_info.value.table == "clients"
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_store_reconciles_against_database(tmp_path):
    remote, engine = await _remote(tmp_path)
    try:
        store = PlannerStore(StateContainer(FakeStateCache()), remote)
        temp_client = await store.add_client({"name": "Acme"})
        await store.wait_for_reconciliation()
        client = store.state.clients[0]
        assert client.id != temp_client.id

        temp_card = await store.add_card({"clientId": client.id, "title": "Launch", "status": "Done"})
        await store.wait_for_reconciliation()
        card = store.state.cards[0]
        assert card.id != temp_card.id
        assert card.status == "Done"

        fresh = PlannerStore(StateContainer(FakeStateCache()), remote)
        await fresh.load_initial_data()
        assert [c.id for c in fresh.state.clients] == [client.id]
        assert [(c.id, c.title, c.client_id) for c in fresh.state.cards] == [
            (card.id, "Launch", client.id)
        ]
        # status is a local-only field
        assert fresh.state.cards[0].status == "To Do"
    finally:
        await engine.dispose()
