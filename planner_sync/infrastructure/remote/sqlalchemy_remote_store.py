"""Concrete RemoteStore backed by SQLAlchemy async sessions."""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from planner_sync.application.interfaces import RemoteRow, RemoteStore
from planner_sync.domain.exceptions import RemoteStoreError
from planner_sync.infrastructure.database.base import Base
from planner_sync.infrastructure.database.models import CardModel, ClientModel

logger = logging.getLogger(__name__)

_ModelType = type[ClientModel] | type[CardModel]

# Columns a caller may write; ids and timestamps are server-assigned.
_WRITABLE_COLUMNS: dict[str, frozenset[str]] = {
    ClientModel.__tablename__: frozenset(
        {"name", "social_handle", "niche", "tone", "goals", "notes"}
    ),
    CardModel.__tablename__: frozenset({"title", "client_id"}),
}


class SQLAlchemyRemoteStore(RemoteStore):
    """Implements the RemoteStore port; one session and transaction per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_schema(self, engine: AsyncEngine) -> None:
        """Create missing tables. Not a migration tool: existing tables are left as they are."""
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # ── clients ──────────────────────────────────────────────────────

    async def list_clients(self) -> list[RemoteRow]:
        return await self._select_all(ClientModel, order_by=ClientModel.name.asc())

    async def create_client(self, payload: RemoteRow) -> RemoteRow:
        return await self._insert(ClientModel, payload)

    async def update_client(self, client_id: str, payload: RemoteRow) -> None:
        await self._update(ClientModel, client_id, payload)

    async def delete_client(self, client_id: str) -> None:
        await self._delete(ClientModel, client_id)

    # ── cards ────────────────────────────────────────────────────────

    async def list_cards(self) -> list[RemoteRow]:
        return await self._select_all(CardModel)

    async def create_card(self, payload: RemoteRow) -> RemoteRow:
        return await self._insert(CardModel, payload)

    async def update_card(self, card_id: str, payload: RemoteRow) -> None:
        await self._update(CardModel, card_id, payload)

    async def delete_card(self, card_id: str) -> None:
        await self._delete(CardModel, card_id)

    # ── Generic table operations ─────────────────────────────────────

    async def _select_all(self, model: _ModelType, order_by: Any = None) -> list[RemoteRow]:
        stmt = select(model)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [_to_row(m) for m in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise RemoteStoreError("select", model.__tablename__, str(exc)) from exc

    async def _insert(self, model: _ModelType, payload: RemoteRow) -> RemoteRow:
        values = _writable(model, payload)
        try:
            async with self._session_factory() as session:
                instance = model(**values)
                session.add(instance)
                await session.commit()
                await session.refresh(instance)
                return _to_row(instance)
        except SQLAlchemyError as exc:
            raise RemoteStoreError("insert", model.__tablename__, str(exc)) from exc

    async def _update(self, model: _ModelType, row_id: str, payload: RemoteRow) -> None:
        values = _writable(model, payload)
        if not values:
            return
        stmt = update(model).where(model.id == row_id).values(**values)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                matched = result.rowcount
                await session.commit()
        except SQLAlchemyError as exc:
            raise RemoteStoreError("update", model.__tablename__, str(exc)) from exc
        if matched == 0:
            logger.debug("%s update matched no row for id=%s", model.__tablename__, row_id)

    async def _delete(self, model: _ModelType, row_id: str) -> None:
        stmt = delete(model).where(model.id == row_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                matched = result.rowcount
                await session.commit()
        except SQLAlchemyError as exc:
            raise RemoteStoreError("delete", model.__tablename__, str(exc)) from exc
        if matched == 0:
            logger.debug("%s delete matched no row for id=%s", model.__tablename__, row_id)


def _writable(model: _ModelType, payload: RemoteRow) -> dict[str, Any]:
    """Keep only writable columns; an empty foreign key becomes NULL."""
    allowed = _WRITABLE_COLUMNS[model.__tablename__]
    values = {k: v for k, v in payload.items() if k in allowed}
    if "client_id" in values and not values["client_id"]:
        values["client_id"] = None
    return values


def _to_row(instance: ClientModel | CardModel) -> RemoteRow:
    """Map an ORM instance to the remote row shape (column name → value)."""
    row: RemoteRow = {}
    for column in instance.__table__.columns:
        value = getattr(instance, column.name)
        row[column.name] = value.isoformat() if isinstance(value, datetime) else value
    return row
