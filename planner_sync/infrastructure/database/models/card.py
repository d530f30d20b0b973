"""SQLAlchemy ORM model for the remote ``cards`` table."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from planner_sync.infrastructure.database.base import Base


class CardModel(Base):
    """ORM model — maps to the 'cards' table.

    Only the title and owning client are stored remotely. Deleting a client
    nulls ``client_id`` instead of deleting its cards.
    """

    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    client_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_cards_client", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<CardModel(id={self.id}, client_id={self.client_id}, title='{self.title}')>"
