"""Pydantic DTOs (Data Transfer Objects) for the planner HTTP API.

Request models accept both snake_case field names and the camelCase keys
used by the local snapshot; responses are serialized in camelCase.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from planner_sync.application import normalizer
from planner_sync.domain.entities import Client, ContentCard, StoreState


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Clients ──────────────────────────────────────────────────────────


class ClientCreate(_CamelModel):
    """Schema for creating a client. ``nome`` is accepted as a legacy alias of ``name``."""

    name: str = Field(
        "", max_length=255, validation_alias=AliasChoices("name", "nome"), examples=["Acme"],
    )
    social_handle: str | None = Field(None, alias="socialHandle")
    niche: str | None = None
    tone: str | None = None
    goals: str | None = None
    notes: str | None = None


class ClientUpdate(_CamelModel):
    """Schema for updating a client — all fields optional."""

    name: str | None = Field(
        None, max_length=255, validation_alias=AliasChoices("name", "nome"),
    )
    social_handle: str | None = Field(None, alias="socialHandle")
    niche: str | None = None
    tone: str | None = None
    goals: str | None = None
    notes: str | None = None


class ClientResponse(_CamelModel):
    """Schema returned to the client."""

    id: str
    name: str
    created_at: str = Field(alias="createdAt")
    social_handle: str | None = Field(None, alias="socialHandle")
    niche: str | None = None
    tone: str | None = None
    goals: str | None = None
    notes: str | None = None

    @classmethod
    def from_entity(cls, client: Client) -> "ClientResponse":
        return cls.model_validate(normalizer.client_to_cache(client))


# ── Cards ────────────────────────────────────────────────────────────


class CardCreate(_CamelModel):
    """Schema for creating a card — every field optional, defaults filled by the store."""

    client_id: str | None = Field(None, alias="clientId")
    date_iso: str | None = Field(None, alias="dateISO")
    title: str | None = Field(None, validation_alias=AliasChoices("title", "titulo"))
    type: str | None = None
    pillar: str | None = None
    status: str | None = None
    copy_text: str | None = Field(None, alias="copyText")
    caption: str | None = None
    notes: str | None = None
    links: list[Any] | None = None
    checklist: list[Any] | None = None
    tags: list[Any] | None = None
    is_backlog: bool | None = Field(None, alias="isBacklog")
    is_favorite: bool | None = Field(None, alias="isFavorite")


class CardUpdate(CardCreate):
    """Schema for updating a card — same optional fields as creation."""


class CardResponse(_CamelModel):
    id: str
    client_id: str = Field(alias="clientId")
    date_iso: str = Field(alias="dateISO")
    title: str
    type: str
    pillar: str
    status: str
    copy_text: str = Field(alias="copyText")
    caption: str
    notes: str
    links: list[Any]
    checklist: list[Any]
    tags: list[Any]
    is_backlog: bool = Field(alias="isBacklog")
    is_favorite: bool = Field(alias="isFavorite")

    @classmethod
    def from_entity(cls, card: ContentCard) -> "CardResponse":
        return cls.model_validate(normalizer.card_to_cache(card))


# ── State / selection ────────────────────────────────────────────────


class SelectionUpdate(_CamelModel):
    client_id: str | None = Field(None, alias="clientId")


class StateResponse(_CamelModel):
    """Full planner state as seen by consumers."""

    clients: list[ClientResponse]
    cards: list[CardResponse]
    daily_notes: list[Any] = Field(alias="dailyNotes")
    current_client_id: str | None = Field(alias="currentClientId")
    is_loading: bool = Field(alias="isLoading")

    @classmethod
    def from_state(cls, state: StoreState) -> "StateResponse":
        return cls(
            clients=[ClientResponse.from_entity(c) for c in state.clients],
            cards=[CardResponse.from_entity(c) for c in state.cards],
            daily_notes=list(state.daily_notes),
            current_client_id=state.current_client_id,
            is_loading=state.is_loading,
        )
