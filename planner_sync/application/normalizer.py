"""Normalizer — pure mapping functions between row shapes and domain entities.

Three shapes meet here:

* **remote rows** — snake_case columns of the ``clients`` / ``cards`` tables
  (``client_id``, ``created_at``);
* **cached records** — camelCase keys of the local JSON snapshot
  (``clientId``, ``createdAt``, ``dateISO``);
* **caller input** — partial mappings in either convention, possibly using a
  legacy alias (``nome`` for a client's name, ``titulo`` for a card's title).

Every function here is pure and never raises: absent or malformed values
degrade to the entity defaults.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from planner_sync.domain.entities import (
    CLIENT_PROFILE_FIELDS,
    Client,
    ContentCard,
    new_temporary_id,
    utc_now_iso,
)

_MISSING = object()

# ── Alias tables ─────────────────────────────────────────────────────
#
# canonical field → accepted input keys, in priority order.

_CLIENT_NAME_ALIASES: tuple[str, ...] = ("name", "nome")
_CLIENT_CREATED_AT_ALIASES: tuple[str, ...] = ("created_at", "createdAt")
_CLIENT_PROFILE_ALIASES: dict[str, tuple[str, ...]] = {
    "social_handle": ("social_handle", "socialHandle"),
    "niche": ("niche",),
    "tone": ("tone",),
    "goals": ("goals",),
    "notes": ("notes",),
}
_CLIENT_CACHE_KEYS: dict[str, str] = {
    "social_handle": "socialHandle",
    "niche": "niche",
    "tone": "tone",
    "goals": "goals",
    "notes": "notes",
}

_CARD_TEXT_ALIASES: dict[str, tuple[str, ...]] = {
    "client_id": ("client_id", "clientId"),
    "date_iso": ("dateISO", "date_iso"),
    "title": ("title", "titulo"),
    "type": ("type",),
    "pillar": ("pillar",),
    "status": ("status",),
    "copy_text": ("copyText", "copy_text"),
    "caption": ("caption",),
    "notes": ("notes",),
}
_CARD_SEQUENCE_ALIASES: dict[str, tuple[str, ...]] = {
    "links": ("links",),
    "checklist": ("checklist",),
    "tags": ("tags",),
}
_CARD_BOOL_ALIASES: dict[str, tuple[str, ...]] = {
    "is_backlog": ("isBacklog", "is_backlog"),
    "is_favorite": ("isFavorite", "is_favorite"),
}
_CARD_CACHE_KEYS: dict[str, str] = {
    "client_id": "clientId",
    "date_iso": "dateISO",
    "title": "title",
    "type": "type",
    "pillar": "pillar",
    "status": "status",
    "copy_text": "copyText",
    "caption": "caption",
    "notes": "notes",
    "links": "links",
    "checklist": "checklist",
    "tags": "tags",
    "is_backlog": "isBacklog",
    "is_favorite": "isFavorite",
}


# ── Helpers ──────────────────────────────────────────────────────────


def _as_mapping(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def _pick(data: Mapping[str, Any], aliases: tuple[str, ...]) -> Any:
    """Return the first non-None value among ``aliases``, else ``_MISSING``."""
    for key in aliases:
        value = data.get(key)
        if value is not None:
            return value
    return _MISSING


def _as_id(value: Any) -> str:
    if isinstance(value, str) and value:
        return value
    if value is None or value is _MISSING or isinstance(value, (dict, list, tuple)):
        return new_temporary_id()
    return str(value)


def _as_timestamp(value: Any) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


# ── Clients ──────────────────────────────────────────────────────────


def normalize_client_input(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Map a partial client input to canonical fields.

    Only supplied fields are returned. The name is resolved from ``name`` or
    its legacy alias ``nome`` and trimmed. ``id`` is never taken from input.
    """
    source = _as_mapping(data)
    fields: dict[str, Any] = {}

    name = _pick(source, _CLIENT_NAME_ALIASES)
    if name is not _MISSING:
        fields["name"] = name.strip() if isinstance(name, str) else ""

    created_at = _as_timestamp(_pick(source, _CLIENT_CREATED_AT_ALIASES))
    if created_at is not None:
        fields["created_at"] = created_at

    for field_name, aliases in _CLIENT_PROFILE_ALIASES.items():
        present = any(key in source for key in aliases)
        if not present:
            continue
        value = _pick(source, aliases)
        fields[field_name] = value if isinstance(value, str) else None

    return fields


def client_from_row(row: Mapping[str, Any] | None) -> Client:
    """Map a remote row or cached record to a canonical ``Client``."""
    source = _as_mapping(row)
    fields = normalize_client_input(source)
    return Client(
        id=_as_id(source.get("id")),
        name=fields.get("name", ""),
        created_at=fields.get("created_at") or utc_now_iso(),
        **{f: fields.get(f) for f in CLIENT_PROFILE_FIELDS},
    )


def client_to_cache(client: Client) -> dict[str, Any]:
    """Map a ``Client`` to its camelCase local-snapshot record."""
    record: dict[str, Any] = {
        "id": client.id,
        "name": client.name,
        "createdAt": client.created_at,
    }
    for field_name in CLIENT_PROFILE_FIELDS:
        value = getattr(client, field_name)
        if value is not None:
            record[_CLIENT_CACHE_KEYS[field_name]] = value
    return record


def client_to_insert(client: Client) -> dict[str, Any]:
    """Remote insert payload. ``id`` and ``created_at`` are server-assigned."""
    payload: dict[str, Any] = {"name": client.name}
    for field_name in CLIENT_PROFILE_FIELDS:
        value = getattr(client, field_name)
        if value is not None:
            payload[field_name] = value
    return payload


def client_to_update(updates: Mapping[str, Any] | None) -> dict[str, Any]:
    """Remote update payload — name alias resolved, timestamps never sent."""
    fields = normalize_client_input(updates)
    fields.pop("created_at", None)
    return fields


# ── Cards ────────────────────────────────────────────────────────────


def normalize_card_input(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Map a partial card input to canonical fields.

    Only supplied, well-typed fields are returned: text fields must be
    strings, sequences become tuples, booleans are coerced by truthiness.
    """
    source = _as_mapping(data)
    fields: dict[str, Any] = {}

    for field_name, aliases in _CARD_TEXT_ALIASES.items():
        value = _pick(source, aliases)
        if isinstance(value, str):
            fields[field_name] = value

    for field_name, aliases in _CARD_SEQUENCE_ALIASES.items():
        value = _pick(source, aliases)
        if isinstance(value, (list, tuple)):
            fields[field_name] = tuple(value)

    for field_name, aliases in _CARD_BOOL_ALIASES.items():
        value = _pick(source, aliases)
        if value is not _MISSING:
            fields[field_name] = bool(value)

    return fields


def card_from_row(row: Mapping[str, Any] | None) -> ContentCard:
    """Map a remote row or cached record to a canonical ``ContentCard``.

    Each optional field is defaulted independently, so a remote row carrying
    only ``id``/``title``/``client_id`` still produces a complete card.
    """
    source = _as_mapping(row)
    return ContentCard(id=_as_id(source.get("id")), **normalize_card_input(source))


def card_to_cache(card: ContentCard) -> dict[str, Any]:
    """Map a ``ContentCard`` to its camelCase local-snapshot record."""
    record: dict[str, Any] = {"id": card.id}
    for field_name, key in _CARD_CACHE_KEYS.items():
        value = getattr(card, field_name)
        record[key] = list(value) if isinstance(value, tuple) else value
    return record


def card_to_insert(card: ContentCard) -> dict[str, Any]:
    """Remote insert payload — the remote schema only tracks title and owner."""
    return {
        "title": card.title or "",
        "client_id": card.client_id,
    }


def card_to_update(updates: Mapping[str, Any] | ContentCard | None) -> dict[str, Any]:
    """Remote update payload — only columns the remote schema has.

    Accepts a partial mapping in any supported naming convention, or a whole
    ``ContentCard``.
    """
    if isinstance(updates, ContentCard):
        return {"title": updates.title, "client_id": updates.client_id}

    source = _as_mapping(updates)
    payload: dict[str, Any] = {}

    title = _pick(source, _CARD_TEXT_ALIASES["title"])
    if isinstance(title, str):
        payload["title"] = title
    client_id = _pick(source, _CARD_TEXT_ALIASES["client_id"])
    if isinstance(client_id, str):
        payload["client_id"] = client_id

    return payload
