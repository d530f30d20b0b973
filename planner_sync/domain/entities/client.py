"""Domain entity — a client whose content calendar is being planned."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


def new_temporary_id() -> str:
    """Locally generated identifier used until the remote store assigns one."""
    return str(uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# Free-form profile attributes, in display order.
CLIENT_PROFILE_FIELDS: tuple[str, ...] = (
    "social_handle",
    "niche",
    "tone",
    "goals",
    "notes",
)


@dataclass(frozen=True)
class Client:
    """Core domain entity for a planner client.

    Instances are immutable: every change produces a new object, so consumers
    can detect changes by identity.
    """

    id: str
    name: str = ""
    created_at: str = ""
    social_handle: str | None = None
    niche: str | None = None
    tone: str | None = None
    goals: str | None = None
    notes: str | None = None

    def with_updates(self, **changes: Any) -> "Client":
        """Return a copy with the given canonical fields replaced."""
        return replace(self, **changes)
