"""Domain entity — a single planned piece of content."""

from dataclasses import dataclass, replace
from typing import Any

DEFAULT_CARD_TITLE = "Untitled post"
DEFAULT_CARD_TYPE = "Post"
DEFAULT_CARD_PILLAR = "General"
DEFAULT_CARD_STATUS = "To Do"
COPY_SUFFIX = " (Copy)"


@dataclass(frozen=True)
class ContentCard:
    """A content card, optionally assigned to a client.

    ``client_id`` is an empty string when the card is unassigned. Only
    ``title`` and ``client_id`` exist in the remote schema; every other
    field lives in the local snapshot only.
    """

    id: str
    client_id: str = ""
    date_iso: str = ""
    title: str = DEFAULT_CARD_TITLE
    type: str = DEFAULT_CARD_TYPE
    pillar: str = DEFAULT_CARD_PILLAR
    status: str = DEFAULT_CARD_STATUS
    copy_text: str = ""
    caption: str = ""
    notes: str = ""
    links: tuple[Any, ...] = ()
    checklist: tuple[Any, ...] = ()
    tags: tuple[Any, ...] = ()
    is_backlog: bool = False
    is_favorite: bool = False

    def with_updates(self, **changes: Any) -> "ContentCard":
        """Return a copy with the given canonical fields replaced."""
        return replace(self, **changes)
