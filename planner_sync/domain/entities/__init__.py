from .client import CLIENT_PROFILE_FIELDS, Client, new_temporary_id, utc_now_iso
from .content_card import (
    COPY_SUFFIX,
    DEFAULT_CARD_PILLAR,
    DEFAULT_CARD_STATUS,
    DEFAULT_CARD_TITLE,
    DEFAULT_CARD_TYPE,
    ContentCard,
)
from .store_state import STATE_FIELDS, StateSnapshot, StoreState

__all__ = [
    "CLIENT_PROFILE_FIELDS",
    "Client",
    "new_temporary_id",
    "utc_now_iso",
    "COPY_SUFFIX",
    "DEFAULT_CARD_PILLAR",
    "DEFAULT_CARD_STATUS",
    "DEFAULT_CARD_TITLE",
    "DEFAULT_CARD_TYPE",
    "ContentCard",
    "STATE_FIELDS",
    "StateSnapshot",
    "StoreState",
]
