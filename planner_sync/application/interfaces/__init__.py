from .remote_store import RemoteRow, RemoteStore
from .state_cache import StateCache

__all__ = [
    "RemoteRow",
    "RemoteStore",
    "StateCache",
]
