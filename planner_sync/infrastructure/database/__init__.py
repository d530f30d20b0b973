from .base import Base
from .session import create_remote_engine, create_session_factory, get_async_url
from .models import CardModel, ClientModel

__all__ = [
    "Base",
    "create_remote_engine",
    "create_session_factory",
    "get_async_url",
    "CardModel",
    "ClientModel",
]
