from .client import ClientModel
from .card import CardModel

__all__ = [
    "ClientModel",
    "CardModel",
]
