"""Abstract interface (port) for the local durable snapshot."""

from abc import ABC, abstractmethod

from planner_sync.domain.entities import StateSnapshot


class StateCache(ABC):
    """Port for local snapshot persistence — implemented in the infrastructure layer."""

    @abstractmethod
    def load(self) -> StateSnapshot:
        """Read the last snapshot. Never raises: unreadable data yields an empty snapshot."""
        ...

    @abstractmethod
    def save(self, snapshot: StateSnapshot) -> None:
        """Write the snapshot. Raises ``CacheError`` on failure."""
        ...
