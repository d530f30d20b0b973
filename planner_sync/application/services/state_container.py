"""State container — the single in-memory source of truth for the planner."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from planner_sync.application.interfaces import StateCache
from planner_sync.domain.entities import STATE_FIELDS, StoreState

logger = logging.getLogger(__name__)

Listener = Callable[[], None]
StatePatch = Mapping[str, Any]
StateUpdater = StatePatch | Callable[[StoreState], StatePatch]


class StateContainer:
    """Holds the current ``StoreState`` and notifies listeners after every change.

    ``apply`` is the only mutation primitive. It merges a patch, writes the
    durable snapshot through the cache, then calls every listener
    synchronously in registration order. In-memory consistency wins over
    durability: a failed cache write is logged and the patch stays applied.
    """

    def __init__(self, cache: StateCache, initial: StoreState | None = None) -> None:
        self._cache = cache
        self._state = initial if initial is not None else StoreState.from_snapshot(cache.load())
        # dict keeps insertion order and gives set semantics
        self._listeners: dict[Listener, None] = {}

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def apply(self, updater: StateUpdater) -> StoreState:
        """Merge a partial state (or a function of the previous state) and notify."""
        patch = updater(self._state) if callable(updater) else updater
        unknown = set(patch) - STATE_FIELDS
        if unknown:
            raise ValueError(f"Unknown state fields: {sorted(unknown)}")

        self._state = replace(self._state, **patch)
        self._persist()
        self._notify()
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a zero-argument listener. Returns an unsubscribe callable."""
        self._listeners[listener] = None
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.pop(listener, None)

    def _persist(self) -> None:
        try:
            self._cache.save(self._state.snapshot())
        except Exception:
            logger.exception("Could not write local snapshot — keeping in-memory state")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("State listener %r failed", listener)
