"""Subscription bridge — binds a consumer's selector to the planner store.

A consumer supplies a selector over the combined state-and-actions view and a
re-render callback. The callback only fires when the selected value changes
by identity, so a consumer watching ``view.clients`` is not re-rendered when
only the cards change.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from planner_sync.application.services.planner_store import PlannerStore, StoreView

T = TypeVar("T")

Selector = Callable[[StoreView], T]


class StoreSubscription(Generic[T]):
    """Caches a selector's result and re-evaluates it on every store notification.

    Usage:
        with use_store(store, lambda s: s.clients, on_change=rerender) as sub:
            render(sub.value)
    """

    def __init__(
        self,
        store: PlannerStore,
        selector: Selector[T],
        on_change: Callable[[T], None],
    ) -> None:
        self._store = store
        self._selector = selector
        self._on_change = on_change
        self._value: T = selector(store.view())
        self._closed = False
        store.subscribe(self._handle_notification)

    @property
    def value(self) -> T:
        return self._value

    @property
    def closed(self) -> bool:
        return self._closed

    def render(self, selector: Selector[T]) -> T:
        """Swap in the consumer's latest selector and return the cached value.

        The stored selector is replaced on every render, so a selector from an
        earlier render never runs once a newer one has been supplied.
        """
        self._selector = selector
        return self._value

    def close(self) -> None:
        if not self._closed:
            self._store.unsubscribe(self._handle_notification)
            self._closed = True

    def __enter__(self) -> "StoreSubscription[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _handle_notification(self) -> None:
        next_value = self._selector(self._store.view())
        if next_value is not self._value:
            self._value = next_value
            self._on_change(next_value)


def use_store(
    store: PlannerStore,
    selector: Selector[T],
    on_change: Callable[[T], None],
) -> StoreSubscription[T]:
    """Subscribe ``selector`` to ``store``; ``on_change`` is the re-render trigger."""
    return StoreSubscription(store, selector, on_change)
