from .state_container import StateContainer
from .planner_store import ACTION_NAMES, PlannerStore, StoreView
from .subscription import StoreSubscription, use_store
from .state_event_stream import StateEventStream

__all__ = [
    "StateContainer",
    "ACTION_NAMES",
    "PlannerStore",
    "StoreView",
    "StoreSubscription",
    "use_store",
    "StateEventStream",
]
