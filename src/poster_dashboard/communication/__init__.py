from .event_bus import EventBus, Subscription, TopicState, event_bus
from .events import AppEvents, CurrencyChanged, Event

__all__ = [
    "EventBus",
    "Subscription",
    "TopicState",
    "event_bus",
    "AppEvents",
    "CurrencyChanged",
    "Event",
]
