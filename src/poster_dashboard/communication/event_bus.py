from __future__ import annotations

"""Process-wide pub-sub bus used to fan a state change out to independent
dashboard regions.

Handlers run synchronously, in subscription order, on the emitting thread.
Each topic can only be emitting once at a time: a handler that emits the
topic it is being called for is rejected with a warning instead of
recursing.
"""

import enum
import logging
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List

from .events import Event

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class TopicState(enum.Enum):
    IDLE = "idle"
    EMITTING = "emitting"


class Subscription:
    """Revocation handle returned by `EventBus.subscribe`.

    Calling it removes this one registration; later calls do nothing.
    """

    def __init__(self, bus: "EventBus", topic: str, handler: Handler):
        self.bus = bus
        self.topic = topic
        self.handler = handler
        self.active = True

    def __call__(self) -> None:
        if not self.active:
            return
        self.active = False
        self.bus._remove(self)

    def __repr__(self) -> str:
        state = "active" if self.active else "revoked"
        return f"<Subscription topic={self.topic!r} handler={self.handler!r} {state}>"


class EventBus:
    """Named-topic publish/subscribe registry (single process, single thread)."""

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)
        self._state: Dict[str, TopicState] = {}

    # ------------------------------------------------------------------
    def subscribe(self, topic: str, handler: Handler) -> Subscription:
        sub = Subscription(self, topic, handler)
        self._subscriptions[topic].append(sub)
        logger.debug("Subscribed %r to %s", handler, topic)
        return sub

    def _remove(self, sub: Subscription) -> None:
        subs = self._subscriptions.get(sub.topic)
        if not subs:
            return
        # identity, not equality: the same function may be subscribed twice
        remaining = [s for s in subs if s is not sub]
        if remaining:
            self._subscriptions[sub.topic] = remaining
        else:
            del self._subscriptions[sub.topic]
        logger.debug("Unsubscribed %r from %s", sub.handler, sub.topic)

    # ------------------------------------------------------------------
    @contextmanager
    def _emitting(self, topic: str) -> Iterator[None]:
        self._state[topic] = TopicState.EMITTING
        try:
            yield
        finally:
            self._state[topic] = TopicState.IDLE

    def is_emitting(self, topic: str) -> bool:
        return self._state.get(topic, TopicState.IDLE) is TopicState.EMITTING

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscriptions.get(topic, ()))

    def emit(self, topic: str, *args: Any) -> bool:
        """Deliver `args` to every handler of `topic`.

        Returns False when the call was rejected because `topic` is already
        mid-emission, True otherwise (including when nobody is subscribed).
        A handler exception aborts the remaining deliveries and propagates
        to the caller; the topic is released either way.
        """
        if self.is_emitting(topic):
            logger.warning("Prevented recursive emission of event: %s", topic)
            return False

        subs = self._subscriptions.get(topic)
        if not subs:
            return True

        handlers = tuple(s.handler for s in subs)
        with self._emitting(topic):
            for handler in handlers:
                handler(*args)
        return True

    def publish(self, event: Event) -> bool:
        """Emit a typed event object on the topic its class declares."""
        return self.emit(event.topic, event)


# Process-wide instance shared by the app and its dashboard regions
event_bus = EventBus()
