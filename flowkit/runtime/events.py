"""In-process event bus for navigation observability."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from flowkit.api.events import Subscription

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class _Subscriber:
    event_type: type[object]
    handler: EventHandler


class RuntimeEventBus:
    """Type-polymorphic pub/sub: a handler for a base class sees every subclass.

    Handlers run synchronously on the publishing thread in subscription
    order. Handler exceptions propagate to the publisher.
    """

    def __init__(self) -> None:
        self._ids = 0
        self._subscribers: dict[int, _Subscriber] = {}
        self._published_count = 0

    @property
    def published_count(self) -> int:
        return self._published_count

    def subscriber_count(self, event_type: type[object] | None = None) -> int:
        if event_type is None:
            return len(self._subscribers)
        return sum(1 for sub in self._subscribers.values() if sub.event_type is event_type)

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        self._ids += 1
        self._subscribers[self._ids] = _Subscriber(event_type, handler)
        return Subscription(self._ids)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Drop ``subscription``; unknown tokens are ignored."""
        self._subscribers.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Deliver ``event`` to matching handlers. Returns number of handlers invoked."""
        self._published_count += 1
        matching = [
            sub.handler
            for sub in tuple(self._subscribers.values())
            if isinstance(event, sub.event_type)
        ]
        for handler in matching:
            handler(event)
        return len(matching)


EventBus = RuntimeEventBus
