"""Public navigation event contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol, TypeVar

TEvent = TypeVar("TEvent")

PresentMode = Literal["root", "push"]


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


@dataclass(frozen=True, slots=True)
class NavigationEvent:
    """Base navigation event. Events carry ids only, never object references."""

    flow_id: str


@dataclass(frozen=True, slots=True)
class FlowStarted(NavigationEvent):
    parent_id: str | None = None


@dataclass(frozen=True, slots=True)
class FlowFinished(NavigationEvent):
    parent_id: str | None = None


@dataclass(frozen=True, slots=True)
class ChildDetached(NavigationEvent):
    """Parent ``flow_id`` removed ``child_id`` from its child registry."""

    child_id: str = ""


@dataclass(frozen=True, slots=True)
class ScreenPresented(NavigationEvent):
    screen_id: str = ""
    mode: PresentMode = "push"
    depth: int = 0


@dataclass(frozen=True, slots=True)
class ScreenDismissed(NavigationEvent):
    screen_id: str = ""
    depth: int = 0


@dataclass(frozen=True, slots=True)
class DelegateDropped(NavigationEvent):
    """A view-model or child raised an event after its delegate was released."""

    method: str = ""


@dataclass(frozen=True, slots=True)
class DisciplineViolation(NavigationEvent):
    message: str = ""


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


def create_event_bus() -> EventBus:
    """Create default event bus implementation."""
    from flowkit.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
