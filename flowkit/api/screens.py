"""Public presentation-stack API contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class Screen(Protocol):
    """Passive renderable unit bound to exactly one view-model."""

    @property
    def screen_id(self) -> str:
        """Return stable screen identifier used for tracing."""

    @property
    def view_model(self) -> object:
        """Return the bound view-model."""


class ScreenFactory(Protocol):
    """Builds a screen bound to a given view-model."""

    def build(self, view_model: object) -> Screen:
        """Return a new screen bound to ``view_model``."""


class PresentationStack(ABC):
    """Ordered stack of displayed screens, root first."""

    @abstractmethod
    def set_root(self, screen: Screen) -> Screen:
        """Replace the whole stack with one root screen."""

    @abstractmethod
    def push(self, screen: Screen) -> Screen:
        """Push one screen above the current top."""

    @abstractmethod
    def pop(self) -> Screen | None:
        """Pop the top screen."""

    @abstractmethod
    def top(self) -> Screen | None:
        """Return top visible screen."""

    @abstractmethod
    def screens(self) -> tuple[Screen, ...]:
        """Return root-first snapshot."""

    @property
    @abstractmethod
    def depth(self) -> int:
        """Return number of screens on the stack."""

    @property
    def is_empty(self) -> bool:
        return self.depth == 0


def create_presentation_stack() -> PresentationStack:
    """Create default presentation stack implementation."""
    from flowkit.runtime.presentation_stack import RuntimePresentationStack

    return RuntimePresentationStack()
