"""Presentation stack primitives for flow-controller trees."""

from __future__ import annotations

from flowkit.api.screens import PresentationStack, Screen


class RuntimePresentationStack(PresentationStack):
    """Root-first list of displayed screens."""

    def __init__(self) -> None:
        self._screens: list[Screen] = []

    @property
    def depth(self) -> int:
        return len(self._screens)

    def set_root(self, screen: Screen) -> Screen:
        """Replace every screen with a single root screen."""
        self._screens.clear()
        self._screens.append(screen)
        return screen

    def push(self, screen: Screen) -> Screen:
        """Push a screen above the current top."""
        if not self._screens:
            raise RuntimeError("cannot push screen without root screen")
        self._screens.append(screen)
        return screen

    def pop(self) -> Screen | None:
        """Pop topmost screen, including the root."""
        if not self._screens:
            return None
        return self._screens.pop()

    def top(self) -> Screen | None:
        """Return topmost visible screen."""
        if self._screens:
            return self._screens[-1]
        return None

    def screens(self) -> tuple[Screen, ...]:
        """Return root-first screen snapshot."""
        return tuple(self._screens)


PresentationStackImpl = RuntimePresentationStack
