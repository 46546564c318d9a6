"""Stack segment: the screens one flow controller pushed and may pop."""

from __future__ import annotations

import logging

from flowkit.api.events import ScreenDismissed, ScreenPresented
from flowkit.api.flow import NavigationContext
from flowkit.api.screens import Screen
from flowkit.runtime.errors import report_violation

logger = logging.getLogger(__name__)


class StackSegment:
    """Owned view over the shared presentation stack.

    Only screens pushed through a segment can be popped through it, and only
    while nothing owned by another node sits above them.
    """

    def __init__(self, context: NavigationContext, *, owner_id: str) -> None:
        self._context = context
        self._owner_id = owner_id
        self._base_depth = context.stack.depth
        self._owned: list[Screen] = []
        self._pushed_count = 0
        self._popped_count = 0

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def base_depth(self) -> int:
        return self._base_depth

    @property
    def owned(self) -> tuple[Screen, ...]:
        return tuple(self._owned)

    @property
    def pushed_count(self) -> int:
        return self._pushed_count

    @property
    def popped_count(self) -> int:
        return self._popped_count

    @property
    def is_balanced(self) -> bool:
        return self._pushed_count == self._popped_count

    def owns_top(self) -> bool:
        """Return whether the visible screen was pushed by this segment."""
        return bool(self._owned) and self._context.stack.top() is self._owned[-1]

    def present(self, screen: Screen) -> bool:
        """Set root on an empty stack, otherwise push to keep the caller's back path."""
        if self._context.stack.is_empty:
            return self.set_root(screen)
        return self.push(screen)

    def set_root(self, screen: Screen) -> bool:
        stack = self._context.stack
        if not stack.is_empty:
            self._violation(f"set_root over {stack.depth} existing screen(s)")
            return False
        stack.set_root(screen)
        self._base_depth = 0
        self._owned = [screen]
        self._pushed_count += 1
        self._publish(ScreenPresented(self._owner_id, screen.screen_id, "root", stack.depth))
        return True

    def push(self, screen: Screen) -> bool:
        stack = self._context.stack
        if stack.is_empty:
            self._violation("push on empty stack")
            return False
        if stack.depth != self._base_depth + len(self._owned):
            self._violation("push while another node owns the top of the stack")
            return False
        stack.push(screen)
        self._owned.append(screen)
        self._pushed_count += 1
        self._publish(ScreenPresented(self._owner_id, screen.screen_id, "push", stack.depth))
        return True

    def pop(self) -> Screen | None:
        if not self._owned:
            self._violation("pop without an owned screen")
            return None
        if not self.owns_top():
            self._violation("pop while the top screen belongs to another node")
            return None
        stack = self._context.stack
        screen = stack.pop()
        self._owned.pop()
        self._popped_count += 1
        if screen is not None:
            self._publish(ScreenDismissed(self._owner_id, screen.screen_id, stack.depth))
        return screen

    def unwind(self) -> int:
        """Pop every owned screen, newest first. Returns number of screens popped."""
        popped = 0
        while self._owned:
            if self.pop() is None:
                break
            popped += 1
        return popped

    def _violation(self, message: str) -> None:
        report_violation(
            logger,
            message,
            strict=self._context.strict,
            events=self._context.events,
            flow_id=self._owner_id,
        )

    def _publish(self, event: object) -> None:
        if self._context.events is not None:
            self._context.events.publish(event)
