from __future__ import annotations

from dataclasses import dataclass

from flowkit.api.events import EventBus
from flowkit.api.flow import NavigationContext
from flowkit.api.screens import Screen
from flowkit.runtime.controller import BaseFlowController, delegate_callback
from flowkit.runtime.presentation_stack import RuntimePresentationStack


@dataclass(eq=False)
class FakeScreen:
    screen_id: str
    view_model: object = None


class SpyPresentationStack(RuntimePresentationStack):
    """Presentation stack that records every mutation as ``(op, screen_id)``."""

    def __init__(self) -> None:
        super().__init__()
        self.ops: list[tuple[str, str]] = []

    def set_root(self, screen: Screen) -> Screen:
        self.ops.append(("set_root", screen.screen_id))
        return super().set_root(screen)

    def push(self, screen: Screen) -> Screen:
        self.ops.append(("push", screen.screen_id))
        return super().push(screen)

    def pop(self) -> Screen | None:
        screen = super().pop()
        self.ops.append(("pop", screen.screen_id if screen is not None else ""))
        return screen

    def ids(self) -> list[str]:
        return [screen.screen_id for screen in self.screens()]

    def count(self, op: str) -> int:
        return sum(1 for recorded, _ in self.ops if recorded == op)


def make_context(
    *,
    stack: RuntimePresentationStack | None = None,
    events: EventBus | None = None,
    strict: bool = True,
) -> NavigationContext:
    return NavigationContext(
        stack=stack if stack is not None else SpyPresentationStack(),
        events=events,
        strict=strict,
    )


class ScreenFlow(BaseFlowController):
    """Minimal concrete flow: one screen on start, optional extra pushes."""

    def __init__(self, context: NavigationContext, screen_id: str = "screen") -> None:
        super().__init__(context, name=f"ScreenFlow[{screen_id}]")
        self.screen_id = screen_id
        self.finish_hook_calls = 0
        self.events_seen: list[str] = []

    def on_start(self) -> None:
        assert self.segment is not None
        self.segment.present(FakeScreen(self.screen_id))

    def on_finish(self) -> None:
        self.finish_hook_calls += 1

    def push_extra(self, screen_id: str) -> bool:
        assert self.segment is not None
        return self.segment.push(FakeScreen(screen_id))

    @delegate_callback
    def handle_event(self, name: str) -> None:
        self.events_seen.append(name)

    @delegate_callback
    def handle_nested(self, name: str) -> None:
        self.events_seen.append(name)
        self.handle_event(f"nested:{name}")

    @delegate_callback
    def handle_finish_request(self) -> None:
        self.finish()


class NoScreenFlow(BaseFlowController):
    def on_start(self) -> None:
        return None


class TwoScreenFlow(BaseFlowController):
    def on_start(self) -> None:
        assert self.segment is not None
        self.segment.present(FakeScreen("first"))
        self.segment.push(FakeScreen("second"))


class ParentFlow(ScreenFlow):
    """Flow that records finished children."""

    def __init__(self, context: NavigationContext, screen_id: str = "parent") -> None:
        super().__init__(context, screen_id)
        self.finished_children: list[str] = []

    def on_child_finished(self, child) -> None:  # type: ignore[no-untyped-def]
        self.finished_children.append(child.flow_id)
