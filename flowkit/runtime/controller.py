"""Base flow controller: lifecycle, child ownership and delegated unwinding."""

from __future__ import annotations

import functools
import itertools
import logging
from abc import abstractmethod
from collections.abc import Callable
from typing import ClassVar, Concatenate

from flowkit.api.events import ChildDetached, FlowFinished, FlowStarted
from flowkit.api.flow import (
    FlowController,
    FlowParent,
    FlowState,
    NavigationContext,
    create_lifecycle_machine,
)
from flowkit.runtime.children import ChildRegistry
from flowkit.runtime.delegates import WeakDelegate
from flowkit.runtime.errors import report_violation
from flowkit.runtime.segment import StackSegment

logger = logging.getLogger(__name__)

_FLOW_IDS = itertools.count(1)


def delegate_callback[TFlow: "BaseFlowController", **P](
    method: Callable[Concatenate[TFlow, P], None],
) -> Callable[Concatenate[TFlow, P], None]:
    """Guard a delegate entry point against stale and re-entrant delivery."""

    @functools.wraps(method)
    def wrapper(self: TFlow, *args: P.args, **kwargs: P.kwargs) -> None:
        if self.state is not FlowState.ACTIVE:
            self._violation(f"{method.__name__} delivered in state {self.state.value}")
            return
        if self._handling is not None:
            self._violation(f"{method.__name__} re-entered while handling {self._handling}")
            return
        self._handling = method.__name__
        try:
            method(self, *args, **kwargs)
        finally:
            self._handling = None

    return wrapper


class BaseFlowController(FlowController):
    """Default lifecycle behavior shared by concrete flow controllers.

    Concrete controllers implement ``on_start`` and may override ``on_finish``
    and ``on_child_finished``. Children are held in a ``ChildRegistry``; the
    parent is held through a ``WeakDelegate`` so the tree tears down from the
    top.
    """

    places_initial_screen: ClassVar[bool] = True

    def __init__(self, context: NavigationContext, *, name: str | None = None) -> None:
        self._context = context
        self._flow_id = f"{name or type(self).__name__}#{next(_FLOW_IDS)}"
        self._machine = create_lifecycle_machine()
        self._children = ChildRegistry()
        self._parent: WeakDelegate[FlowParent] = WeakDelegate(
            source_id=self._flow_id, events=context.events
        )
        self._parent_attached = False
        self._segment: StackSegment | None = None
        self._handling: str | None = None

    @property
    def flow_id(self) -> str:
        return self._flow_id

    @property
    def state(self) -> FlowState:
        return self._machine.state

    @property
    def context(self) -> NavigationContext:
        return self._context

    @property
    def segment(self) -> StackSegment | None:
        return self._segment

    def require_segment(self) -> StackSegment:
        """Return the segment opened by ``start``; raises before the node started."""
        if self._segment is None:
            raise RuntimeError(f"{self._flow_id} has no stack segment before start()")
        return self._segment

    @property
    def children(self) -> tuple[FlowController, ...]:
        return self._children.snapshot()

    @property
    def parent(self) -> FlowParent | None:
        return self._parent.get()

    def attach_parent(self, parent: FlowParent) -> None:
        if self._parent_attached:
            self._violation(f"already attached to a parent, refusing {parent.flow_id}")
            return
        self._parent.bind(parent)
        self._parent_attached = True

    def start(self) -> None:
        if not self._machine.trigger("start"):
            self._violation(f"start() in state {self.state.value}")
            return
        self._segment = StackSegment(self._context, owner_id=self._flow_id)
        self._log_transition("start")
        self.on_start()
        if self.places_initial_screen and self._segment.pushed_count != 1:
            self._violation(f"start() placed {self._segment.pushed_count} screens, expected 1")
        if self.state is FlowState.STARTED:
            self._machine.trigger("activate")
            self._log_transition("activate")
        parent = self.parent
        self._publish(FlowStarted(self._flow_id, parent.flow_id if parent is not None else None))

    @abstractmethod
    def on_start(self) -> None:
        """Materialize the first screen/view-model pair."""

    def on_finish(self) -> None:
        """Balance this node's own pushes; children are already finished and unwound."""

    def on_child_finished(self, child: FlowController) -> None:
        """Decide what happens after ``child`` left the tree."""

    def start_child(self, child: FlowController) -> FlowController:
        """Register ``child`` as exclusively owned and start it."""
        if self.state not in (FlowState.STARTED, FlowState.ACTIVE):
            self._violation(f"start_child({child.flow_id}) in state {self.state.value}")
            return child
        owner = child.parent
        if owner is not None or child in self._children:
            owner_id = owner.flow_id if owner is not None else self._flow_id
            self._violation(f"child {child.flow_id} is already owned by {owner_id}")
            return child
        child.attach_parent(self)
        if child.parent is not self:
            logger.debug("start_child_refused parent=%s child=%s", self._flow_id, child.flow_id)
            return child
        self._children.add(child)
        child.start()
        return child

    def finish(self) -> None:
        if not self._machine.trigger("finish"):
            self._violation(f"finish() in state {self.state.value}")
            return
        self._log_transition("finish")
        self.finish_children()
        self.on_finish()
        parent = self.parent
        self._publish(FlowFinished(self._flow_id, parent.flow_id if parent is not None else None))
        if self._parent_attached:
            self._parent.notify("child_did_finish", self)
        self._machine.trigger("complete")
        self._log_transition("complete")

    def finish_children(self) -> None:
        """Finish every live child, newest first."""
        for child in reversed(self._children.snapshot()):
            if child.state in (FlowState.FINISHING, FlowState.FINISHED):
                continue
            child.finish()

    def child_did_finish(self, child: FlowController) -> None:
        if child not in self._children:
            logger.debug(
                "child_did_finish_ignored parent=%s child=%s", self._flow_id, child.flow_id
            )
            return
        if child.state is not FlowState.FINISHING:
            self._violation(f"child {child.flow_id} reported finish in state {child.state.value}")
            return
        self._children.remove(child)
        child.unwind_screens()
        logger.debug("child_detached parent=%s child=%s", self._flow_id, child.flow_id)
        self._publish(ChildDetached(self._flow_id, child.flow_id))
        self.on_child_finished(child)

    def unwind_screens(self) -> int:
        if self._segment is None:
            return 0
        return self._segment.unwind()

    def _violation(self, message: str) -> None:
        report_violation(
            logger,
            message,
            strict=self._context.strict,
            events=self._context.events,
            flow_id=self._flow_id,
        )

    def _publish(self, event: object) -> None:
        if self._context.events is not None:
            self._context.events.publish(event)

    def _log_transition(self, trigger: str) -> None:
        logger.debug(
            "flow_transition flow=%s trigger=%s state=%s",
            self._flow_id,
            trigger,
            self.state.value,
            extra={"flow_id": self._flow_id, "flow_state": self.state.value},
        )

    def __repr__(self) -> str:
        return f"<{self._flow_id} {self.state.value} children={len(self._children)}>"
