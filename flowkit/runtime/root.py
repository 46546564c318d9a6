"""Root flow controller: tree root and terminal receiver of finished flows."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum

from flowkit.api.flow import FlowController, FlowFactory, FlowParent, FlowState, NavigationContext
from flowkit.runtime.controller import BaseFlowController

logger = logging.getLogger(__name__)


class AfterFinishPolicy(StrEnum):
    """What the root does once its active feature flow finished."""

    IDLE = "idle"
    RESTART = "restart"
    ADVANCE = "advance"

    @classmethod
    def parse(cls, raw: str | None, default: AfterFinishPolicy | None = None) -> AfterFinishPolicy:
        fallback = default if default is not None else cls.IDLE
        if raw is None:
            return fallback
        value = raw.strip().lower()
        for policy in cls:
            if policy.value == value:
                return policy
        return fallback


class RootFlowController(BaseFlowController):
    """Application-lifetime root of the flow tree.

    The root places no screen of its own: it builds the first feature flow
    from ``flows`` and lets that child present. When the child finishes the
    configured ``AfterFinishPolicy`` decides the next step.
    """

    places_initial_screen = False

    def __init__(
        self,
        context: NavigationContext,
        flows: Sequence[FlowFactory],
        *,
        policy: AfterFinishPolicy = AfterFinishPolicy.IDLE,
        name: str = "Root",
    ) -> None:
        if not flows:
            raise ValueError("root flow controller needs at least one flow factory")
        super().__init__(context, name=name)
        self._flows = tuple(flows)
        self._policy = policy
        self._flow_index = 0
        self._finished_children: list[str] = []

    @property
    def policy(self) -> AfterFinishPolicy:
        return self._policy

    @property
    def flow_index(self) -> int:
        return self._flow_index

    @property
    def finished_children(self) -> tuple[str, ...]:
        return tuple(self._finished_children)

    @property
    def active_child(self) -> FlowController | None:
        children = self.children
        return children[-1] if children else None

    @property
    def is_idle(self) -> bool:
        return self.state is FlowState.ACTIVE and not self.children

    def attach_parent(self, parent: FlowParent) -> None:
        self._violation(f"root flow cannot be attached to {parent.flow_id}")

    def on_start(self) -> None:
        self._launch()

    def on_child_finished(self, child: FlowController) -> None:
        self._finished_children.append(child.flow_id)
        if self.state not in (FlowState.STARTED, FlowState.ACTIVE):
            return
        if self._policy is AfterFinishPolicy.RESTART:
            logger.info("root_restart flow=%s", child.flow_id)
            self._launch()
            return
        if self._policy is AfterFinishPolicy.ADVANCE and self._flow_index + 1 < len(self._flows):
            self._flow_index += 1
            logger.info("root_advance index=%d", self._flow_index)
            self._launch()
            return
        logger.info("root_idle last_flow=%s", child.flow_id)

    def shutdown(self) -> None:
        """Finish every live child and the root itself; safe to call repeatedly."""
        if self.state in (FlowState.FINISHING, FlowState.FINISHED):
            return
        self.finish()

    def _launch(self) -> None:
        factory = self._flows[self._flow_index]
        self.start_child(factory(self._context))
