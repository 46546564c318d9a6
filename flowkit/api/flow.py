"""Public flow-controller and lifecycle state-machine contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from flowkit.api.events import EventBus
from flowkit.api.screens import PresentationStack


class FlowState(Enum):
    """Flow-controller lifecycle states."""

    CREATED = "created"
    STARTED = "started"
    ACTIVE = "active"
    FINISHING = "finishing"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class FlowTransition[TState]:
    """Public transition definition."""

    trigger: str
    source: TState | None
    target: TState


class FlowMachine[TState](Protocol):
    """Public flow-machine contract."""

    @property
    def state(self) -> TState:
        """Return current state."""

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        """Register one transition."""

    def trigger(self, event: str) -> bool:
        """Execute first matching transition."""


@dataclass(frozen=True, slots=True)
class NavigationContext:
    """Collaborators shared by every node of one flow-controller tree."""

    stack: PresentationStack
    events: EventBus | None = None
    strict: bool = False


class FlowParent(Protocol):
    """Child-to-parent delegate: the single "flow finished" event."""

    @property
    def flow_id(self) -> str:
        """Return parent identifier."""

    def child_did_finish(self, child: FlowController) -> None:
        """Handle a child reporting that its flow has finished."""


class FlowController(ABC):
    """Node of the flow-controller ownership tree."""

    @property
    @abstractmethod
    def flow_id(self) -> str:
        """Return unique node identifier."""

    @property
    @abstractmethod
    def state(self) -> FlowState:
        """Return lifecycle state."""

    @property
    @abstractmethod
    def children(self) -> tuple[FlowController, ...]:
        """Return registered children in registration order."""

    @property
    @abstractmethod
    def parent(self) -> FlowParent | None:
        """Return parent when still alive."""

    @abstractmethod
    def attach_parent(self, parent: FlowParent) -> None:
        """Install the non-owning back-reference to the parent."""

    @abstractmethod
    def start(self) -> None:
        """Place exactly one screen on the presentation stack."""

    @abstractmethod
    def finish(self) -> None:
        """Notify the parent that this flow is done."""

    @abstractmethod
    def child_did_finish(self, child: FlowController) -> None:
        """Remove a finished child and reverse its stack mutations."""

    @abstractmethod
    def unwind_screens(self) -> int:
        """Pop the screens this node still owns; called by its parent after finish."""


type FlowFactory = Callable[[NavigationContext], FlowController]


def lifecycle_transitions() -> tuple[FlowTransition[FlowState], ...]:
    """Return the lifecycle transition table shared by all flow controllers."""
    return (
        FlowTransition(trigger="start", source=FlowState.CREATED, target=FlowState.STARTED),
        FlowTransition(trigger="activate", source=FlowState.STARTED, target=FlowState.ACTIVE),
        FlowTransition(trigger="finish", source=FlowState.CREATED, target=FlowState.FINISHING),
        FlowTransition(trigger="finish", source=FlowState.STARTED, target=FlowState.FINISHING),
        FlowTransition(trigger="finish", source=FlowState.ACTIVE, target=FlowState.FINISHING),
        FlowTransition(trigger="complete", source=FlowState.FINISHING, target=FlowState.FINISHED),
    )


def create_flow_machine[TState](initial_state: TState) -> FlowMachine[TState]:
    """Create default flow-machine implementation."""
    from flowkit.runtime.flow import RuntimeFlowMachine

    return RuntimeFlowMachine(initial_state)


def create_lifecycle_machine() -> FlowMachine[FlowState]:
    """Create a flow machine preloaded with the lifecycle transition table."""
    machine: FlowMachine[FlowState] = create_flow_machine(FlowState.CREATED)
    for transition in lifecycle_transitions():
        machine.add_transition(transition)
    return machine
