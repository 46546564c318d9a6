"""Public flowkit API contracts."""

from flowkit.api.events import (
    ChildDetached,
    DelegateDropped,
    DisciplineViolation,
    EventBus,
    FlowFinished,
    FlowStarted,
    NavigationEvent,
    ScreenDismissed,
    ScreenPresented,
    Subscription,
    create_event_bus,
)
from flowkit.api.flow import (
    FlowController,
    FlowFactory,
    FlowMachine,
    FlowParent,
    FlowState,
    FlowTransition,
    NavigationContext,
    create_flow_machine,
    create_lifecycle_machine,
    lifecycle_transitions,
)
from flowkit.api.logging import LoggingConfig
from flowkit.api.screens import PresentationStack, Screen, ScreenFactory, create_presentation_stack

__all__ = [
    "ChildDetached",
    "DelegateDropped",
    "DisciplineViolation",
    "EventBus",
    "FlowController",
    "FlowFactory",
    "FlowFinished",
    "FlowMachine",
    "FlowParent",
    "FlowStarted",
    "FlowState",
    "FlowTransition",
    "LoggingConfig",
    "NavigationContext",
    "NavigationEvent",
    "PresentationStack",
    "Screen",
    "ScreenDismissed",
    "ScreenFactory",
    "ScreenPresented",
    "Subscription",
    "create_event_bus",
    "create_flow_machine",
    "create_lifecycle_machine",
    "create_presentation_stack",
    "lifecycle_transitions",
]
