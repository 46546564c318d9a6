"""Flowkit runtime modules."""

from flowkit.api.flow import FlowState, NavigationContext
from flowkit.runtime.children import ChildRegistry
from flowkit.runtime.config import FlowkitConfig, get_flowkit_config, load_flowkit_config
from flowkit.runtime.controller import BaseFlowController, delegate_callback
from flowkit.runtime.delegates import WeakDelegate
from flowkit.runtime.errors import FlowDisciplineError, report_violation
from flowkit.runtime.events import EventBus
from flowkit.runtime.flow import FlowMachine
from flowkit.runtime.journal import NavigationJournal
from flowkit.runtime.logging import setup_flowkit_logging
from flowkit.runtime.presentation_stack import PresentationStackImpl
from flowkit.runtime.root import AfterFinishPolicy, RootFlowController
from flowkit.runtime.scheduler import UiScheduler
from flowkit.runtime.segment import StackSegment

__all__ = [
    "AfterFinishPolicy",
    "BaseFlowController",
    "ChildRegistry",
    "EventBus",
    "FlowDisciplineError",
    "FlowMachine",
    "FlowState",
    "FlowkitConfig",
    "NavigationContext",
    "NavigationJournal",
    "PresentationStackImpl",
    "RootFlowController",
    "StackSegment",
    "UiScheduler",
    "WeakDelegate",
    "delegate_callback",
    "get_flowkit_config",
    "load_flowkit_config",
    "report_violation",
    "setup_flowkit_logging",
]
