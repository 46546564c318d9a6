"""Explicit composition of the item browser object graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flowkit.api.events import EventBus, create_event_bus
from flowkit.api.flow import FlowController, NavigationContext
from flowkit.api.screens import PresentationStack, create_presentation_stack
from flowkit.runtime.config import FlowkitConfig
from flowkit.runtime.journal import NavigationJournal
from flowkit.runtime.root import AfterFinishPolicy, RootFlowController
from flowkit.runtime.scheduler import UiScheduler
from itembrowser.app.list_flow import ItemListFlowController
from itembrowser.infra.config import AppConfig
from itembrowser.services.items import ItemSource, build_item_source
from itembrowser.services.tasks import InlineTaskRunner, ThreadTaskRunner
from itembrowser.ui.screens import TextScreenFactory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppGraph:
    """Everything the hosting shell needs, built once at start-up."""

    config: FlowkitConfig
    app_config: AppConfig
    events: EventBus
    journal: NavigationJournal
    stack: PresentationStack
    scheduler: UiScheduler
    runner: ThreadTaskRunner | InlineTaskRunner
    root: RootFlowController

    def close(self) -> None:
        """Tear the tree down and stop background work; safe to call twice."""
        self.root.shutdown()
        self.runner.shutdown(wait=True)
        self.journal.close()


def build_app(
    *,
    config: FlowkitConfig,
    app_config: AppConfig,
    source: ItemSource | None = None,
    policy: AfterFinishPolicy | None = None,
    threaded: bool = True,
) -> AppGraph:
    """Construct stack, root flow controller and collaborators without starting them."""
    events = create_event_bus()
    journal = NavigationJournal(events, capacity=config.journal_capacity)
    stack = create_presentation_stack()
    context = NavigationContext(stack=stack, events=events, strict=config.strict_discipline)
    scheduler = UiScheduler()
    runner: ThreadTaskRunner | InlineTaskRunner = (
        ThreadTaskRunner(scheduler) if threaded else InlineTaskRunner(scheduler)
    )
    item_source = source if source is not None else build_item_source(app_config)
    screens = TextScreenFactory()

    def item_list_flow(flow_context: NavigationContext) -> FlowController:
        return ItemListFlowController(
            flow_context, source=item_source, runner=runner, screens=screens
        )

    resolved_policy = policy if policy is not None else config.root_policy
    root = RootFlowController(context, (item_list_flow,), policy=resolved_policy)
    logger.debug(
        "app_graph_built policy=%s strict=%s threaded=%s",
        resolved_policy.value,
        config.strict_discipline,
        threaded,
    )
    return AppGraph(
        config=config,
        app_config=app_config,
        events=events,
        journal=journal,
        stack=stack,
        scheduler=scheduler,
        runner=runner,
        root=root,
    )
