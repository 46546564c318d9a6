from __future__ import annotations

import gc

import pytest

from flowkit.api.events import (
    ChildDetached,
    FlowFinished,
    NavigationEvent,
    ScreenDismissed,
)
from flowkit.api.flow import FlowController, FlowState, NavigationContext
from flowkit.runtime.errors import FlowDisciplineError
from flowkit.runtime.events import EventBus
from flowkit.runtime.root import RootFlowController
from flowkit.runtime.scheduler import UiScheduler
from itembrowser.app.list_flow import ItemListFlowController
from itembrowser.services.tasks import InlineTaskRunner
from itembrowser.ui.screens import TextScreenFactory
from tests.flowkit.helpers import ParentFlow, SpyPresentationStack, make_context
from tests.itembrowser.helpers import ITEMS, StaticItemSource


class _Harness:
    def __init__(self, *, strict: bool = True) -> None:
        self.stack = SpyPresentationStack()
        self.events = EventBus()
        self.scheduler = UiScheduler()
        self.runner = InlineTaskRunner(self.scheduler)
        self.context = make_context(stack=self.stack, events=self.events, strict=strict)
        self.flows: list[ItemListFlowController] = []

    def factory(self, context: NavigationContext) -> FlowController:
        flow = ItemListFlowController(
            context,
            source=StaticItemSource(ITEMS),
            runner=self.runner,
            screens=TextScreenFactory(),
        )
        self.flows.append(flow)
        return flow

    def start_under_root(self) -> tuple[RootFlowController, ItemListFlowController]:
        root = RootFlowController(self.context, [self.factory])
        root.start()
        self.scheduler.drain()
        return root, self.flows[0]


def test_list_flow_sets_root_on_empty_stack_and_loads() -> None:
    harness = _Harness()
    _, flow = harness.start_under_root()

    assert harness.stack.ops == [("set_root", "list")]
    assert flow.list_view_model is not None
    assert len(flow.list_view_model.rows) == 2
    assert flow.state is FlowState.ACTIVE


def test_list_flow_pushes_when_started_above_another_screen() -> None:
    harness = _Harness()
    parent = ParentFlow(harness.context, "home")
    parent.start()

    flow = parent.start_child(harness.factory(harness.context))
    flow.finish()

    assert harness.stack.ops == [("set_root", "home"), ("push", "list"), ("pop", "list")]
    assert harness.stack.ids() == ["home"]


def test_list_select_pushes_detail_and_close_pops_it() -> None:
    harness = _Harness()
    _, flow = harness.start_under_root()
    assert flow.list_view_model is not None

    flow.list_view_model.select(0)
    detail = flow.detail_view_model
    assert detail is not None
    assert harness.stack.ids() == ["list", "detail:item-1"]

    detail.request_close()

    assert flow.detail_view_model is None
    assert harness.stack.ids() == ["list"]
    assert detail.delegate is None


def test_second_detail_while_open_is_rejected() -> None:
    strict = _Harness(strict=True)
    _, flow = strict.start_under_root()
    assert flow.show_detail(ITEMS[0])
    with pytest.raises(FlowDisciplineError):
        flow.show_detail(ITEMS[1])
    assert strict.stack.ids() == ["list", "detail:item-1"]

    lenient = _Harness(strict=False)
    _, flow = lenient.start_under_root()
    assert flow.show_detail(ITEMS[0])
    assert not flow.show_detail(ITEMS[1])
    assert lenient.stack.ids() == ["list", "detail:item-1"]


def test_show_detail_before_start_raises_runtime_error() -> None:
    harness = _Harness()
    flow = harness.factory(harness.context)

    with pytest.raises(RuntimeError):
        flow.show_detail(ITEMS[0])  # type: ignore[attr-defined]

    assert harness.stack.is_empty


def test_browse_two_items_then_finish_leaves_root_idle() -> None:
    harness = _Harness()
    root, flow = harness.start_under_root()
    vm = flow.list_view_model
    assert vm is not None

    vm.select(0)
    assert flow.detail_view_model is not None
    flow.detail_view_model.request_close()
    vm.select(1)
    assert flow.detail_view_model is not None
    flow.detail_view_model.request_close()
    vm.request_finish()

    assert harness.stack.ops == [
        ("set_root", "list"),
        ("push", "detail:item-1"),
        ("pop", "detail:item-1"),
        ("push", "detail:item-2"),
        ("pop", "detail:item-2"),
        ("pop", "list"),
    ]
    assert harness.stack.is_empty
    assert root.is_idle
    assert root.finished_children == (flow.flow_id,)
    assert flow.segment is not None and flow.segment.is_balanced


def test_finish_with_open_detail_pops_detail_before_notifying_root() -> None:
    harness = _Harness()
    seen: list[NavigationEvent] = []
    harness.events.subscribe(NavigationEvent, seen.append)
    root, flow = harness.start_under_root()
    flow.show_detail(ITEMS[0])
    seen.clear()

    flow.finish()

    assert seen == [
        ScreenDismissed(flow.flow_id, "detail:item-1", 1),
        FlowFinished(flow.flow_id, root.flow_id),
        ScreenDismissed(flow.flow_id, "list", 0),
        ChildDetached(root.flow_id, flow.flow_id),
    ]
    assert harness.stack.ops[-2:] == [("pop", "detail:item-1"), ("pop", "list")]
    assert harness.stack.is_empty


def test_late_list_intent_after_finish_is_rejected_or_dropped() -> None:
    strict = _Harness(strict=True)
    _, flow = strict.start_under_root()
    vm = flow.list_view_model
    assert vm is not None
    vm.request_finish()

    with pytest.raises(FlowDisciplineError):
        vm.select(0)

    lenient = _Harness(strict=False)
    _, flow = lenient.start_under_root()
    vm = flow.list_view_model
    assert vm is not None
    vm.request_finish()
    vm.select(0)
    assert lenient.stack.is_empty


def test_intent_from_view_model_outliving_its_flow_is_dropped() -> None:
    harness = _Harness()
    _, flow = harness.start_under_root()
    vm = flow.list_view_model
    assert vm is not None
    vm.request_finish()

    harness.flows.clear()
    del flow
    gc.collect()

    assert vm.delegate is None
    assert not vm.select(5)
    assert vm.select(0)
    assert harness.stack.is_empty


def test_stale_detail_close_is_ignored() -> None:
    harness = _Harness()
    _, flow = harness.start_under_root()
    flow.show_detail(ITEMS[0])
    first = flow.detail_view_model
    assert first is not None
    first.request_close()
    flow.show_detail(ITEMS[1])

    flow.item_detail_did_request_close(first)

    assert harness.stack.ids() == ["list", "detail:item-2"]


def test_scripted_detail_sequence_balances_before_root_is_notified() -> None:
    harness = _Harness()
    root, flow = harness.start_under_root()
    vm = flow.list_view_model
    assert vm is not None
    notified_at: list[list[tuple[str, str]]] = []
    harness.events.subscribe(
        FlowFinished, lambda event: notified_at.append(list(harness.stack.ops))
    )

    vm.request_detail(ITEMS[0])
    assert flow.detail_view_model is not None
    flow.detail_view_model.request_close()
    vm.request_detail(ITEMS[1])
    vm.request_finish()

    assert notified_at == [
        [
            ("set_root", "list"),
            ("push", "detail:item-1"),
            ("pop", "detail:item-1"),
            ("push", "detail:item-2"),
            ("pop", "detail:item-2"),
        ]
    ]
    assert harness.stack.ops[-1] == ("pop", "list")
    assert flow not in root.children
