"""Item list feature flow: list screen plus an on-demand detail screen."""

from __future__ import annotations

import logging

from flowkit.api.flow import NavigationContext
from flowkit.api.screens import Screen, ScreenFactory
from flowkit.runtime.controller import BaseFlowController, delegate_callback
from itembrowser.core.models import Item
from itembrowser.services.items import ItemSource
from itembrowser.services.tasks import TaskRunner
from itembrowser.viewmodels.item_detail import ItemDetailViewModel
from itembrowser.viewmodels.item_list import ItemListViewModel

logger = logging.getLogger(__name__)


class ItemListFlowController(BaseFlowController):
    """Owns the list → detail sub-flow.

    Every detail push is matched by a pop issued here, either on the detail's
    close request or in ``on_finish``. The list screen itself is unwound by
    the parent, which decided to start this flow.
    """

    def __init__(
        self,
        context: NavigationContext,
        *,
        source: ItemSource,
        runner: TaskRunner,
        screens: ScreenFactory,
        title: str = "Items",
        name: str | None = None,
    ) -> None:
        super().__init__(context, name=name)
        self._source = source
        self._runner = runner
        self._screens = screens
        self._title = title
        self._list_vm: ItemListViewModel | None = None
        self._list_screen: Screen | None = None
        self._detail_vm: ItemDetailViewModel | None = None
        self._detail_screen: Screen | None = None

    @property
    def list_view_model(self) -> ItemListViewModel | None:
        return self._list_vm

    @property
    def detail_view_model(self) -> ItemDetailViewModel | None:
        return self._detail_vm

    def on_start(self) -> None:
        segment = self.require_segment()
        view_model = ItemListViewModel(self._source, self._runner, title=self._title)
        view_model.delegate = self
        screen = self._screens.build(view_model)
        self._list_vm = view_model
        self._list_screen = screen
        segment.present(screen)
        view_model.load()

    def show_detail(self, item: Item) -> bool:
        """Push the detail screen for ``item``; rejected while a detail is open."""
        if self._detail_vm is not None:
            self._violation(
                f"show_detail({item.item_id}) while detail {self._detail_vm.item.item_id} is open"
            )
            return False
        segment = self.require_segment()
        view_model = ItemDetailViewModel(item)
        view_model.delegate = self
        screen = self._screens.build(view_model)
        if not segment.push(screen):
            view_model.delegate = None
            return False
        self._detail_vm = view_model
        self._detail_screen = screen
        logger.info("detail_shown flow=%s item=%s", self.flow_id, item.item_id)
        return True

    def detail_flow_finished(self) -> None:
        """Pop the detail screen and return to the list."""
        if self._detail_vm is None:
            logger.debug("detail_flow_finished_ignored flow=%s reason=no_detail", self.flow_id)
            return
        if self.require_segment().pop() is None:
            return
        logger.info("detail_closed flow=%s item=%s", self.flow_id, self._detail_vm.item.item_id)
        self._detail_vm.delegate = None
        self._detail_vm = None
        self._detail_screen = None

    def on_finish(self) -> None:
        if self._detail_vm is not None:
            self.detail_flow_finished()

    @delegate_callback
    def item_list_did_request_detail(self, view_model: ItemListViewModel, item: Item) -> None:
        self.show_detail(item)

    @delegate_callback
    def item_list_did_request_finish(self, view_model: ItemListViewModel) -> None:
        self.finish()

    @delegate_callback
    def item_detail_did_request_close(self, view_model: ItemDetailViewModel) -> None:
        if view_model is not self._detail_vm:
            logger.debug("detail_close_ignored flow=%s reason=stale_detail", self.flow_id)
            return
        self.detail_flow_finished()
