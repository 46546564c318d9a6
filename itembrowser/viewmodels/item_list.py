"""Item list view-model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from flowkit.runtime.delegates import WeakDelegate
from flowkit.runtime.errors import is_recoverable, log_recoverable
from itembrowser.core.models import Item, initials_for
from itembrowser.services.items import ItemSource
from itembrowser.services.tasks import TaskRunner

logger = logging.getLogger(__name__)


class ItemListDelegate(Protocol):
    """Navigation events the item list can raise."""

    def item_list_did_request_detail(self, view_model: ItemListViewModel, item: Item) -> None: ...

    def item_list_did_request_finish(self, view_model: ItemListViewModel) -> None: ...


@dataclass(frozen=True, slots=True)
class ItemRowViewModel:
    """Display projection of one item row."""

    item: Item

    @property
    def item_id(self) -> str:
        return self.item.item_id

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def subtitle(self) -> str:
        return self.item.subtitle

    @property
    def initials(self) -> str:
        return initials_for(self.item.title)


class ItemListViewModel:
    """Keeps item list UI state; knows that an intent happened, not how it is fulfilled."""

    def __init__(self, source: ItemSource, runner: TaskRunner, *, title: str = "Items") -> None:
        self.title = title
        self._source = source
        self._runner = runner
        self._delegate: WeakDelegate[ItemListDelegate] = WeakDelegate(source_id="ItemListViewModel")
        self.rows: tuple[ItemRowViewModel, ...] = ()
        self.is_loading = False
        self.error_message: str | None = None

    @property
    def delegate(self) -> ItemListDelegate | None:
        return self._delegate.get()

    @delegate.setter
    def delegate(self, value: ItemListDelegate | None) -> None:
        self._delegate.bind(value)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Start loading rows; ignored while a load is in flight."""
        if self.is_loading:
            logger.debug("item_list_load_ignored reason=in_flight")
            return
        self.is_loading = True
        self.error_message = None
        self.rows = ()
        self._runner.submit(self._source.load_items, self._on_loaded, self._on_failed)

    def refresh(self) -> None:
        self.load()

    def clear_error(self) -> None:
        self.error_message = None

    def _on_loaded(self, items: list[Item]) -> None:
        self.is_loading = False
        self.rows = tuple(ItemRowViewModel(item) for item in items)
        logger.info("item_list_loaded count=%d", len(self.rows))

    def _on_failed(self, error: BaseException) -> None:
        self.is_loading = False
        if not is_recoverable(error):
            raise error
        log_recoverable(logger, "item_list_load_failed", error=error, level=logging.WARNING)
        self.error_message = f"Failed to load items. Please try again. ({error})"

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def select(self, index: int) -> bool:
        """Request detail for the row at ``index``. Out-of-range indices are ignored."""
        if not 0 <= index < len(self.rows):
            logger.debug("item_list_select_ignored index=%d rows=%d", index, len(self.rows))
            return False
        self.request_detail(self.rows[index].item)
        return True

    def request_detail(self, item: Item) -> None:
        self._delegate.notify("item_list_did_request_detail", self, item)

    def request_finish(self) -> None:
        self._delegate.notify("item_list_did_request_finish", self)
