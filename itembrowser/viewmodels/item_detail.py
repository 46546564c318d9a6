"""Item detail view-model."""

from __future__ import annotations

from typing import Protocol

from flowkit.runtime.delegates import WeakDelegate
from itembrowser.core.models import Item, initials_for


class ItemDetailDelegate(Protocol):
    """Navigation events the item detail can raise."""

    def item_detail_did_request_close(self, view_model: ItemDetailViewModel) -> None: ...


class ItemDetailViewModel:
    def __init__(self, item: Item) -> None:
        self.item = item
        self._delegate: WeakDelegate[ItemDetailDelegate] = WeakDelegate(
            source_id=f"ItemDetailViewModel:{item.item_id}"
        )

    @property
    def delegate(self) -> ItemDetailDelegate | None:
        return self._delegate.get()

    @delegate.setter
    def delegate(self, value: ItemDetailDelegate | None) -> None:
        self._delegate.bind(value)

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def initials(self) -> str:
        return initials_for(self.item.title)

    def lines(self) -> list[str]:
        out = [line for line in (self.item.subtitle, self.item.body) if line]
        return out or ["(no details)"]

    def request_close(self) -> None:
        self._delegate.notify("item_detail_did_request_close", self)
