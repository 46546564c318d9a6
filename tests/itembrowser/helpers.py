from __future__ import annotations

from itembrowser.core.models import Item
from itembrowser.services.items import ItemLoadError


class StaticItemSource:
    def __init__(self, items: list[Item]) -> None:
        self.items = items
        self.calls = 0

    def load_items(self) -> list[Item]:
        self.calls += 1
        return list(self.items)


class FlakyItemSource:
    """Fails the first ``failures`` loads, then returns ``items``."""

    def __init__(self, items: list[Item], *, failures: int = 1) -> None:
        self.items = items
        self.failures = failures
        self.calls = 0

    def load_items(self) -> list[Item]:
        self.calls += 1
        if self.calls <= self.failures:
            raise ItemLoadError("bad server response")
        return list(self.items)


ITEMS = [
    Item("item-1", "Alice Smith", "alice@example.com", "Platform team lead."),
    Item("item-2", "Bob Johnson", "bob.j@example.com"),
]
