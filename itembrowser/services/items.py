"""Item sources: built-in sample catalogue and JSON files."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from flowkit.runtime.json_codec import loads
from itembrowser.core.models import Item
from itembrowser.infra.config import AppConfig

logger = logging.getLogger(__name__)

SAMPLE_ITEMS: tuple[Item, ...] = (
    Item("item-1", "Alice Smith", "alice@example.com", "Platform team lead."),
    Item("item-2", "Bob Johnson", "bob.j@example.com", "Maintains the billing service."),
    Item("item-3", "Charlie Brown", "charlie@example.com", "Design systems and accessibility."),
    Item("item-4", "Diana Prince", "diana@example.com", "Security reviews and incident response."),
)


class ItemLoadError(RuntimeError):
    """Raised when a source cannot produce items."""


class ItemSource(Protocol):
    """Blocking item loader; callers run it off the UI thread."""

    def load_items(self) -> list[Item]:
        """Return the full item list."""


class SampleItemSource:
    """Built-in catalogue with optional simulated latency and failures."""

    def __init__(
        self,
        items: Sequence[Item] = SAMPLE_ITEMS,
        *,
        rng: random.Random | None = None,
        failure_rate: float = 0.0,
        latency_seconds: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be within [0, 1]")
        self._items = tuple(items)
        self._rng = rng or random.Random()
        self._failure_rate = failure_rate
        self._latency_seconds = max(0.0, latency_seconds)
        self._sleep = sleep

    def load_items(self) -> list[Item]:
        if self._latency_seconds > 0.0:
            self._sleep(self._latency_seconds)
        if self._failure_rate > 0.0 and self._rng.random() < self._failure_rate:
            logger.info("sample_source_simulated_failure")
            raise ItemLoadError("bad server response")
        return list(self._items)


class JsonItemSource:
    """Loads items from a JSON array or an object with an ``items`` array."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load_items(self) -> list[Item]:
        try:
            payload = loads(self._path.read_bytes())
        except OSError as exc:
            raise ItemLoadError(f"cannot read {self._path}: {exc.strerror or exc}") from exc
        except ValueError as exc:
            raise ItemLoadError(f"invalid JSON in {self._path}") from exc
        if isinstance(payload, dict):
            payload = payload.get("items")
        if not isinstance(payload, list):
            raise ItemLoadError(f"{self._path} does not contain an item list")
        return [_item_from_json(entry, index) for index, entry in enumerate(payload)]


def _item_from_json(entry: object, index: int) -> Item:
    if not isinstance(entry, dict):
        raise ItemLoadError(f"item #{index} is not an object")
    title = _text_field(entry, "title").strip()
    if not title:
        raise ItemLoadError(f"item #{index} has no title")
    return Item(
        item_id=_text_field(entry, "id") or f"item-{index + 1}",
        title=title,
        subtitle=_text_field(entry, "subtitle"),
        body=_text_field(entry, "body"),
    )


def _text_field(entry: dict[str, object], key: str) -> str:
    # JSON null reads as a missing field.
    value = entry.get(key)
    return "" if value is None else str(value)


def build_item_source(config: AppConfig) -> ItemSource:
    if config.items_path:
        return JsonItemSource(Path(config.items_path))
    return SampleItemSource(
        rng=random.Random(config.seed),
        failure_rate=config.failure_rate,
        latency_seconds=config.latency_ms / 1000.0,
    )
