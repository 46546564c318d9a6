"""Bounded navigation journal fed from the event bus."""

from __future__ import annotations

from dataclasses import asdict

from flowkit.api.events import EventBus, NavigationEvent
from flowkit.runtime.json_codec import dumps_text


class RingBuffer[T]:
    """Drop-oldest ring buffer with O(1) append."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._capacity = int(capacity)
        self._items: list[T | None] = [None] * self._capacity
        self._write_index = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return self._size

    def append(self, value: T) -> None:
        self._items[self._write_index] = value
        self._write_index = (self._write_index + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1

    def clear(self) -> None:
        self._items = [None] * self._capacity
        self._write_index = 0
        self._size = 0

    def snapshot(self) -> list[T]:
        if self._size == 0:
            return []
        start = 0 if self._size < self._capacity else self._write_index
        out: list[T] = []
        for i in range(self._size):
            item = self._items[(start + i) % self._capacity]
            if item is not None:
                out.append(item)
        return out


class NavigationJournal:
    """Records navigation events for debugging and export."""

    def __init__(self, events: EventBus, *, capacity: int = 512) -> None:
        self._events = events
        self._buffer: RingBuffer[NavigationEvent] = RingBuffer(capacity)
        self._subscription = events.subscribe(NavigationEvent, self._buffer.append)

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    def entries(self) -> list[NavigationEvent]:
        return self._buffer.snapshot()

    def kinds(self) -> list[str]:
        return [type(event).__name__ for event in self._buffer.snapshot()]

    def clear(self) -> None:
        self._buffer.clear()

    def close(self) -> None:
        self._events.unsubscribe(self._subscription)

    def to_jsonl(self) -> str:
        lines = [
            dumps_text({"kind": type(event).__name__, **asdict(event)})
            for event in self._buffer.snapshot()
        ]
        return "\n".join(lines) + ("\n" if lines else "")
