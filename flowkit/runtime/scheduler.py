"""UI-thread scheduler: marshals worker completions onto the UI thread."""

from __future__ import annotations

import queue
from collections.abc import Callable

UiCallback = Callable[[], None]


class UiScheduler:
    """Single consumer scheduler owned by the UI thread.

    ``post`` may be called from any thread; ``drain`` must run on the UI
    thread, which is where flow controllers receive delegate calls.
    """

    def __init__(self) -> None:
        self._inbox: queue.SimpleQueue[UiCallback] = queue.SimpleQueue()

    @property
    def pending_posts(self) -> int:
        return self._inbox.qsize()

    def post(self, callback: UiCallback) -> None:
        """Enqueue ``callback`` for the UI thread. Thread-safe."""
        self._inbox.put(callback)

    def drain(self, timeout: float | None = None) -> int:
        """Run posted callbacks in FIFO order, including ones posted meanwhile.

        With ``timeout`` the call first blocks up to that many seconds for a
        callback to arrive. Returns number of callbacks run.
        """
        ran = 0
        if timeout is not None:
            try:
                first = self._inbox.get(timeout=max(0.0, timeout))
            except queue.Empty:
                return 0
            first()
            ran = 1
        while True:
            try:
                callback = self._inbox.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1
