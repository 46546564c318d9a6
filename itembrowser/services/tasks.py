"""Background work runners that deliver completions on the UI thread."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol

from flowkit.runtime.scheduler import UiScheduler

logger = logging.getLogger(__name__)


class TaskRunner(Protocol):
    """Runs blocking work and posts exactly one completion callback to the UI thread."""

    def submit[T](
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        """Schedule ``work``."""


class ThreadTaskRunner:
    """Thread-pool runner; completions are marshaled through ``UiScheduler.post``."""

    def __init__(self, scheduler: UiScheduler, *, max_workers: int = 2) -> None:
        self._scheduler = scheduler
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, max_workers), thread_name_prefix="itembrowser-io"
        )

    def submit[T](
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        future = self._executor.submit(work)
        future.add_done_callback(
            lambda done: self._scheduler.post(
                functools.partial(_deliver, done, on_success, on_error)
            )
        )

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=True)


class InlineTaskRunner:
    """Runs work immediately but still defers completion to the next drain."""

    def __init__(self, scheduler: UiScheduler) -> None:
        self._scheduler = scheduler

    def submit[T](
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        try:
            result = work()
        except Exception as exc:
            self._scheduler.post(functools.partial(on_error, exc))
            return
        self._scheduler.post(functools.partial(on_success, result))

    def shutdown(self, *, wait: bool = True) -> None:
        del wait


def _deliver[T](
    future: Future[T],
    on_success: Callable[[T], None],
    on_error: Callable[[BaseException], None],
) -> None:
    if future.cancelled():
        logger.debug("task_cancelled")
        return
    error = future.exception()
    if error is not None:
        on_error(error)
        return
    on_success(future.result())
