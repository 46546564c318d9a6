from __future__ import annotations

from collections.abc import Iterator

import pytest

from flowkit.runtime.config import _FLOWKIT_CONFIG
from flowkit.runtime.scheduler import UiScheduler
from itembrowser.services.tasks import InlineTaskRunner


@pytest.fixture(autouse=True)
def _isolated_flowkit_config() -> Iterator[None]:
    token = _FLOWKIT_CONFIG.set(None)
    yield
    _FLOWKIT_CONFIG.reset(token)


@pytest.fixture
def scheduler() -> UiScheduler:
    return UiScheduler()


@pytest.fixture
def inline_runner(scheduler: UiScheduler) -> InlineTaskRunner:
    return InlineTaskRunner(scheduler)
