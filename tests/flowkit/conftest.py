from __future__ import annotations

from collections.abc import Iterator

import pytest

from flowkit.runtime.config import _FLOWKIT_CONFIG


@pytest.fixture(autouse=True)
def _isolated_flowkit_config() -> Iterator[None]:
    token = _FLOWKIT_CONFIG.set(None)
    yield
    _FLOWKIT_CONFIG.reset(token)
