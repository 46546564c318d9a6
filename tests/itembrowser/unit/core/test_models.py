from __future__ import annotations

import pytest

from itembrowser.core.models import initials_for


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Alice Smith", "AS"),
        ("charlie", "C"),
        ("Mary Jane Watson", "MW"),
        ("  ", "?"),
        ("42 99", "?"),
        ("Dr. 2 who", "DW"),
    ],
)
def test_initials_for(name: str, expected: str) -> None:
    assert initials_for(name) == expected
