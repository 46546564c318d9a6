"""Item browser domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Item:
    """One browsable catalogue entry."""

    item_id: str
    title: str
    subtitle: str = ""
    body: str = ""


def initials_for(name: str) -> str:
    """Return up to two uppercase initials, or ``?`` when none can be derived."""
    parts = [part for part in name.split() if part[:1].isalpha()]
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()
