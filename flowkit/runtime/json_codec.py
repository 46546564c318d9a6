"""Fast JSON codec helpers for log and journal export paths."""

from __future__ import annotations

from typing import Any

import orjson


def dumps_bytes(payload: Any, *, pretty: bool = False, sort_keys: bool = False) -> bytes:
    """Serialize payload to UTF-8 JSON bytes."""
    options = 0
    if pretty:
        options |= orjson.OPT_INDENT_2
    if sort_keys:
        options |= orjson.OPT_SORT_KEYS
    return orjson.dumps(payload, default=_fallback, option=options)


def dumps_text(payload: Any, *, pretty: bool = False, sort_keys: bool = False) -> str:
    return dumps_bytes(payload, pretty=pretty, sort_keys=sort_keys).decode("utf-8")


def loads(raw: bytes | str) -> Any:
    return orjson.loads(raw)


def _fallback(value: object) -> str:
    # Log extras and event fields are not guaranteed to be JSON-native.
    return repr(value)


__all__ = ["dumps_bytes", "dumps_text", "loads"]
