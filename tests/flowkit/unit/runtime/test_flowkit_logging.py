from __future__ import annotations

import logging

from flowkit.runtime.config import load_flowkit_config, set_flowkit_config
from flowkit.runtime.json_codec import loads
from flowkit.runtime.logging import JsonFormatter, setup_flowkit_logging


def test_setup_flowkit_logging_adds_handler_when_missing() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        set_flowkit_config(load_flowkit_config(env={"FLOWKIT_LOG_LEVEL": "DEBUG"}))
        setup_flowkit_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_setup_flowkit_logging_does_not_override_existing_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_flowkit_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_keeps_extra_fields() -> None:
    record = logging.LogRecord(
        name="flowkit.runtime.controller",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="flow_transition flow=%s",
        args=("List#1",),
        exc_info=None,
    )
    record.flow_id = "List#1"
    record.flow_state = "active"

    payload = loads(JsonFormatter().format(record))

    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "flowkit.runtime.controller"
    assert payload["msg"] == "flow_transition flow=List#1"
    assert payload["fields"] == {"flow_id": "List#1", "flow_state": "active"}
