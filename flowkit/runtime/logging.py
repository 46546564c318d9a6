"""Flowkit logging implementation."""

from __future__ import annotations

import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from flowkit.api.logging import LoggingConfig
from flowkit.runtime.config import get_flowkit_config
from flowkit.runtime.json_codec import dumps_text

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return dumps_text(payload)


class _FileStream:
    """Background listener feeding the file handler off the logging thread."""

    listener: QueueListener | None = None

    @classmethod
    def replace(cls, listener: QueueListener | None) -> None:
        if cls.listener is not None:
            cls.listener.stop()
        cls.listener = listener
        if listener is not None:
            listener.start()


def configure_flowkit_logging(config: LoggingConfig) -> None:
    """Install console logging, plus a queued file handler when ``file_path`` is set."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        _FileStream.replace(None)
        root.addHandler(console)
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter(config.file_format))
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _FileStream.replace(
        QueueListener(records, console, file_handler, respect_handler_level=True)
    )


def stop_flowkit_logging() -> None:
    """Flush and stop the background file listener if one is running."""
    _FileStream.replace(None)


def setup_flowkit_logging() -> None:
    """Configure logging from flowkit config unless the host already did."""
    if logging.getLogger().handlers:
        return
    config = get_flowkit_config()
    configure_flowkit_logging(
        LoggingConfig(
            level_name=config.log_level,
            console_format=config.log_format,
            file_path=config.log_file,
        )
    )


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
