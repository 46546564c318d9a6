"""Shared flow-discipline exception policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias

from flowkit.api.events import DisciplineViolation, EventBus

# Explicitly bounded set of failures a background load may surface to a view-model.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    KeyError,
)


class FlowDisciplineError(RuntimeError):
    """Programmer error in flow-tree usage, raised only in strict mode."""


def report_violation(
    logger: logging.Logger,
    message: str,
    *,
    strict: bool,
    events: EventBus | None = None,
    flow_id: str = "",
) -> None:
    """Fail fast in strict mode, otherwise log and continue as a no-op."""
    if strict:
        raise FlowDisciplineError(f"{flow_id}: {message}" if flow_id else message)
    logger.warning("flow_discipline_violation flow=%s %s", flow_id or "-", message)
    if events is not None:
        events.publish(DisciplineViolation(flow_id, message))


def is_recoverable(error: BaseException) -> bool:
    return isinstance(error, RECOVERABLE_RUNTIME_ERRORS)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    error: BaseException | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=error if error is not None else True)
