"""Non-owning delegate references for upward notifications."""

from __future__ import annotations

import logging
import weakref

from flowkit.api.events import DelegateDropped, EventBus

logger = logging.getLogger(__name__)


class WeakDelegate[TDelegate]:
    """Weak back-reference to a delegate; never keeps the delegate alive.

    Used for both the view-model to flow-controller edge and the child to
    parent edge. Once the target is collected or released, notifications are
    dropped silently.
    """

    __slots__ = ("_ref", "_source_id", "_events")

    def __init__(
        self,
        target: TDelegate | None = None,
        *,
        source_id: str = "",
        events: EventBus | None = None,
    ) -> None:
        self._ref: weakref.ReferenceType[TDelegate] | None = (
            weakref.ref(target) if target is not None else None
        )
        self._source_id = source_id
        self._events = events

    def get(self) -> TDelegate | None:
        """Return the delegate if it is still alive."""
        if self._ref is None:
            return None
        return self._ref()

    def bind(self, target: TDelegate | None) -> None:
        """Point at a new delegate, or clear when ``target`` is None."""
        self._ref = weakref.ref(target) if target is not None else None

    def release(self) -> None:
        self._ref = None

    def __bool__(self) -> bool:
        return self.get() is not None

    def notify(self, method: str, *args: object) -> bool:
        """Invoke ``method`` on the live delegate. Returns whether it was delivered."""
        target = self.get()
        if target is None:
            logger.debug("delegate_dropped source=%s method=%s", self._source_id or "-", method)
            if self._events is not None:
                self._events.publish(DelegateDropped(self._source_id, method))
            return False
        getattr(target, method)(*args)
        return True
