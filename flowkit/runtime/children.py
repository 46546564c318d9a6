"""Child registry value object owned by each flow controller."""

from __future__ import annotations

from collections.abc import Iterator

from flowkit.api.flow import FlowController


class ChildRegistry:
    """Ordered, identity-keyed collection of exclusively owned child flows."""

    def __init__(self) -> None:
        self._children: list[FlowController] = []

    def add(self, child: FlowController) -> None:
        """Register ``child``; registering the same object twice is rejected."""
        if child in self:
            raise ValueError(f"child already registered: {child.flow_id}")
        self._children.append(child)

    def remove(self, child: FlowController) -> bool:
        """Remove by identity. Unknown children are a no-op."""
        for index, candidate in enumerate(self._children):
            if candidate is child:
                del self._children[index]
                return True
        return False

    def snapshot(self) -> tuple[FlowController, ...]:
        return tuple(self._children)

    def __contains__(self, child: object) -> bool:
        return any(candidate is child for candidate in self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[FlowController]:
        return iter(tuple(self._children))
