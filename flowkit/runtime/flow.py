"""Transition-table executor behind every flow-controller lifecycle."""

from __future__ import annotations

from collections import defaultdict

from flowkit.api.flow import FlowTransition


class RuntimeFlowMachine[TState]:
    """Deterministic executor over a trigger-indexed transition table.

    Transitions for one trigger are tried in registration order; a transition
    with ``source=None`` matches any current state.
    """

    def __init__(self, initial_state: TState) -> None:
        self._state = initial_state
        self._by_trigger: defaultdict[str, list[FlowTransition[TState]]] = defaultdict(list)

    @property
    def state(self) -> TState:
        return self._state

    def add_transition(self, transition: FlowTransition[TState]) -> None:
        self._by_trigger[transition.trigger].append(transition)

    def trigger(self, event: str) -> bool:
        """Apply the first transition for ``event`` from the current state; False when none matches."""
        for transition in self._by_trigger.get(event, ()):
            if transition.source is None or transition.source == self._state:
                self._state = transition.target
                return True
        return False


FlowMachine = RuntimeFlowMachine
