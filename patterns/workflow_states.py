"""Enum-based workflow state machine pattern.

Defines workflow states as Python enums with an explicit transition table.
The table only describes which edges are *defined*; what a vertical does
when asked to follow an undefined edge (reject it, or write the state
anyway) is the vertical's decision.

Example domain: industrial task lifecycle (see verticals/operations/lifecycle.py).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

StateT = TypeVar("StateT", bound=Enum)


# ---------------------------------------------------------------------------
# Transition record
# ---------------------------------------------------------------------------

@dataclass
class WorkflowTransition:
    """Record of a single state transition."""

    subject_id: str
    from_state: str
    to_state: str
    timestamp: datetime
    defined: bool = True
    actor: str = "system"
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject_id": self.subject_id,
            "from_state": self.from_state,
            "to_state": self.to_state,
            "timestamp": self.timestamp.isoformat(),
            "defined": self.defined,
            "actor": self.actor,
            "metadata": dict(self.metadata),
        }


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------

class TransitionTable(Generic[StateT]):
    """Allowed transitions keyed by current state.

    Usage::

        table = TransitionTable({
            Light.RED: [Light.GREEN],
            Light.GREEN: [Light.YELLOW],
            Light.YELLOW: [Light.RED],
        })
        table.can_transition(Light.RED, Light.GREEN)  # True
    """

    def __init__(self, transitions: Mapping[StateT, list[StateT]]):
        self._transitions: dict[StateT, tuple[StateT, ...]] = {
            state: tuple(targets) for state, targets in transitions.items()
        }

    def can_transition(self, from_state: StateT, to_state: StateT) -> bool:
        """Check if an edge is defined in the table."""
        return to_state in self._transitions.get(from_state, ())

    def allowed_targets(self, from_state: StateT) -> list[StateT]:
        return list(self._transitions.get(from_state, ()))

    def is_terminal(self, state: StateT) -> bool:
        """A state with no outgoing edges is terminal."""
        return len(self._transitions.get(state, ())) == 0

    def record(
        self,
        subject_id: str,
        from_state: StateT,
        to_state: StateT,
        timestamp: datetime,
        actor: str = "system",
        metadata: dict[str, Any] | None = None,
    ) -> WorkflowTransition:
        """Build a transition record, flagging whether the edge is defined."""
        return WorkflowTransition(
            subject_id=subject_id,
            from_state=from_state.value,
            to_state=to_state.value,
            timestamp=timestamp,
            defined=self.can_transition(from_state, to_state),
            actor=actor,
            metadata=metadata or {},
        )
