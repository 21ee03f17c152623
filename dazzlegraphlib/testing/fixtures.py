"""Test fixtures for DazzleGraphLib consumers.

These fixtures make the walk observable for testing purposes without
exposing walker internals as part of the public API.
"""

from typing import Any, List, Optional, Tuple

from .._common.config import Classification
from ..core.fields import FieldDescriptor
from ..core.policy import TraversalPolicy


class RecordingPolicy(TraversalPolicy):
    """Policy that records every hook call in order.

    Each event is a tuple ``(event, value, kind, depth)`` where event is
    ``'leaf'``, ``'first'`` or ``'revisit'`` (kind is LEAF for leaves).

    Example:
        policy = RecordingPolicy()
        walk_graph(order, policy)
        assert policy.first_visits()[0] is order
        assert policy.count('revisit') == 0

    Args:
        stop_after_revisit: Ask the walker to stop at the first revisit,
            like cycle detection does
        accept_field: Optional field filter
    """

    def __init__(self, stop_after_revisit: bool = False, accept_field=None):
        self.events: List[Tuple[str, Any, Classification, int]] = []
        self.fields_offered: List[FieldDescriptor] = []
        self.stop_after_revisit = stop_after_revisit
        self._accept_field = accept_field
        self._stopped = False

    def on_leaf(self, value: Any, depth: int) -> None:
        self.events.append(('leaf', value, Classification.LEAF, depth))

    def on_first_visit(self, value: Any, kind: Classification, depth: int) -> None:
        self.events.append(('first', value, kind, depth))

    def on_revisit(self, value: Any, kind: Classification, depth: int) -> None:
        self.events.append(('revisit', value, kind, depth))
        if self.stop_after_revisit:
            self._stopped = True

    def accept_field(self, descriptor: FieldDescriptor) -> bool:
        self.fields_offered.append(descriptor)
        if self._accept_field is None:
            return True
        return bool(self._accept_field(descriptor))

    def should_stop(self) -> bool:
        return self._stopped

    def result(self) -> List[Tuple[str, Any, Classification, int]]:
        return self.events

    # Convenience accessors for assertions

    def count(self, event: str) -> int:
        """Number of recorded events of one type."""
        return sum(1 for e in self.events if e[0] == event)

    def values(self, event: Optional[str] = None) -> List[Any]:
        """Recorded values, optionally only for one event type."""
        return [e[1] for e in self.events if event is None or e[0] == event]

    def first_visits(self) -> List[Any]:
        """Values in first-visit order."""
        return self.values('first')

    def signature(self) -> List[Tuple[str, int, int]]:
        """Order-sensitive fingerprint ``(event, id(value), depth)``.

        Two walks over the same graph fired identical hooks in identical
        order exactly when their signatures are equal.
        """
        return [(e[0], id(e[1]), e[3]) for e in self.events]
