"""Traversal policies for DazzleGraphLib.

A TraversalPolicy defines what a walk DOES, independent of how the walker
gets from one value to the next. The walker calls three hooks:

- ``on_leaf(value, depth)`` for terminal values
- ``on_first_visit(value, kind, depth)`` the first time a non-leaf
  reference is reached
- ``on_revisit(value, kind, depth)`` every later time the same reference
  is reached (the walker does not descend again)

Policies may also filter composite fields and ask the walk to stop early.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .._common.config import Classification
from .fields import FieldDescriptor
from .identity import IdentitySet


class TraversalPolicy(ABC):
    """Abstract base class for walk policies.

    Hooks default to no-ops so that policies only override what they use.
    Every policy must report a result.
    """

    def on_leaf(self, value: Any, depth: int) -> None:
        """Called for each terminal value (never tracked for identity)."""
        pass

    def on_first_visit(self, value: Any, kind: Classification, depth: int) -> None:
        """Called when a non-leaf reference is reached for the first time."""
        pass

    def on_revisit(self, value: Any, kind: Classification, depth: int) -> None:
        """Called when an already-visited reference is reached again."""
        pass

    def accept_field(self, descriptor: FieldDescriptor) -> bool:
        """Check if the walker should follow a composite's field.

        Static fields are skipped by the walker before this is asked.

        Returns:
            True to read and walk the field's value
        """
        return True

    def should_stop(self) -> bool:
        """Check if the walk should unwind without visiting more values."""
        return False

    @abstractmethod
    def result(self) -> Any:
        """Return what this policy computed."""
        pass


class CycleDetectionPolicy(TraversalPolicy):
    """Detects whether any non-leaf reference is reached twice.

    The first revisit stops the walk; later siblings are not evaluated.
    """

    def __init__(self):
        self.cycle_found = False
        self.repeated_value: Any = None

    def on_revisit(self, value: Any, kind: Classification, depth: int) -> None:
        if not self.cycle_found:
            self.cycle_found = True
            self.repeated_value = value

    def should_stop(self) -> bool:
        return self.cycle_found

    def result(self) -> bool:
        return self.cycle_found


class DeepCollectionPolicy(TraversalPolicy):
    """Collects every value reached through an accepted field.

    Sequences and mappings are expanded rather than collected: their
    elements are governed by the field that holds the container. The root
    itself is not collected unless a field leads back to it.

    Args:
        field_predicate: Function(FieldDescriptor) -> bool applied to each
            composite's fields (default: accept every field)
    """

    def __init__(self, field_predicate: Optional[Callable[[FieldDescriptor], bool]] = None):
        self.field_predicate = field_predicate
        self.values = IdentitySet()

    def accept_field(self, descriptor: FieldDescriptor) -> bool:
        if self.field_predicate is None:
            return True
        return bool(self.field_predicate(descriptor))

    def on_leaf(self, value: Any, depth: int) -> None:
        if depth > 0:
            self.values.add(value)

    def on_first_visit(self, value: Any, kind: Classification, depth: int) -> None:
        if depth > 0 and kind is Classification.COMPOSITE:
            self.values.add(value)

    def on_revisit(self, value: Any, kind: Classification, depth: int) -> None:
        # Only the root can be revisited without having been collected
        if kind is Classification.COMPOSITE:
            self.values.add(value)

    def result(self) -> IdentitySet:
        return self.values


class ReferenceCollectionPolicy(TraversalPolicy):
    """Collects every distinct non-leaf reference, root included."""

    def __init__(self):
        self.references = IdentitySet()

    def on_first_visit(self, value: Any, kind: Classification, depth: int) -> None:
        self.references.add(value)

    def result(self) -> IdentitySet:
        return self.references


class CustomPolicy(TraversalPolicy):
    """Policy built from user-provided callables.

    Allows custom walk behaviour without subclassing. The result is
    whatever ``result_func`` returns (default: None).
    """

    def __init__(self,
                 on_leaf: Optional[Callable[[Any, int], None]] = None,
                 on_first_visit: Optional[Callable[[Any, Classification, int], None]] = None,
                 on_revisit: Optional[Callable[[Any, Classification, int], None]] = None,
                 accept_field: Optional[Callable[[FieldDescriptor], bool]] = None,
                 result_func: Optional[Callable[[], Any]] = None):
        self._on_leaf = on_leaf
        self._on_first_visit = on_first_visit
        self._on_revisit = on_revisit
        self._accept_field = accept_field
        self._result_func = result_func

    def on_leaf(self, value: Any, depth: int) -> None:
        if self._on_leaf:
            self._on_leaf(value, depth)

    def on_first_visit(self, value: Any, kind: Classification, depth: int) -> None:
        if self._on_first_visit:
            self._on_first_visit(value, kind, depth)

    def on_revisit(self, value: Any, kind: Classification, depth: int) -> None:
        if self._on_revisit:
            self._on_revisit(value, kind, depth)

    def accept_field(self, descriptor: FieldDescriptor) -> bool:
        if self._accept_field:
            return bool(self._accept_field(descriptor))
        return True

    def result(self) -> Any:
        return self._result_func() if self._result_func else None
