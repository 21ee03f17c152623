"""Configuration system for DazzleGraphLib.

This module defines how users specify their walk requirements: which walk
algorithm to use, which types should be treated as terminal values, and how
failed field reads are handled.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Tuple


class Classification(Enum):
    """Shape of a runtime value, as far as the walker is concerned."""
    LEAF = "leaf"              # Terminal, never recursed, never tracked
    SEQUENCE = "sequence"      # Ordered element iteration
    MAPPING = "mapping"        # Key/value iteration
    COMPOSITE = "composite"    # Recursed through its fields


class WalkStrategy(Enum):
    """How the walker descends through the graph.

    Both strategies visit values in the same order and fire the same
    policy hooks; they differ only in where the pending work lives.
    """
    RECURSIVE = "recursive"              # Python call stack
    EXPLICIT_STACK = "explicit_stack"    # Heap-allocated stack of iterators


class FieldKind(Enum):
    """Where a field was declared."""
    ANNOTATED = "annotated"              # Class-level annotation
    SLOT = "slot"                        # Entry in __slots__
    CLASS_ATTRIBUTE = "class_attribute"  # Plain class-body assignment
    INSTANCE = "instance"                # Only present in the instance __dict__


@dataclass
class WalkConfig:
    """Complete configuration for an object-graph walk.

    This is the primary way users tune a walk. The WalkPlan validates it
    and assembles the classifier, accessor and walker from it.
    """

    # Walk algorithm
    strategy: WalkStrategy = WalkStrategy.RECURSIVE

    # Classification overrides
    leaf_types: Tuple[type, ...] = ()              # Extra terminal types
    leaf_modules: FrozenSet[str] = frozenset()     # Extra terminal module roots
    composite_types: Tuple[type, ...] = ()         # Always walked through fields
    platform_types_are_leaves: bool = True         # builtins/stdlib types are terminal

    # Field discovery
    include_undeclared_attributes: bool = True     # Walk instance __dict__ extras

    # Error handling (None = DegradeToNonePolicy)
    read_error_policy: Optional[Any] = None

    @classmethod
    def deep_graph(cls) -> 'WalkConfig':
        """Create config for graphs deeper than the recursion limit.

        Returns:
            WalkConfig using the explicit-stack walker
        """
        return cls(strategy=WalkStrategy.EXPLICIT_STACK)

    @classmethod
    def strict(cls) -> 'WalkConfig':
        """Create config that fails on the first unreadable field.

        Returns:
            WalkConfig with a FailFastPolicy for reads
        """
        from ..error_policies import FailFastPolicy
        return cls(read_error_policy=FailFastPolicy())

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, WalkStrategy):
            errors.append(f"strategy must be a WalkStrategy, got {self.strategy!r}")

        for name in ('leaf_types', 'composite_types'):
            for entry in getattr(self, name):
                if not isinstance(entry, type):
                    errors.append(f"{name} entries must be types, got {entry!r}")

        overlap = set(self.leaf_types) & set(self.composite_types)
        if overlap:
            names = ', '.join(sorted(t.__name__ for t in overlap))
            errors.append(f"types cannot be both leaf and composite: {names}")

        for module in self.leaf_modules:
            if not isinstance(module, str) or not module:
                errors.append(f"leaf_modules entries must be module names, got {module!r}")

        if self.read_error_policy is not None and not callable(
                getattr(self.read_error_policy, 'handle', None)):
            errors.append("read_error_policy must provide a handle() method")

        return errors
