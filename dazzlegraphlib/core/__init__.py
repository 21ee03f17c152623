"""Core abstractions for DazzleGraphLib.

This module contains the building blocks of a walk: the identity set, the
value classifier, the field accessor, the policies and the walkers.
"""

from .identity import IdentitySet
from .classifier import TypeClassifier
from .fields import FieldAccessor, FieldDescriptor
from .policy import (
    TraversalPolicy,
    CycleDetectionPolicy,
    DeepCollectionPolicy,
    ReferenceCollectionPolicy,
    CustomPolicy,
)
from .walker import (
    GraphWalker,
    RecursiveGraphWalker,
    StackGraphWalker,
    create_walker,
)

__all__ = [
    "IdentitySet",
    "TypeClassifier",
    "FieldAccessor",
    "FieldDescriptor",
    "TraversalPolicy",
    "CycleDetectionPolicy",
    "DeepCollectionPolicy",
    "ReferenceCollectionPolicy",
    "CustomPolicy",
    "GraphWalker",
    "RecursiveGraphWalker",
    "StackGraphWalker",
    "create_walker",
]
