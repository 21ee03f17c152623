"""DazzleGraphLib - Universal Object Graph Introspection Library.

DazzleGraphLib walks arbitrary Python object graphs - dataclasses, slotted
classes, plain objects, lists, dicts and any mix of them - without knowing
their shape in advance. It tracks reference identity, not equality, so it
can tell a shared object from two equal ones and always terminates on
cyclic graphs.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dazzlegraphlib import contains_circular_references, get_deep_field_values

    contains_circular_references(order)
    get_deep_field_values(order, lambda field: not field.name.startswith('_'))
━━━━━━━━━━━━━━━━━━━━━━━━━━

For custom walks, combine a WalkPlan with a TraversalPolicy.
"""

__version__ = "0.1.0"

# Configuration
from ._common.config import (
    Classification,
    WalkStrategy,
    FieldKind,
    WalkConfig,
)

# Core components
from .core.identity import IdentitySet
from .core.classifier import TypeClassifier
from .core.fields import FieldAccessor, FieldDescriptor
from .core.policy import (
    TraversalPolicy,
    CycleDetectionPolicy,
    DeepCollectionPolicy,
    ReferenceCollectionPolicy,
    CustomPolicy,
)
from .core.walker import (
    GraphWalker,
    RecursiveGraphWalker,
    StackGraphWalker,
    create_walker,
)

# Planning and errors
from .planning import WalkPlan
from .errors import (
    DazzleGraphError,
    ConfigurationError,
    UnknownMemberError,
    FieldReadError,
)
from .error_policies import (
    ReadErrorPolicy,
    DegradeToNonePolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    FailFastPolicy,
)

# High-level API
from .api import (
    walk_graph,
    contains_circular_references,
    find_references,
    get_deep_field_values,
    get_fields,
    find_first_field,
    find_first_field_with_type,
    read_field,
    write_field,
    read_first,
    read_first_with_type,
    write_first_with_type,
    find_id,
    to_map,
    get_null_property_names,
    equals_method_is_overridden,
    unproxy,
)

__all__ = [
    '__version__',
    # Config
    'Classification',
    'WalkStrategy',
    'FieldKind',
    'WalkConfig',
    # Core
    'IdentitySet',
    'TypeClassifier',
    'FieldAccessor',
    'FieldDescriptor',
    'TraversalPolicy',
    'CycleDetectionPolicy',
    'DeepCollectionPolicy',
    'ReferenceCollectionPolicy',
    'CustomPolicy',
    'GraphWalker',
    'RecursiveGraphWalker',
    'StackGraphWalker',
    'create_walker',
    # Planning and errors
    'WalkPlan',
    'DazzleGraphError',
    'ConfigurationError',
    'UnknownMemberError',
    'FieldReadError',
    'ReadErrorPolicy',
    'DegradeToNonePolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'FailFastPolicy',
    # API
    'walk_graph',
    'contains_circular_references',
    'find_references',
    'get_deep_field_values',
    'get_fields',
    'find_first_field',
    'find_first_field_with_type',
    'read_field',
    'write_field',
    'read_first',
    'read_first_with_type',
    'write_first_with_type',
    'find_id',
    'to_map',
    'get_null_property_names',
    'equals_method_is_overridden',
    'unproxy',
]
