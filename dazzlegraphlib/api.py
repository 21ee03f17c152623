"""High-level API for DazzleGraphLib.

This module provides simple, functional interfaces for common object-graph
operations. These functions wrap the object-oriented API (WalkPlan, policies,
FieldAccessor) for ease of use in simple cases.

Every walk function accepts either ``config=WalkConfig(...)`` or the config
fields as keyword arguments, e.g. ``strategy="explicit_stack"``.
"""

import inspect
from dataclasses import fields
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar, Union

from ._common.config import WalkConfig, WalkStrategy
from .core.fields import FieldAccessor, FieldDescriptor
from .core.identity import IdentitySet
from .core.policy import (
    CycleDetectionPolicy,
    DeepCollectionPolicy,
    ReferenceCollectionPolicy,
    TraversalPolicy,
)
from .errors import UnknownMemberError
from .planning import WalkPlan

T = TypeVar('T')


def walk_graph(root: Any,
               policy: TraversalPolicy,
               config: Optional[WalkConfig] = None,
               **kwargs) -> Any:
    """Walk the graph under ``root`` with any policy.

    Args:
        root: Starting value
        policy: TraversalPolicy deciding what the walk computes
        config: Walk configuration
        **kwargs: WalkConfig fields, used when ``config`` is not given

    Returns:
        ``policy.result()``
    """
    plan = WalkPlan(_resolve_config(config, kwargs))
    return plan.execute(root, policy)


def contains_circular_references(obj: Any,
                                 config: Optional[WalkConfig] = None,
                                 **kwargs) -> bool:
    """Check whether any non-leaf reference is reachable twice.

    Identity, not equality, decides: two equal but separate lists are two
    references, the same list reached twice is a repeat. Leaves (strings,
    numbers, enum members, ...) never count.

    Args:
        obj: Root of the graph (None gives False)
        config: Walk configuration
        **kwargs: WalkConfig fields

    Returns:
        True if some reference was reached more than once

    Example:
        >>> node = Node()
        >>> node.next = node
        >>> contains_circular_references(node)
        True
    """
    return walk_graph(obj, CycleDetectionPolicy(), config, **kwargs)


def find_references(obj: Any,
                    config: Optional[WalkConfig] = None,
                    **kwargs) -> IdentitySet:
    """Collect every distinct non-leaf reference reachable from ``obj``.

    The root itself is included when it is not a leaf.

    Returns:
        IdentitySet of composites, sequences and mappings
    """
    return walk_graph(obj, ReferenceCollectionPolicy(), config, **kwargs)


def get_deep_field_values(obj: Any,
                          field_predicate: Optional[Callable[[FieldDescriptor], bool]] = None,
                          config: Optional[WalkConfig] = None,
                          **kwargs) -> IdentitySet:
    """Collect values reachable through fields matching a predicate.

    The predicate is applied to every composite's fields along the way.
    Containers held by an accepted field are expanded into their elements.
    The walk terminates on cyclic graphs.

    Args:
        obj: Root object
        field_predicate: Function(FieldDescriptor) -> bool (default: all)
        config: Walk configuration
        **kwargs: WalkConfig fields

    Returns:
        IdentitySet of the collected values

    Example:
        >>> values = get_deep_field_values(order, lambda f: f.name != 'audit')
        >>> customer in values
        True
    """
    return walk_graph(obj, DeepCollectionPolicy(field_predicate), config, **kwargs)


# Field helpers

def get_fields(cls: type) -> Iterator[FieldDescriptor]:
    """Iterate over the fields of ``cls`` and all of its ancestors."""
    return FieldAccessor().fields(cls)


def find_first_field(cls: type,
                     predicate: Callable[[FieldDescriptor], bool]) -> Optional[FieldDescriptor]:
    """Return the first field of ``cls`` matching ``predicate``."""
    return FieldAccessor().find_first(cls, predicate)


def find_first_field_with_type(cls: type, field_type: type) -> Optional[FieldDescriptor]:
    """Return the first field of ``cls`` declared as ``field_type``."""
    return FieldAccessor().find_first_with_type(cls, field_type)


def read_field(obj: Any, descriptor: FieldDescriptor) -> Any:
    """Read one field, bypassing attribute-access overrides."""
    return FieldAccessor().read(obj, descriptor)


def write_field(obj: Any, descriptor: FieldDescriptor, value: Any) -> None:
    """Write one field, bypassing ``__setattr__`` overrides."""
    FieldAccessor().write(obj, descriptor, value)


def read_first(obj: Any,
               predicate: Callable[[FieldDescriptor], bool],
               value_type: Optional[type] = None) -> Any:
    """Read the first field of ``obj`` matching ``predicate``."""
    return FieldAccessor().read_first(obj, predicate, value_type)


def read_first_with_type(obj: Any, value_type: type) -> Any:
    """Read the first field of ``obj`` declared as ``value_type``."""
    return FieldAccessor().read_first_with_type(obj, value_type)


def write_first_with_type(obj: Any, value: Any) -> bool:
    """Write ``value`` into the first field declared with its type."""
    return FieldAccessor().write_first_with_type(obj, value)


# Object helpers

def find_id(entity: Any, id_type: Optional[type] = None) -> Any:
    """Read an entity's identifier.

    The identifier is the first instance field named ``id`` (any case),
    or marked with ``field(metadata={"id": True})`` on a dataclass.
    Ancestors are searched too.

    Args:
        entity: Object to read from
        id_type: If given, the identifier must be an instance of it

    Returns:
        The identifier, or None if the entity has none
    """
    return FieldAccessor().read_first(entity, _is_identifier, id_type)


def to_map(obj: Any) -> Dict[str, Any]:
    """Map each instance field name of ``obj`` to its value.

    When a slot name is declared at several levels, the nearest wins.
    """
    accessor = FieldAccessor()
    values: Dict[str, Any] = {}
    for descriptor in accessor.instance_fields(obj):
        if descriptor.name not in values:
            values[descriptor.name] = accessor.read(obj, descriptor)
    return values


def get_null_property_names(obj: Any) -> List[str]:
    """Names of the instance fields of ``obj`` whose value is None."""
    return [name for name, value in to_map(obj).items() if value is None]


def equals_method_is_overridden(obj: Any) -> bool:
    """Check whether ``obj`` compares by something other than identity.

    Returns:
        True if ``__eq__`` resolves to a class other than ``object``

    Raises:
        UnknownMemberError: If no ``__eq__`` can be resolved on the type
    """
    cls = type(obj)
    for klass in inspect.getmro(cls):
        if '__eq__' in vars(klass):
            return klass is not object
    raise UnknownMemberError(cls, '__eq__')


def unproxy(obj: T) -> T:
    """Return the object behind a proxy.

    No proxy mechanism is recognised yet, so this is the identity function.
    """
    return obj


# Helper functions

def _is_identifier(descriptor: FieldDescriptor) -> bool:
    if descriptor.is_static:
        return False
    return descriptor.name.lower() == 'id' or descriptor.metadata.get('id') is True


def _resolve_config(config: Optional[WalkConfig], kwargs: Dict[str, Any]) -> WalkConfig:
    if config is not None:
        if kwargs:
            raise TypeError("Pass either config or keyword options, not both")
        return config
    return _build_config_from_kwargs(**kwargs)


def _parse_strategy(strategy: Union[WalkStrategy, str]) -> WalkStrategy:
    """Parse strategy from string or enum.

    Args:
        strategy: Strategy as enum or string

    Returns:
        WalkStrategy enum value
    """
    if isinstance(strategy, WalkStrategy):
        return strategy

    strategy_map = {
        'recursive': WalkStrategy.RECURSIVE,
        'dfs': WalkStrategy.RECURSIVE,
        'explicit_stack': WalkStrategy.EXPLICIT_STACK,
        'stack': WalkStrategy.EXPLICIT_STACK,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise ValueError(f"Unknown walk strategy: {strategy}")


def _build_config_from_kwargs(**kwargs) -> WalkConfig:
    """Build WalkConfig from keyword arguments.

    Args:
        **kwargs: Configuration options

    Returns:
        WalkConfig instance

    Raises:
        TypeError: For options WalkConfig does not have
    """
    config = WalkConfig()

    if 'strategy' in kwargs:
        config.strategy = _parse_strategy(kwargs.pop('strategy'))

    for name in ('leaf_types', 'composite_types'):
        if name in kwargs:
            setattr(config, name, tuple(kwargs.pop(name)))

    if 'leaf_modules' in kwargs:
        config.leaf_modules = frozenset(kwargs.pop('leaf_modules'))

    known = {f.name for f in fields(WalkConfig)}
    for key, value in kwargs.items():
        if key not in known:
            raise TypeError(f"Unknown walk option: {key}")
        setattr(config, key, value)

    return config
