"""Value classification for DazzleGraphLib.

The TypeClassifier decides, for any runtime value, whether the walker should
stop (LEAF), iterate elements (SEQUENCE), iterate keys and values (MAPPING),
or descend through fields (COMPOSITE). It knows nothing about the shape of
user types in advance; everything is decided from the value's type.
"""

import enum
import numbers
import os
import sys
import sysconfig
from collections.abc import Collection, Mapping
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .._common.config import Classification

# Immutable atomic values. Enum members and classes are process-wide
# singletons and must never register as revisits.
ATOMIC_TYPES: Tuple[type, ...] = (
    str, bytes, bytearray, memoryview,
    bool, int, float, complex,
    Decimal, Fraction, range,
    enum.Enum, type,
)

# Immutable containers that collapse to LEAF when they hold only leaves.
# CPython shares such values (the empty tuple, folded tuple constants),
# so tracking them would report cycles that are not there.
FROZEN_CONTAINERS: Tuple[type, ...] = (tuple, frozenset)


def _stdlib_dirs() -> Tuple[str, ...]:
    paths = sysconfig.get_paths()
    return tuple({os.path.normcase(os.path.abspath(paths[key]))
                  for key in ('stdlib', 'platstdlib') if paths.get(key)})


def _site_dirs() -> Tuple[str, ...]:
    paths = sysconfig.get_paths()
    return tuple({os.path.normcase(os.path.abspath(paths[key]))
                  for key in ('purelib', 'platlib') if paths.get(key)})


STDLIB_DIRS = _stdlib_dirs()
SITE_DIRS = _site_dirs()

# Module name -> lives in the interpreter or its standard library
_platform_modules: Dict[str, bool] = {'builtins': True}


def is_platform_module(name: str) -> bool:
    """Check whether a loaded module ships with the interpreter.

    The decision is made from where the module was loaded, never from its
    name, so a user package called ``json`` or ``calendar`` is not mistaken
    for the standard library. Modules that are not loaded are not platform
    modules.
    """
    known = _platform_modules.get(name)
    if known is not None:
        return known

    module = sys.modules.get(name)
    if module is None:
        return False

    spec = getattr(module, '__spec__', None)
    origin = getattr(spec, 'origin', None) or getattr(module, '__file__', None)
    if origin in ('built-in', 'frozen'):
        result = True
    elif not isinstance(origin, str):
        result = False
    else:
        result = _in_stdlib(origin)

    _platform_modules[name] = result
    return result


def _in_stdlib(path: str) -> bool:
    path = os.path.normcase(os.path.abspath(path))
    # site-packages may sit inside the stdlib directory
    if any(_is_within(path, site) for site in SITE_DIRS):
        return False
    return any(_is_within(path, stdlib) for stdlib in STDLIB_DIRS)


def _is_within(path: str, directory: str) -> bool:
    return path == directory or path.startswith(directory + os.sep)


class TypeClassifier:
    """Classifies runtime values into LEAF, SEQUENCE, MAPPING or COMPOSITE.

    Classification is total: every non-None value maps to exactly one
    class, and anything unrecognised is COMPOSITE.

    Args:
        leaf_types: Extra types to treat as terminal
        leaf_modules: Extra top-level module names whose types are terminal
        composite_types: Types always walked through their fields, even if
            another rule would call them a leaf
        platform_types_are_leaves: Treat builtins and standard-library types
            that are not containers as terminal
    """

    def __init__(self,
                 leaf_types: Iterable[type] = (),
                 leaf_modules: Iterable[str] = (),
                 composite_types: Iterable[type] = (),
                 platform_types_are_leaves: bool = True):
        self.leaf_types = ATOMIC_TYPES + tuple(leaf_types)
        self.composite_types = tuple(composite_types)
        self.platform_types_are_leaves = platform_types_are_leaves
        self.leaf_modules = frozenset(leaf_modules)

    def classify(self, value: Any) -> Classification:
        """Classify a non-None value.

        Args:
            value: Any runtime value

        Returns:
            The value's Classification
        """
        # Decide from type(value) only: isinstance() may consult a spoofed
        # or hostile __class__ attribute.
        cls = type(value)

        if self._is_forced_composite(cls):
            return Classification.COMPOSITE

        if self._is_atomic(cls):
            return Classification.LEAF

        if issubclass(cls, FROZEN_CONTAINERS) and self._all_leaves(value):
            return Classification.LEAF

        return self._classify_shape(cls)

    def is_leaf(self, value: Any) -> bool:
        """Check if a value is terminal. None counts as terminal."""
        return value is None or self.classify(value) is Classification.LEAF

    def _is_forced_composite(self, cls: type) -> bool:
        return bool(self.composite_types) and issubclass(cls, self.composite_types)

    def _is_atomic(self, cls: type) -> bool:
        return issubclass(cls, self.leaf_types) or issubclass(cls, numbers.Number)

    def _classify_shape(self, cls: type) -> Classification:
        if issubclass(cls, Mapping):
            return Classification.MAPPING
        if issubclass(cls, Collection):
            return Classification.SEQUENCE
        if self._is_platform_type(cls):
            return Classification.LEAF
        return Classification.COMPOSITE

    def _all_leaves(self, container: Iterable[Any]) -> bool:
        """Check a frozen container and every frozen container nested in it.

        Nested containers go on a work list instead of the call stack, and
        each one is scanned once even when it is shared.
        """
        pending: List[Iterable[Any]] = [container]
        scanned = {id(container)}
        while pending:
            for item in pending.pop():
                if item is None:
                    continue
                cls = type(item)
                if self._is_forced_composite(cls):
                    return False
                if self._is_atomic(cls):
                    continue
                if issubclass(cls, FROZEN_CONTAINERS):
                    if id(item) not in scanned:
                        scanned.add(id(item))
                        pending.append(item)
                    continue
                if self._classify_shape(cls) is not Classification.LEAF:
                    return False
        return True

    def _is_platform_type(self, cls: type) -> bool:
        module: Optional[str] = getattr(cls, '__module__', None)
        if not isinstance(module, str) or not module:
            return False
        if module.partition('.')[0] in self.leaf_modules:
            return True
        return self.platform_types_are_leaves and is_platform_module(module)
