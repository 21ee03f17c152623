"""Field discovery and privileged access for DazzleGraphLib.

Python has no declared-field table the way statically typed languages do.
A class "declares" a field in one of three ways:

- a class-level annotation (``name: int``, dataclass fields included);
  ``ClassVar[...]`` annotations declare static fields
- an entry in ``__slots__``
- a plain assignment in the class body, which is a static (class) field

On top of that, instances carry whatever was assigned in ``__init__`` in
their ``__dict__``. The FieldAccessor reports declared fields per class along
the MRO, then the undeclared instance attributes, and reads any of them
without going through ``__getattribute__``/``__getattr__`` overrides.
"""

import inspect
import types
import typing
from dataclasses import dataclass, field as dc_field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Set, Tuple

from .._common.config import FieldKind

_EMPTY_METADATA: Mapping[str, Any] = MappingProxyType({})

# Attributes that live in every instance's namespace machinery, not fields
_SLOT_INTERNALS = frozenset({'__dict__', '__weakref__'})

_NOT_FIELDS = (
    property, classmethod, staticmethod,
    types.MemberDescriptorType, types.GetSetDescriptorType,
    types.WrapperDescriptorType, types.MethodDescriptorType,
)

# Sentinel for "attribute not set at all"
_UNSET = object()


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata for one field of one class.

    Descriptors compare by value, so the same field discovered twice is
    equal to itself. The owner is the class that declared the field.
    """

    owner: type
    name: str
    kind: FieldKind
    annotation: Any = dc_field(default=None, compare=False)
    # mappingproxy is unhashable, so 3.11 refuses it as a plain default
    metadata: Mapping[str, Any] = dc_field(default_factory=lambda: _EMPTY_METADATA,
                                           compare=False)

    @property
    def is_static(self) -> bool:
        """True for class-level fields shared by every instance."""
        if self.kind is FieldKind.CLASS_ATTRIBUTE:
            return True
        return _is_classvar(self.annotation)

    @property
    def generic_type(self) -> Optional[type]:
        """First type argument of the annotation, if any.

        ``List[Order]`` gives ``Order``; ``Dict[str, int]`` gives ``str``.
        """
        args = typing.get_args(self.annotation)
        if not args:
            return None
        first = args[0]
        return typing.get_origin(first) or first

    @property
    def declared_type(self) -> Optional[type]:
        """The annotation's runtime class, stripped of type arguments."""
        if self.annotation is None or isinstance(self.annotation, str):
            return None
        origin = typing.get_origin(self.annotation)
        if origin is not None:
            return origin if isinstance(origin, type) else None
        return self.annotation if isinstance(self.annotation, type) else None

    def __repr__(self) -> str:
        return f"FieldDescriptor({self.owner.__qualname__}.{self.name}, {self.kind.value})"


class FieldAccessor:
    """Enumerates fields across a class's ancestor chain and reads them.

    Args:
        read_error_policy: ReadErrorPolicy deciding what an unreadable
            field becomes (default: DegradeToNonePolicy)
        include_undeclared_attributes: Report instance ``__dict__`` entries
            that no class declares
    """

    def __init__(self, read_error_policy=None, include_undeclared_attributes: bool = True):
        if read_error_policy is None:
            from ..error_policies import DegradeToNonePolicy
            read_error_policy = DegradeToNonePolicy()
        self.read_error_policy = read_error_policy
        self.include_undeclared_attributes = include_undeclared_attributes

    # Enumeration

    def fields(self, cls: type) -> Iterator[FieldDescriptor]:
        """Lazily yield every field declared by ``cls`` and its ancestors.

        Own fields come first, then each ancestor from nearest to farthest,
        ending with ``object``. The same name declared at two levels is
        reported at both levels.

        Args:
            cls: The class to inspect

        Yields:
            FieldDescriptor instances
        """
        for klass in inspect.getmro(cls):
            yield from self.declared_fields(klass)

    def declared_fields(self, klass: type) -> Iterator[FieldDescriptor]:
        """Yield only the fields ``klass`` itself declares."""
        namespace = vars(klass)
        annotations = _own_annotations(klass)
        slots = _own_slots(klass)
        metadata = _dataclass_metadata(klass)

        for name, annotation in annotations.items():
            kind = FieldKind.SLOT if name in slots else FieldKind.ANNOTATED
            yield FieldDescriptor(klass, name, kind, annotation,
                                  metadata.get(name, _EMPTY_METADATA))

        for name in slots:
            if name not in annotations:
                yield FieldDescriptor(klass, name, FieldKind.SLOT)

        for name, value in namespace.items():
            if name in annotations or name in slots:
                continue
            if _is_dunder(name) or not _is_data_attribute(value):
                continue
            yield FieldDescriptor(klass, name, FieldKind.CLASS_ATTRIBUTE)

    def fields_of(self, obj: Any) -> Iterator[FieldDescriptor]:
        """Yield the fields relevant to one instance.

        These are the fields of ``type(obj)``, followed by attributes that
        only exist in the instance ``__dict__``. Dict-backed fields with the
        same name share one storage cell, so only the nearest declaration
        is reported. Slots are per-class storage and are all reported.

        Args:
            obj: The instance to inspect

        Yields:
            FieldDescriptor instances
        """
        cls = type(obj)
        seen: Set[str] = set()
        for descriptor in self.fields(cls):
            if descriptor.kind is FieldKind.SLOT or descriptor.is_static:
                yield descriptor
                continue
            if descriptor.name in seen:
                continue
            seen.add(descriptor.name)
            yield descriptor

        if not self.include_undeclared_attributes:
            return
        instance_dict = _instance_dict(obj)
        if instance_dict is None:
            return
        for name in list(instance_dict):
            if isinstance(name, str) and name not in seen:
                seen.add(name)
                yield FieldDescriptor(cls, name, FieldKind.INSTANCE)

    def instance_fields(self, obj: Any) -> Iterator[FieldDescriptor]:
        """Like fields_of, without static fields."""
        return (d for d in self.fields_of(obj) if not d.is_static)

    # Access

    def read(self, obj: Any, descriptor: FieldDescriptor) -> Any:
        """Read a field, bypassing attribute-access overrides.

        An attribute that was declared but never set reads as ``None``.
        Any other failure is handed to the read error policy.

        Args:
            obj: The instance (ignored for static fields)
            descriptor: The field to read

        Returns:
            The field value, or ``None``
        """
        try:
            value = self._raw_read(obj, descriptor)
        except Exception as e:
            return self.read_error_policy.handle(e, obj, descriptor)
        return None if value is _UNSET else value

    def write(self, obj: Any, descriptor: FieldDescriptor, value: Any) -> None:
        """Write a field, bypassing ``__setattr__`` overrides.

        Works on frozen dataclasses and slotted classes alike.

        Args:
            obj: The instance (ignored for static fields)
            descriptor: The field to write
            value: New value
        """
        if descriptor.is_static:
            type.__setattr__(descriptor.owner, descriptor.name, value)
        elif descriptor.kind is FieldKind.SLOT:
            vars(descriptor.owner)[descriptor.name].__set__(obj, value)
        else:
            object.__setattr__(obj, descriptor.name, value)

    # Lookup helpers

    def find_first(self, cls: type,
                   predicate: Callable[[FieldDescriptor], bool]) -> Optional[FieldDescriptor]:
        """Return the first field of ``cls`` matching ``predicate``, or None."""
        return next((d for d in self.fields(cls) if predicate(d)), None)

    def find_first_with_type(self, cls: type, field_type: type) -> Optional[FieldDescriptor]:
        """Return the first field whose declared type is exactly ``field_type``."""
        return self.find_first(cls, lambda d: d.declared_type is field_type)

    def read_first(self, obj: Any,
                   predicate: Callable[[FieldDescriptor], bool],
                   value_type: Optional[type] = None) -> Any:
        """Read the first field of ``obj`` matching ``predicate``.

        Args:
            obj: Instance to read from
            predicate: Field filter
            value_type: If given, the value must be an instance of it

        Returns:
            The value, or None when no field matches

        Raises:
            TypeError: If the value is not a ``value_type``
        """
        descriptor = next((d for d in self.fields_of(obj) if predicate(d)), None)
        if descriptor is None:
            return None
        return _checked(self.read(obj, descriptor), value_type, descriptor)

    def read_first_with_type(self, obj: Any, value_type: type) -> Any:
        """Read the first field declared with type ``value_type``."""
        descriptor = self.find_first_with_type(type(obj), value_type)
        if descriptor is None:
            return None
        return _checked(self.read(obj, descriptor), value_type, descriptor)

    def write_first_with_type(self, obj: Any, value: Any) -> bool:
        """Write ``value`` into the first field declared with its type.

        Returns:
            True if a matching field was found and written
        """
        descriptor = self.find_first_with_type(type(obj), type(value))
        if descriptor is None:
            return False
        self.write(obj, descriptor, value)
        return True

    def _raw_read(self, obj: Any, descriptor: FieldDescriptor) -> Any:
        name = descriptor.name
        if descriptor.is_static:
            return vars(descriptor.owner).get(name, _UNSET)

        if descriptor.kind is FieldKind.SLOT:
            member = vars(descriptor.owner).get(name)
            if member is None:
                return _UNSET
            try:
                return member.__get__(obj, type(obj))
            except AttributeError:
                return _UNSET

        instance_dict = _instance_dict(obj)
        if instance_dict is not None and name in instance_dict:
            return instance_dict[name]
        try:
            return object.__getattribute__(obj, name)
        except AttributeError:
            return _UNSET


def _checked(value: Any, value_type: Optional[type], descriptor: FieldDescriptor) -> Any:
    if value is None or value_type is None or isinstance(value, value_type):
        return value
    raise TypeError(
        f"{descriptor.owner.__qualname__}.{descriptor.name} holds "
        f"{type(value).__qualname__}, not {value_type.__qualname__}"
    )


def _instance_dict(obj: Any) -> Optional[Dict[str, Any]]:
    try:
        namespace = object.__getattribute__(obj, '__dict__')
    except (AttributeError, TypeError):
        return None
    return namespace if isinstance(namespace, dict) else None


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # Unresolvable forward reference; instance attributes are still
        # reported through the instance __dict__
        return {}


def _own_slots(klass: type) -> Tuple[str, ...]:
    slots = vars(klass).get('__slots__', ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(_mangle(klass, name) for name in slots if name not in _SLOT_INTERNALS)


def _mangle(klass: type, name: str) -> str:
    if name.startswith('__') and not name.endswith('__'):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name


def _dataclass_metadata(klass: type) -> Dict[str, Mapping[str, Any]]:
    dc_fields = vars(klass).get('__dataclass_fields__')
    if not dc_fields:
        return {}
    return {name: f.metadata for name, f in dc_fields.items()}


def _is_dunder(name: str) -> bool:
    return name.startswith('__') and name.endswith('__')


def _is_data_attribute(value: Any) -> bool:
    if isinstance(value, _NOT_FIELDS) or isinstance(value, type):
        return False
    return not inspect.isroutine(value)


def _is_classvar(annotation: Any) -> bool:
    if annotation is None:
        return False
    if isinstance(annotation, str):
        # String annotations under ``from __future__ import annotations``
        return annotation.startswith(('ClassVar', 'typing.ClassVar'))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar
