"""Tests for field discovery and privileged field access."""

import unittest
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional

from dazzlegraphlib import FieldAccessor, FieldDescriptor, FieldKind


class Animal:
    kingdom = 'animalia'          # static, undeclared
    legs: int                     # annotated, instance
    registry: ClassVar[Dict[str, int]] = {}

    def __init__(self, legs):
        self.legs = legs

    def speak(self):
        return '...'

    @property
    def loud(self):
        return self.speak().upper()


class Dog(Animal):
    name: str

    def __init__(self, name):
        super().__init__(4)
        self.name = name
        self.tricks = []          # undeclared instance attribute


class Puppy(Dog):
    age: int = 0


class SlottedBase:
    __slots__ = ('x',)


class SlottedChild(SlottedBase):
    __slots__ = ('y', '__secret')

    def __init__(self):
        self.x = 1
        self.y = 2
        self.__secret = 3


@dataclass
class Customer:
    name: str
    tags: List[str] = field(default_factory=list)
    manager: Optional['Customer'] = None


@dataclass(frozen=True)
class FrozenRecord:
    key: str
    value: int


class Guarded:
    """Hides everything behind __getattribute__ and __getattr__."""

    def __init__(self):
        self.token = 'abc'

    def __getattribute__(self, name):
        if name == 'token':
            raise PermissionError('token is private')
        return object.__getattribute__(self, name)

    def __getattr__(self, name):
        return 'fabricated'


def names(descriptors):
    return [(d.owner.__name__, d.name) for d in descriptors]


class TestFieldEnumeration(unittest.TestCase):
    """Tests for FieldAccessor.fields and declared_fields."""

    def setUp(self):
        self.accessor = FieldAccessor()

    def test_own_fields_come_before_ancestor_fields(self):
        result = names(self.accessor.fields(Puppy))

        self.assertEqual(result[0], ('Puppy', 'age'))
        self.assertLess(result.index(('Dog', 'name')), result.index(('Animal', 'legs')))

    def test_every_ancestor_contributes(self):
        owners = {d.owner for d in self.accessor.fields(Puppy)}
        self.assertEqual(owners, {Puppy, Dog, Animal})

    def test_methods_and_properties_are_not_fields(self):
        field_names = {d.name for d in self.accessor.fields(Animal)}

        self.assertNotIn('speak', field_names)
        self.assertNotIn('loud', field_names)
        self.assertNotIn('__init__', field_names)

    def test_static_fields(self):
        by_name = {d.name: d for d in self.accessor.declared_fields(Animal)}

        self.assertTrue(by_name['kingdom'].is_static)
        self.assertEqual(by_name['kingdom'].kind, FieldKind.CLASS_ATTRIBUTE)
        self.assertTrue(by_name['registry'].is_static)
        self.assertFalse(by_name['legs'].is_static)

    def test_slots_are_fields_of_their_declaring_class(self):
        result = names(self.accessor.fields(SlottedChild))

        self.assertIn(('SlottedChild', 'y'), result)
        self.assertIn(('SlottedChild', '_SlottedChild__secret'), result)
        self.assertIn(('SlottedBase', 'x'), result)

    def test_dataclass_fields_carry_annotations(self):
        descriptor = next(d for d in self.accessor.fields(Customer) if d.name == 'tags')

        self.assertEqual(descriptor.kind, FieldKind.ANNOTATED)
        self.assertIs(descriptor.declared_type, list)
        self.assertIs(descriptor.generic_type, str)

    def test_enumeration_is_lazy(self):
        iterator = self.accessor.fields(Puppy)
        first = next(iterator)
        self.assertIsInstance(first, FieldDescriptor)

    def test_descriptor_defaults(self):
        descriptor = FieldDescriptor(Animal, 'legs', FieldKind.INSTANCE)

        self.assertEqual(dict(descriptor.metadata), {})
        self.assertIsNone(descriptor.annotation)
        self.assertEqual(descriptor, FieldDescriptor(Animal, 'legs', FieldKind.INSTANCE))
        self.assertEqual(len({descriptor, FieldDescriptor(Animal, 'legs', FieldKind.INSTANCE)}), 1)

    def test_object_root_declares_nothing(self):
        self.assertEqual(list(self.accessor.fields(object)), [])


class TestInstanceFields(unittest.TestCase):
    """Tests for FieldAccessor.fields_of."""

    def setUp(self):
        self.accessor = FieldAccessor()

    def test_undeclared_attributes_follow_declared_fields(self):
        result = [d.name for d in self.accessor.instance_fields(Dog('rex'))]

        self.assertEqual(result[-1], 'tricks')
        self.assertIn('name', result)
        self.assertIn('legs', result)

    def test_dict_backed_names_reported_once(self):
        class Base:
            value: int

        class Derived(Base):
            value: int

        obj = Derived()
        obj.value = 1
        result = [d for d in self.accessor.fields_of(obj) if d.name == 'value']

        self.assertEqual(len(result), 1)
        self.assertIs(result[0].owner, Derived)

    def test_undeclared_attributes_can_be_disabled(self):
        accessor = FieldAccessor(include_undeclared_attributes=False)
        result = [d.name for d in accessor.instance_fields(Dog('rex'))]
        self.assertNotIn('tricks', result)

    def test_static_fields_are_not_filtered_by_fields_of(self):
        static = [d.name for d in self.accessor.fields_of(Dog('rex')) if d.is_static]
        self.assertIn('kingdom', static)


class TestFieldAccess(unittest.TestCase):
    """Tests for privileged read and write."""

    def setUp(self):
        self.accessor = FieldAccessor()

    def _descriptor(self, obj, name):
        return next(d for d in self.accessor.fields_of(obj) if d.name == name)

    def test_read_instance_and_static_fields(self):
        dog = Dog('rex')

        self.assertEqual(self.accessor.read(dog, self._descriptor(dog, 'name')), 'rex')
        self.assertEqual(self.accessor.read(dog, self._descriptor(dog, 'kingdom')), 'animalia')

    def test_read_slots_including_mangled_names(self):
        obj = SlottedChild()

        self.assertEqual(self.accessor.read(obj, self._descriptor(obj, 'x')), 1)
        self.assertEqual(self.accessor.read(obj, self._descriptor(obj, '_SlottedChild__secret')), 3)

    def test_unset_fields_read_as_none(self):
        unset_slot = SlottedBase()
        unset_annotation = Animal.__new__(Animal)

        self.assertIsNone(self.accessor.read(unset_slot, self._descriptor(unset_slot, 'x')))
        self.assertIsNone(self.accessor.read(unset_annotation, self._descriptor(unset_annotation, 'legs')))

    def test_annotated_default_falls_back_to_class_value(self):
        puppy = Puppy('bit')
        self.assertEqual(self.accessor.read(puppy, self._descriptor(puppy, 'age')), 0)

    def test_read_bypasses_getattribute_and_getattr(self):
        obj = Guarded()
        descriptor = self._descriptor(obj, 'token')

        self.assertEqual(self.accessor.read(obj, descriptor), 'abc')

    def test_write_frozen_dataclass(self):
        record = FrozenRecord('k', 1)
        self.accessor.write(record, self._descriptor(record, 'value'), 2)
        self.assertEqual(record.value, 2)

    def test_write_slot(self):
        obj = SlottedChild()
        self.accessor.write(obj, self._descriptor(obj, 'y'), 20)
        self.assertEqual(obj.y, 20)


class TestLookupHelpers(unittest.TestCase):

    def setUp(self):
        self.accessor = FieldAccessor()

    def test_find_first(self):
        descriptor = self.accessor.find_first(Puppy, lambda d: d.name == 'legs')
        self.assertIs(descriptor.owner, Animal)

    def test_find_first_missing(self):
        self.assertIsNone(self.accessor.find_first(Puppy, lambda d: d.name == 'wings'))

    def test_find_first_with_type(self):
        descriptor = self.accessor.find_first_with_type(Dog, str)
        self.assertEqual(descriptor.name, 'name')

    def test_read_first(self):
        dog = Dog('rex')
        self.assertEqual(self.accessor.read_first(dog, lambda d: d.name == 'legs'), 4)

    def test_read_first_with_wrong_value_type(self):
        dog = Dog('rex')
        with self.assertRaises(TypeError):
            self.accessor.read_first(dog, lambda d: d.name == 'legs', str)

    def test_read_first_with_type(self):
        self.assertEqual(self.accessor.read_first_with_type(Dog('rex'), str), 'rex')

    def test_write_first_with_type(self):
        dog = Dog('rex')

        self.assertTrue(self.accessor.write_first_with_type(dog, 'fido'))
        self.assertEqual(dog.name, 'fido')
        self.assertFalse(self.accessor.write_first_with_type(dog, 2.5))


if __name__ == '__main__':
    unittest.main()
