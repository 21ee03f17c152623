"""Tests for contains_circular_references."""

import enum
import sys
import types
from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from dazzlegraphlib import WalkConfig, contains_circular_references


class Digit(enum.Enum):
    ONE = 1
    TWO = 2


@dataclass(eq=False)
class Person:
    name: str
    friends: List['Person'] = field(default_factory=list)
    spouse: Optional['Person'] = None


class Slotted:
    __slots__ = ('a', 'b')

    def __init__(self, a=None, b=None):
        self.a = a
        self.b = b


class Holder:
    def __init__(self, *values):
        self.values = values


class Touchy:
    """Fails loudly if the walk ever compares or hashes it."""

    def __init__(self, payload):
        self.payload = payload

    def __eq__(self, other):
        raise AssertionError('compared')

    def __hash__(self):
        raise AssertionError('hashed')


STRATEGIES = ['recursive', 'explicit_stack']


@pytest.fixture(params=STRATEGIES)
def check(request):
    def run(obj):
        return contains_circular_references(obj, strategy=request.param)
    return run


class TestCyclesFound:

    def test_self_reference(self, check):
        alice = Person('alice')
        alice.spouse = alice
        assert check(alice) is True

    def test_two_node_cycle(self, check):
        alice, bob = Person('alice'), Person('bob')
        alice.spouse = bob
        bob.spouse = alice
        assert check(alice) is True

    def test_cycle_through_a_list(self, check):
        alice, bob = Person('alice'), Person('bob')
        alice.friends.append(bob)
        bob.friends.append(alice)
        assert check(alice) is True

    def test_shared_reference_counts(self, check):
        # Not a loop, but the same object is reachable twice
        shared = Person('carol')
        family = [shared, shared]
        assert check(family) is True

    def test_self_containing_dict(self, check):
        registry = {}
        registry['self'] = registry
        assert check(registry) is True

    def test_cycle_through_slots(self, check):
        first = Slotted()
        second = Slotted(a=first)
        first.b = second
        assert check(first) is True

    def test_cycle_below_the_root(self, check):
        inner = Person('inner')
        inner.friends.append(inner)
        assert check([1, 'x', inner]) is True


class TestNoCycles:

    def test_none(self, check):
        assert check(None) is False

    def test_leaf_root(self, check):
        assert check('text') is False
        assert check(42) is False

    def test_acyclic_graph(self, check):
        alice = Person('alice', friends=[Person('bob'), Person('carol')])
        assert check(alice) is False

    def test_equal_but_distinct_values(self, check):
        assert check([[1], [1]]) is False
        assert check([Person('dave'), Person('dave')]) is False

    def test_repeated_enum_members(self, check):
        assert check(Holder(Digit.ONE, Digit.TWO, Digit.ONE)) is False

    def test_repeated_strings_and_numbers(self, check):
        word = 'repeated'
        assert check([word, word, 7, 7, True, True]) is False

    def test_shared_immutable_constants(self, check):
        # CPython shares equal tuple constants between both holders
        assert check([Holder((1, 2)), Holder((1, 2)), ()]) is False

    def test_type_references_are_not_cycles(self, check):
        assert check([Person, Person, int]) is False

    def test_equality_and_hashing_are_never_used(self, check):
        assert check([Touchy(1), Touchy(1)]) is False


class TestWalkProperties:

    def test_deterministic(self):
        alice = Person('alice')
        alice.spouse = Person('bob', spouse=alice)
        results = {contains_circular_references(alice) for _ in range(3)}
        assert results == {True}

    def test_graph_is_not_mutated(self):
        bob = Person('bob')
        alice = Person('alice', friends=[bob])
        before = dict(vars(alice)), list(alice.friends)

        contains_circular_references(alice)

        assert (dict(vars(alice)), list(alice.friends)) == before

    def test_accepts_config(self):
        node = Slotted()
        node.a = node
        assert contains_circular_references(node, WalkConfig.deep_graph()) is True

    def test_config_and_keywords_are_exclusive(self):
        with pytest.raises(TypeError):
            contains_circular_references([], WalkConfig(), strategy='stack')

    def test_user_module_named_like_stdlib(self):
        module = types.ModuleType('json.models')
        exec('class Box:\n    def __init__(self):\n        self.me = self\n', module.__dict__)

        assert contains_circular_references(module.Box()) is True


@pytest.mark.slow
class TestDeepTuples:

    def test_tuple_chain_deeper_than_recursion_limit(self):
        tail = []
        chain = (tail,)
        for _ in range(sys.getrecursionlimit() * 2):
            chain = (0, chain)

        assert contains_circular_references(chain, WalkConfig.deep_graph()) is False
        assert contains_circular_references([chain, tail], WalkConfig.deep_graph()) is True
