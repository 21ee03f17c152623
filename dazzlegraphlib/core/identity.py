"""Identity-keyed set for DazzleGraphLib.

Python's built-in ``set`` compares members with ``__eq__``/``__hash__``, which
is exactly wrong for graph bookkeeping: two equal lists are different nodes,
and most interesting objects are not hashable at all. IdentitySet compares
members by ``id()`` only.
"""

from collections.abc import MutableSet
from typing import Any, Dict, Iterable, Iterator, Optional


class IdentitySet(MutableSet):
    """A mutable set whose membership test is reference identity.

    Members are held by strong reference. While an object is a member its
    ``id()`` cannot be recycled for another object, so a walk that creates
    temporaries (e.g. through computed attributes) never sees a false hit.

    Equality between two IdentitySets is identity-based as well: they are
    equal when they contain exactly the same objects.
    """

    __slots__ = ('_members',)

    def __init__(self, iterable: Optional[Iterable[Any]] = None):
        self._members: Dict[int, Any] = {}
        if iterable is not None:
            for item in iterable:
                self.add(item)

    def __contains__(self, item: Any) -> bool:
        return id(item) in self._members

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)

    def add(self, item: Any) -> None:
        self._members[id(item)] = item

    def discard(self, item: Any) -> None:
        self._members.pop(id(item), None)

    def insert(self, item: Any) -> bool:
        """Add ``item`` and report whether it was absent.

        This is the single operation the walker needs: test-and-insert in
        one step.

        Returns:
            True if the item was newly inserted, False if already present
        """
        key = id(item)
        if key in self._members:
            return False
        self._members[key] = item
        return True

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> 'IdentitySet':
        return cls(it)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._members.values())!r})"
