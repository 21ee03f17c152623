"""Object-graph walkers for DazzleGraphLib.

Walkers implement the descent through an arbitrary object graph. They work
with any TraversalPolicy, and learn the graph's shape from a TypeClassifier
and a FieldAccessor rather than from a fixed schema.

Every non-leaf reference enters the visited set at most once per walk. A
second encounter fires ``on_revisit`` and the walker does not descend
through that reference again, which is what makes cyclic graphs finite.
"""

from abc import ABC, abstractmethod
from itertools import chain
from typing import Any, Iterator, List, Optional, Tuple, Union

from .._common.config import Classification, WalkStrategy
from .classifier import TypeClassifier
from .fields import FieldAccessor
from .identity import IdentitySet
from .policy import TraversalPolicy

_DONE = object()


class GraphWalker(ABC):
    """Abstract base class for graph walk strategies.

    Walkers are independent of what the walk is for; that is decided by
    the TraversalPolicy passed to ``walk``.
    """

    def __init__(self, classifier: TypeClassifier, accessor: FieldAccessor):
        """Initialize walker with its introspection capabilities.

        Args:
            classifier: Decides whether and how to descend into a value
            accessor: Enumerates and reads composite fields
        """
        self.classifier = classifier
        self.accessor = accessor

    @abstractmethod
    def walk(self,
             root: Any,
             policy: TraversalPolicy,
             visited: Optional[IdentitySet] = None) -> IdentitySet:
        """Walk the graph reachable from root.

        Args:
            root: Starting value (None is a no-op)
            policy: Hooks deciding what the walk does
            visited: Visited set to use (default: a fresh one)

        Returns:
            The visited set, holding every non-leaf reference reached
        """
        pass

    def children(self,
                 value: Any,
                 kind: Classification,
                 policy: TraversalPolicy) -> Iterator[Any]:
        """Lazily produce the direct children of a non-leaf value.

        Sequences yield their elements in iteration order. Mappings yield
        every key, then every value. Composites yield the value of each
        non-static field the policy accepts.
        """
        if kind is Classification.SEQUENCE:
            return iter(value)
        if kind is Classification.MAPPING:
            return chain(value.keys(), value.values())
        return self._field_values(value, policy)

    def _field_values(self, value: Any, policy: TraversalPolicy) -> Iterator[Any]:
        for descriptor in self.accessor.fields_of(value):
            if descriptor.is_static:
                continue
            if not policy.accept_field(descriptor):
                continue
            yield self.accessor.read(value, descriptor)

    def _enter(self,
               value: Any,
               depth: int,
               policy: TraversalPolicy,
               visited: IdentitySet) -> Optional[Classification]:
        """Classify a value and fire the matching hook.

        Returns:
            The classification if the walker should descend, else None
        """
        if value is None:
            return None

        kind = self.classifier.classify(value)
        if kind is Classification.LEAF:
            policy.on_leaf(value, depth)
            return None

        if not visited.insert(value):
            policy.on_revisit(value, kind, depth)
            return None

        policy.on_first_visit(value, kind, depth)
        return kind


class RecursiveGraphWalker(GraphWalker):
    """Depth-first walk using the Python call stack.

    Visits a value, then each child's whole subgraph before the next
    sibling. Graph depth is limited by the interpreter recursion limit;
    use StackGraphWalker for deeper graphs.
    """

    def walk(self,
             root: Any,
             policy: TraversalPolicy,
             visited: Optional[IdentitySet] = None) -> IdentitySet:
        visited = IdentitySet() if visited is None else visited
        self._visit(root, 0, policy, visited)
        return visited

    def _visit(self,
               value: Any,
               depth: int,
               policy: TraversalPolicy,
               visited: IdentitySet) -> None:
        kind = self._enter(value, depth, policy, visited)
        if kind is None or policy.should_stop():
            return

        for child in self.children(value, kind, policy):
            self._visit(child, depth + 1, policy, visited)
            if policy.should_stop():
                return


class StackGraphWalker(GraphWalker):
    """Depth-first walk using an explicit stack of child iterators.

    Fires exactly the same hooks in exactly the same order as
    RecursiveGraphWalker, but pending work lives on the heap, so graph
    depth is bounded only by memory.
    """

    def walk(self,
             root: Any,
             policy: TraversalPolicy,
             visited: Optional[IdentitySet] = None) -> IdentitySet:
        visited = IdentitySet() if visited is None else visited
        # Each entry is (children iterator, depth of those children)
        stack: List[Tuple[Iterator[Any], int]] = []

        self._push(root, 0, policy, visited, stack)
        while stack and not policy.should_stop():
            children, depth = stack[-1]
            child = next(children, _DONE)
            if child is _DONE:
                stack.pop()
                continue
            self._push(child, depth, policy, visited, stack)

        return visited

    def _push(self,
              value: Any,
              depth: int,
              policy: TraversalPolicy,
              visited: IdentitySet,
              stack: List[Tuple[Iterator[Any], int]]) -> None:
        kind = self._enter(value, depth, policy, visited)
        if kind is not None:
            stack.append((self.children(value, kind, policy), depth + 1))


# Factory function for creating walkers by name
def create_walker(strategy: Union[WalkStrategy, str],
                  classifier: TypeClassifier,
                  accessor: FieldAccessor) -> GraphWalker:
    """Create a walker instance by strategy.

    Args:
        strategy: WalkStrategy or its name (recursive, explicit_stack, stack)
        classifier: TypeClassifier for the walk
        accessor: FieldAccessor for the walk

    Returns:
        GraphWalker instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'recursive': RecursiveGraphWalker,
        'dfs': RecursiveGraphWalker,
        'explicit_stack': StackGraphWalker,
        'stack': StackGraphWalker,
    }

    if isinstance(strategy, WalkStrategy):
        strategy = strategy.value

    strategy_lower = str(strategy).lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown walk strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower](classifier, accessor)
