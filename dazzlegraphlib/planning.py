"""Walk planning for DazzleGraphLib.

The WalkPlan validates a WalkConfig and assembles the classifier, field
accessor and walker that carry it out.
"""

import logging
from typing import Any, Dict, Optional

from ._common.config import WalkConfig
from .core.classifier import TypeClassifier
from .core.fields import FieldAccessor
from .core.identity import IdentitySet
from .core.policy import TraversalPolicy
from .core.walker import GraphWalker, create_walker
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class WalkPlan:
    """Validated plan for walking object graphs.

    The WalkPlan is the bridge between user intent (WalkConfig) and
    execution. A plan is reusable: each ``execute`` call gets its own
    visited set, so no state leaks between walks.
    """

    def __init__(self, config: Optional[WalkConfig] = None):
        """Create and validate a walk plan.

        Args:
            config: Walk configuration (default: WalkConfig())

        Raises:
            ConfigurationError: If the configuration is inconsistent
        """
        self.config = config or WalkConfig()

        config_errors = self.config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.classifier = self._select_classifier()
        self.accessor = self._select_accessor()
        self.walker = self._select_walker()

        # Statistics of the last execution
        self.values_visited = 0

    def _select_classifier(self) -> TypeClassifier:
        return TypeClassifier(
            leaf_types=self.config.leaf_types,
            leaf_modules=self.config.leaf_modules,
            composite_types=self.config.composite_types,
            platform_types_are_leaves=self.config.platform_types_are_leaves,
        )

    def _select_accessor(self) -> FieldAccessor:
        return FieldAccessor(
            read_error_policy=self.config.read_error_policy,
            include_undeclared_attributes=self.config.include_undeclared_attributes,
        )

    def _select_walker(self) -> GraphWalker:
        return create_walker(self.config.strategy, self.classifier, self.accessor)

    def execute(self, root: Any, policy: TraversalPolicy) -> Any:
        """Walk the graph under ``root`` with ``policy``.

        Args:
            root: Starting value
            policy: What the walk computes

        Returns:
            ``policy.result()``
        """
        visited = self.walker.walk(root, policy, IdentitySet())
        self.values_visited = len(visited)
        logger.debug(
            "%s walk of %s with %s visited %d references",
            self.config.strategy.value, type(root).__name__,
            policy.__class__.__name__, self.values_visited,
        )
        return policy.result()

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the walk plan.

        Useful for debugging and logging.

        Returns:
            Dictionary with plan details
        """
        return {
            'strategy': self.config.strategy.value,
            'walker': self.walker.__class__.__name__,
            'classifier': self.classifier.__class__.__name__,
            'accessor': self.accessor.__class__.__name__,
            'read_error_policy': self.accessor.read_error_policy.__class__.__name__,
            'extra_leaf_types': [t.__name__ for t in self.config.leaf_types],
            'composite_types': [t.__name__ for t in self.config.composite_types],
            'platform_types_are_leaves': self.config.platform_types_are_leaves,
            'values_visited': self.values_visited,
        }
