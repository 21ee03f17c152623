"""
Field read error policies for DazzleGraphLib.

This module decides what a failed field read turns into. Reads happen deep
inside a walk, where aborting would throw away everything collected so far,
so the default policy degrades the field to ``None`` and moves on.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .errors import FieldReadError

logger = logging.getLogger(__name__)


class ReadErrorPolicy(ABC):
    """
    Base class for field read error policies.

    Subclasses implement different strategies for handling an exception
    raised while reading one field of one object.
    """

    @abstractmethod
    def handle(self, error: Exception, obj: Any, descriptor: Any) -> Any:
        """
        Handle an error that occurred while reading a field.

        Args:
            error: The exception that was raised
            obj: The object whose field was being read
            descriptor: FieldDescriptor of the field

        Returns:
            The value to use in place of the unreadable field,
            or raises to stop the walk.
        """
        pass


class _RecordingPolicy(ReadErrorPolicy):
    """Shared bookkeeping for policies that keep going after an error.

    Records hold names and messages only. Keeping the exception would keep
    its traceback, and with it the walked objects, alive.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def _record(self, error: Exception, obj: Any, descriptor: Any) -> Dict[str, Any]:
        record = {
            'owner': descriptor.owner.__qualname__,
            'field': descriptor.name,
            'object_type': type(obj).__qualname__,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        self.errors.append(record)
        return record

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'errors': self.errors,
        }


class DegradeToNonePolicy(ReadErrorPolicy):
    """
    Default policy: the unreadable field reads as ``None``.

    The error is only logged at DEBUG level, so a walk over third-party
    objects with hostile attributes stays quiet and a reused plan keeps
    no state. Use CollectErrorsPolicy to keep a record.
    """

    def handle(self, error: Exception, obj: Any, descriptor: Any) -> Any:
        logger.debug(
            "Field %s.%s unreadable, treating as None: %s",
            descriptor.owner.__qualname__, descriptor.name, error,
        )
        return None


class ContinueOnErrorsPolicy(_RecordingPolicy):
    """
    Policy that logs errors and continues the walk.

    Like DegradeToNonePolicy, but loud: each failure is logged as a
    warning when ``verbose`` is set.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for each failed read
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: Exception, obj: Any, descriptor: Any) -> Any:
        self._record(error, obj, descriptor)
        if self.verbose:
            logger.warning(
                "Skipping unreadable field %s.%s on %s: %s",
                descriptor.owner.__qualname__, descriptor.name,
                type(obj).__qualname__, error,
            )
        return None


class CollectErrorsPolicy(_RecordingPolicy):
    """
    Policy that collects all errors without logging, for batch reporting.
    """

    def handle(self, error: Exception, obj: Any, descriptor: Any) -> Any:
        self._record(error, obj, descriptor)
        return None


class FailFastPolicy(ReadErrorPolicy):
    """
    Policy that stops the walk on the first unreadable field.

    Useful while debugging a custom type whose attributes misbehave.
    """

    def handle(self, error: Exception, obj: Any, descriptor: Any) -> Any:
        raise FieldReadError(obj, descriptor, error) from error
