"""Common components shared across DazzleGraphLib.

This internal package contains plain data definitions used by the core
and by the planning layer. It should NOT be imported directly by users.

Important: This package must NEVER import from core, planning or api to
avoid circular dependencies.
"""

from .config import (
    Classification,
    WalkStrategy,
    FieldKind,
    WalkConfig,
)

__all__ = [
    'Classification',
    'WalkStrategy',
    'FieldKind',
    'WalkConfig',
]
