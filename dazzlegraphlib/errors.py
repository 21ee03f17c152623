"""Exception types raised by DazzleGraphLib."""


class DazzleGraphError(Exception):
    """Base class for all DazzleGraphLib errors."""
    pass


class ConfigurationError(DazzleGraphError):
    """Raised when a WalkConfig is inconsistent and cannot be planned."""
    pass


class UnknownMemberError(DazzleGraphError):
    """Raised when a member looked up by name cannot be resolved.

    This is a caller-level condition; the walker itself never raises it.
    """

    def __init__(self, owner: type, member: str):
        self.owner = owner
        self.member = member
        super().__init__(f"{owner.__qualname__} has no member {member!r}")


class FieldReadError(DazzleGraphError):
    """Raised by FailFastPolicy when a field cannot be read.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, obj, descriptor, error: Exception):
        self.obj = obj
        self.descriptor = descriptor
        self.error = error
        super().__init__(
            f"Cannot read {descriptor.owner.__qualname__}.{descriptor.name}: {error}"
        )
