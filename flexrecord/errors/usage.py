"""
Usage error classifications.

These exceptions signal a caller mistake at runtime: a missing argument, a
write to a frozen record, a stored value that does not match its declared
type, or an out-of-order call on a record writer.
"""

from typing import Any, Dict, Optional


class UsageError(Exception):
    """Base class for incorrect use of the record API."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ArgumentError(UsageError, ValueError):
    """A required argument was None."""

    def __init__(self, argument: str, message: Optional[str] = None, **kwargs):
        super().__init__(message or f"{argument} must not be None", **kwargs)
        self.argument = argument


class ImmutableRecordError(UsageError):
    """Attempted to mutate a frozen record."""

    def __init__(self, message: str, contract: Optional[Any] = None,
                 field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.contract = contract
        self.field = field


class TypeMismatchError(UsageError, TypeError):
    """A stored field value does not match the accessor's declared type."""

    def __init__(self, message: str, field: Optional[str] = None,
                 expected: Optional[Any] = None, actual: Optional[Any] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.expected = expected
        self.actual = actual


class BuilderStateError(UsageError):
    """A record writer call is not valid in the writer's current state."""

    def __init__(self, message: str, state: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.state = state
