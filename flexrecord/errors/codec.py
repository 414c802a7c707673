"""
Codec error classifications for serialization and parsing.

These exceptions abort the current serialize/deserialize call. No partial
value is returned to the caller.
"""

from typing import Any, Dict, Optional


class CodecError(Exception):
    """Base class for serialization and deserialization failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class DispatchError(CodecError):
    """No serializer in the chain can handle a value."""

    def __init__(self, message: str, value_type: Optional[type] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.value_type = value_type


class ParseError(CodecError):
    """The tokenizer produced an error or an event that is not valid here."""

    def __init__(self, message: str, event: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.event = event


class GeneratorStateError(CodecError):
    """A JSON generator event was written out of order."""

    def __init__(self, message: str, event: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.event = event
