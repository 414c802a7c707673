"""
Structured error classification for record binding and serialization.

This module provides the exception hierarchy raised by the binder, the
record model and the codec, grouped by how callers are expected to react.
"""

from .codec import (
    CodecError,
    DispatchError,
    GeneratorStateError,
    ParseError,
)
from .configuration import (
    ConfigurationError,
    ContractDefinitionError,
    DuplicateRegistrationError,
)
from .usage import (
    ArgumentError,
    BuilderStateError,
    ImmutableRecordError,
    TypeMismatchError,
    UsageError,
)

__all__ = [
    # Configuration Errors
    "ConfigurationError",
    "ContractDefinitionError",
    "DuplicateRegistrationError",
    # Usage Errors
    "UsageError",
    "ArgumentError",
    "ImmutableRecordError",
    "TypeMismatchError",
    "BuilderStateError",
    # Codec Errors
    "CodecError",
    "DispatchError",
    "ParseError",
    "GeneratorStateError",
]
