"""
Configuration error classifications.

These exceptions are raised once, at bind or build time, when a contract or
a type registry is declared incorrectly. They are never retried.
"""

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Base class for declaration problems detected at bind/build time."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ContractDefinitionError(ConfigurationError):
    """A record contract is not well-formed."""

    def __init__(self, message: str, contract: Optional[Any] = None,
                 accessor: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.contract = contract
        self.accessor = accessor


class DuplicateRegistrationError(ConfigurationError):
    """A wire name or contract was registered twice in a type registry."""

    def __init__(self, message: str, name: Optional[str] = None,
                 contract: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.name = name
        self.contract = contract
