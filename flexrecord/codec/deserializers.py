"""
Deserializer strategy interface and the ordered deserializer chain.

Deserializers turn raw parsed values (bool, str, int, Decimal, list, dict)
into typed values for a requested target type. Deserialization is lenient:
when nothing in the chain accepts a value it passes through unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..errors import ArgumentError
from ..core.typing_utils import strip_optional


class Deserializer(ABC):
    """Converts raw values of the shapes it accepts to a target type."""

    @abstractmethod
    def can_deserialize(self, value: Any, target: Any) -> bool:
        pass

    @abstractmethod
    def deserialize(self, value: Any, target: Any,
                    chain: "DeserializerChain") -> Any:
        """
        Convert a raw value.

        Args:
            value: Raw parsed value
            target: Requested type, or None when unknown
            chain: The chain to recurse into for nested values
        """
        pass


class DeserializerChain:
    """
    An immutable, ordered set of deserializers.

    The most recently registered deserializer that accepts a value wins.
    """

    @staticmethod
    def builder() -> "DeserializerChain.Builder":
        return DeserializerChain.Builder()

    def __init__(self, deserializers: tuple[Deserializer, ...]):
        self._deserializers = deserializers

    @property
    def deserializers(self) -> tuple[Deserializer, ...]:
        return self._deserializers

    def get_deserializer(self, value: Any, target: Any) -> Optional[Deserializer]:
        """The deserializer for a value and target, or None if none accepts it."""
        for deserializer in reversed(self._deserializers):
            if deserializer.can_deserialize(value, target):
                return deserializer
        return None

    def deserialize_to(self, value: Any, target: Any = None) -> Any:
        """
        Deserialize a raw value to target.

        Optional[X] targets are treated as X. Returns the value unmodified
        when no deserializer accepts it.
        """
        target = strip_optional(target)
        deserializer = self.get_deserializer(value, target)
        if deserializer is None:
            return value
        return deserializer.deserialize(value, target, self)

    def copy(self) -> "DeserializerChain.Builder":
        """A builder pre-loaded with this chain's deserializers."""
        return DeserializerChain.Builder(self._deserializers)

    class Builder:
        def __init__(self, deserializers: tuple[Deserializer, ...] = ()):
            self._deserializers = list(deserializers)

        def add(self, deserializer: Deserializer) -> "DeserializerChain.Builder":
            """Register a deserializer with higher priority than all before it."""
            if deserializer is None:
                raise ArgumentError("deserializer")
            self._deserializers.append(deserializer)
            return self

        def build(self) -> "DeserializerChain":
            return DeserializerChain(tuple(self._deserializers))
