"""Serializer strategy interface and the ordered serializer chain."""

from abc import ABC, abstractmethod
from typing import Any

from ..errors import ArgumentError, DispatchError
from ..logging.config import get_codec_logger
from .generator import JsonGenerator

logger = get_codec_logger(__name__)


class Serializer(ABC):
    """Writes values of the shapes it accepts as generator events."""

    @abstractmethod
    def can_serialize(self, value: Any) -> bool:
        """Whether this serializer handles the value's runtime shape."""
        pass

    @abstractmethod
    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: "SerializerChain") -> None:
        """
        Write a value.

        Args:
            value: The value to write
            generator: Event sink
            chain: The chain to recurse into for nested values
        """
        pass


class SerializerChain:
    """
    An immutable, ordered set of serializers.

    The most recently registered serializer that accepts a value wins.
    """

    @staticmethod
    def builder() -> "SerializerChain.Builder":
        return SerializerChain.Builder()

    def __init__(self, serializers: tuple[Serializer, ...]):
        self._serializers = serializers

    @property
    def serializers(self) -> tuple[Serializer, ...]:
        return self._serializers

    def get_serializer(self, value: Any) -> Serializer:
        """
        Find the serializer for a value.

        Raises:
            DispatchError: If no registered serializer accepts the value
        """
        for serializer in reversed(self._serializers):
            if serializer.can_serialize(value):
                return serializer

        logger.error("No serializer for value", value_type=type(value).__qualname__)
        raise DispatchError(
            f"Don't know how to serialize value {value!r} of type "
            f"{type(value).__qualname__}",
            value_type=type(value),
        )

    def serialize(self, value: Any, generator: JsonGenerator) -> None:
        if value is None:
            raise ArgumentError("value")
        if generator is None:
            raise ArgumentError("generator")
        self.get_serializer(value).serialize(value, generator, self)

    def copy(self) -> "SerializerChain.Builder":
        """A builder pre-loaded with this chain's serializers."""
        return SerializerChain.Builder(self._serializers)

    class Builder:
        def __init__(self, serializers: tuple[Serializer, ...] = ()):
            self._serializers = list(serializers)

        def add(self, serializer: Serializer) -> "SerializerChain.Builder":
            """Register a serializer with higher priority than all before it."""
            if serializer is None:
                raise ArgumentError("serializer")
            self._serializers.append(serializer)
            return self

        def build(self) -> "SerializerChain":
            return SerializerChain(tuple(self._serializers))
