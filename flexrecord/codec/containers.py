"""List and map serialization, recursing into the chain for elements."""

from collections.abc import Mapping
from typing import Any

from ..core.record import Record
from ..core.typing_utils import element_type, key_value_types
from ..errors import DispatchError
from .deserializers import Deserializer, DeserializerChain
from .generator import JsonGenerator
from .serializers import Serializer, SerializerChain


class ListSerializer(Serializer):
    """Turns lists (and tuples) into JSON arrays."""

    def can_serialize(self, value: Any) -> bool:
        return isinstance(value, (list, tuple))

    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: SerializerChain) -> None:
        generator.write_start_array()
        for element in value:
            chain.serialize(element, generator)
        generator.write_end_array()


class MapSerializer(Serializer):
    """
    Turns string-keyed mappings into JSON objects.

    Entries whose value is None are left out.
    """

    def can_serialize(self, value: Any) -> bool:
        return isinstance(value, Mapping) and not isinstance(value, Record)

    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: SerializerChain) -> None:
        generator.write_start_object()
        for key, item in value.items():
            if not isinstance(key, str):
                raise DispatchError(f"map key {key!r} is not a str",
                                    value_type=type(key))
            if item is None:
                continue
            generator.write_field_name(key)
            chain.serialize(item, generator)
        generator.write_end_object()


class ListDeserializer(Deserializer):
    """Deserializes list elements using the target's element type, if declared."""

    def can_deserialize(self, value: Any, target: Any) -> bool:
        return isinstance(value, list)

    def deserialize(self, value: Any, target: Any,
                    chain: DeserializerChain) -> Any:
        element = element_type(target)
        return [chain.deserialize_to(item, element) for item in value]


class MapDeserializer(Deserializer):
    """Deserializes map keys and values using dict[K, V] targets, if declared."""

    def can_deserialize(self, value: Any, target: Any) -> bool:
        return isinstance(value, dict)

    def deserialize(self, value: Any, target: Any,
                    chain: DeserializerChain) -> Any:
        key_type, value_type = key_value_types(target)
        return {
            chain.deserialize_to(key, key_type): chain.deserialize_to(item, value_type)
            for key, item in value.items()
        }
