"""
Record serialization with optional in-band type hints.

When a TypeRegistry is configured, records are written with a leading
"__type" field naming their contract. On the way back in, an explicit
contract target always wins; a generic target (None, Any, object or Record)
falls back to the "__type" hint. Fields are deserialized using the declared
member types of the chosen contract; unknown fields are kept untyped.
"""

from typing import Any, Optional

from ..core.binder import RecordBox
from ..core.record import Record
from ..core.registry import TypeRegistry
from ..core.typing_utils import is_generic_target, is_record_contract
from ..errors import ArgumentError, DispatchError
from .deserializers import Deserializer, DeserializerChain
from .generator import JsonGenerator
from .serializers import Serializer, SerializerChain

TYPE_FIELD = "__type"


class RecordSerializer(Serializer):
    """Writes records as JSON objects; absent fields are never written."""

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self._registry = registry

    def can_serialize(self, value: Any) -> bool:
        return isinstance(value, Record)

    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: SerializerChain) -> None:
        generator.write_start_object()

        if self._registry is not None and value.contract is not None \
                and value.get(TYPE_FIELD) is None:
            name = self._registry.get_name(value.contract)
            if name is not None:
                generator.write_field_name(TYPE_FIELD)
                generator.write_string(name)

        for key, item in value.entries():
            if not isinstance(key, str):
                raise DispatchError(f"field name {key!r} is not a str",
                                    value_type=type(key))
            if item is None:
                continue
            generator.write_field_name(key)
            chain.serialize(item, generator)

        generator.write_end_object()


class RecordDeserializer(Deserializer):
    """Builds records from raw JSON objects."""

    def __init__(self, box: RecordBox, registry: Optional[TypeRegistry] = None):
        if box is None:
            raise ArgumentError("box")
        self._box = box
        self._registry = registry

    def can_deserialize(self, value: Any, target: Any) -> bool:
        if not isinstance(value, dict):
            return False
        return self._resolve(value, target) is not None

    def deserialize(self, value: Any, target: Any,
                    chain: DeserializerChain) -> Any:
        contract = self._resolve(value, target)
        members = self._box.members_of(contract)

        entries = {}
        for name, item in value.items():
            if item is None:
                continue
            entries[name] = chain.deserialize_to(item, members.get(name))

        return self._box.wrap(contract, entries)

    def _resolve(self, value: dict, target: Any) -> Optional[type]:
        """The contract to build, or None to leave the object as a plain map."""
        if is_record_contract(target) and target is not Record:
            return target
        if not (target is Record or is_generic_target(target)):
            return None

        hinted = self._hinted_contract(value)
        if hinted is not None:
            return hinted
        return Record if target is Record else None

    def _hinted_contract(self, value: dict) -> Optional[type]:
        if self._registry is None:
            return None
        name = value.get(TYPE_FIELD)
        if not isinstance(name, str):
            return None
        return self._registry.get_type(name)
