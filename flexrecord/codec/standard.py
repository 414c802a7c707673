"""
The standard serializer and deserializer sets.

Both factories return builders with the standard strategies registered at
the lowest priority, so anything added afterwards takes precedence.
"""

from typing import Optional

from ..core.binder import RecordBox
from ..core.registry import TypeRegistry
from .binary import BinaryDeserializer, BinarySerializer, UuidDeserializer, UuidSerializer
from .containers import ListDeserializer, ListSerializer, MapDeserializer, MapSerializer
from .deserializers import DeserializerChain
from .records import RecordDeserializer, RecordSerializer
from .scalar import ScalarDeserializer, ScalarSerializer
from .serializers import SerializerChain


def standard_serializers(
    registry: Optional[TypeRegistry] = None
) -> SerializerChain.Builder:
    """
    Builder holding the standard serializers.

    Args:
        registry: When given, records are written with a "__type" hint
    """
    return (SerializerChain.builder()
            .add(ScalarSerializer())
            .add(BinarySerializer())
            .add(UuidSerializer())
            .add(ListSerializer())
            .add(MapSerializer())
            .add(RecordSerializer(registry)))


def standard_deserializers(
    box: RecordBox,
    registry: Optional[TypeRegistry] = None
) -> DeserializerChain.Builder:
    """
    Builder holding the standard deserializers.

    Args:
        box: RecordBox used to create deserialized records
        registry: When given, "__type" hints select the record contract
    """
    return (DeserializerChain.builder()
            .add(ScalarDeserializer())
            .add(BinaryDeserializer())
            .add(UuidDeserializer())
            .add(ListDeserializer())
            .add(MapDeserializer())
            .add(RecordDeserializer(box, registry)))
