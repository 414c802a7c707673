"""
Type-directed JSON serialization for records.

Serialization runs through two ordered strategy chains (serializers and
deserializers). Later registrations take precedence, so callers extend the
standard chains by adding their own strategies after the defaults.
"""

from .deserializers import Deserializer, DeserializerChain
from .generator import JsonGenerator
from .module import JsonRecordModule, RecordModule
from .records import TYPE_FIELD
from .serializers import Serializer, SerializerChain
from .standard import standard_deserializers, standard_serializers

__all__ = [
    "Deserializer",
    "DeserializerChain",
    "JsonGenerator",
    "JsonRecordModule",
    "RecordModule",
    "Serializer",
    "SerializerChain",
    "standard_deserializers",
    "standard_serializers",
    "TYPE_FIELD",
]
