"""
Binary and UUID serialization.

Opaque binary values travel as embedded binary events, which the JSON
generator renders as base64 strings. UUIDs travel as their 16 raw bytes.
Reading is best-effort: malformed base64 keeps the original string, and a
UUID blob of the wrong length is kept as plain bytes.
"""

import base64
import binascii
import uuid
from typing import Any, Union

from ..logging.config import get_codec_logger, log_lenient_fallback
from .deserializers import Deserializer, DeserializerChain
from .generator import JsonGenerator
from .serializers import Serializer, SerializerChain

logger = get_codec_logger(__name__)

_BINARY_TYPES = (bytes, bytearray, memoryview)


def _decode(value: Union[str, bytes, bytearray], strategy: str,
            target: Any) -> Union[str, bytes]:
    """Raw bytes for a binary wire value, or the input string if undecodable."""
    if not isinstance(value, str):
        return bytes(value)
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        log_lenient_fallback(logger, strategy, f"malformed base64: {e}", target)
        return value


class BinarySerializer(Serializer):
    def can_serialize(self, value: Any) -> bool:
        return isinstance(value, _BINARY_TYPES)

    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: SerializerChain) -> None:
        generator.write_binary(bytes(value))


class UuidSerializer(Serializer):
    """Writes UUIDs as 16 bytes of binary data, most significant half first."""

    def can_serialize(self, value: Any) -> bool:
        return isinstance(value, uuid.UUID)

    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: SerializerChain) -> None:
        generator.write_binary(value.bytes)


class BinaryDeserializer(Deserializer):
    """Reads bytes targets from base64 strings or raw byte blobs."""

    def can_deserialize(self, value: Any, target: Any) -> bool:
        if target is not bytes:
            return False
        return isinstance(value, (str, bytes, bytearray))

    def deserialize(self, value: Any, target: Any,
                    chain: DeserializerChain) -> Any:
        return _decode(value, "binary", target)


class UuidDeserializer(Deserializer):
    """Reads UUID targets from 16-byte blobs (or their base64 encoding)."""

    def can_deserialize(self, value: Any, target: Any) -> bool:
        if target is not uuid.UUID:
            return False
        return isinstance(value, (str, bytes, bytearray))

    def deserialize(self, value: Any, target: Any,
                    chain: DeserializerChain) -> Any:
        raw = _decode(value, "uuid", target)
        if isinstance(raw, str):
            return raw
        if len(raw) != 16:
            log_lenient_fallback(logger, "uuid", f"expected 16 bytes, got {len(raw)}",
                                 target)
            return raw
        return uuid.UUID(bytes=raw)
