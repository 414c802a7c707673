"""
Format adapters between records and wire bytes.

JsonRecordModule reads in two phases: the ijson tokenizer first produces a
raw value tree (dicts, lists, str, bool, int, Decimal), and the deserializer
chain then converts that tree to the requested target type. Type resolution
has to wait for the whole object because the contract may only be known from
a "__type" field that appears anywhere inside it. Writing streams serializer
events straight to the output without an intermediate tree.
"""

import io
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Iterator, Optional, Union

import ijson

from ..config.defaults import CodecParams, TokenizerParams
from ..config.loader import ConfigLoader
from ..config.validation import ConfigValidator
from ..core.binder import RecordBox
from ..core.registry import TypeRegistry
from ..core.writer import RecordWriter
from ..errors import ArgumentError, ConfigurationError, ParseError
from ..logging.config import get_codec_logger
from .deserializers import DeserializerChain
from .generator import JsonGenerator
from .serializers import SerializerChain
from .standard import standard_deserializers, standard_serializers

logger = get_codec_logger(__name__)

Source = Union[bytes, bytearray, str, BinaryIO]

_SCALAR_EVENTS = frozenset({"null", "boolean", "integer", "double", "number", "string"})


class RecordModule(ABC):
    """A wire format for records and the values they hold."""

    def serialize(self, value: Any) -> bytes:
        buffer = io.BytesIO()
        self.serialize_to(value, buffer)
        return buffer.getvalue()

    @abstractmethod
    def serialize_to(self, value: Any, stream: BinaryIO) -> None:
        """Write a value to a binary stream. The stream is left open."""
        pass

    def deserialize(self, source: Source) -> Any:
        return self.deserialize_to(source, None)

    @abstractmethod
    def deserialize_to(self, source: Source, target: Any = None) -> Any:
        """
        Read one value and convert it to target.

        Args:
            source: bytes, str, or a binary stream (left open)
            target: Requested type; None lets in-band hints decide
        """
        pass


class JsonRecordModule(RecordModule):
    """
    JSON wire format for records.

    Any collaborator left out is created with standard settings, and the
    standard chains share the module's box and type registry.
    """

    def __init__(
        self,
        box: Optional[RecordBox] = None,
        serializers: Optional[SerializerChain] = None,
        deserializers: Optional[DeserializerChain] = None,
        registry: Optional[TypeRegistry] = None,
        tokenizer: Optional[TokenizerParams] = None,
        codec: Optional[CodecParams] = None,
    ) -> None:
        self._box = box if box is not None else RecordBox()
        self._registry = registry
        self._tokenizer = tokenizer if tokenizer is not None else TokenizerParams()
        codec = codec if codec is not None else CodecParams()

        if serializers is None:
            hint_registry = registry if codec.emit_type_hints else None
            serializers = standard_serializers(hint_registry).build()
        if deserializers is None:
            deserializers = standard_deserializers(self._box, registry).build()

        self._serializers = serializers
        self._deserializers = deserializers

        logger.debug(
            "JSON record module initialized",
            serializers=len(serializers.serializers),
            deserializers=len(deserializers.deserializers),
            type_hints=registry is not None and codec.emit_type_hints,
        )

    @classmethod
    def from_config(
        cls,
        loader: Optional[ConfigLoader] = None,
        overrides: Optional[dict[str, Any]] = None,
        box: Optional[RecordBox] = None,
    ) -> "JsonRecordModule":
        """Create a module from the configuration layer."""
        if loader is None:
            loader = ConfigLoader.create()
        config = loader.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigurationError(
                f"Invalid configuration: {errors[0].field}: {errors[0].message}",
                context={"errors": [e.field for e in errors]},
            )

        return cls(
            box=box,
            registry=loader.build_type_registry(config),
            tokenizer=TokenizerParams(**config["tokenizer"]),
            codec=CodecParams(**config["codec"]),
        )

    @property
    def box(self) -> RecordBox:
        return self._box

    @property
    def registry(self) -> Optional[TypeRegistry]:
        return self._registry

    @property
    def serializers(self) -> SerializerChain:
        return self._serializers

    @property
    def deserializers(self) -> DeserializerChain:
        return self._deserializers

    def writer(self) -> RecordWriter:
        return self._box.writer()

    def serialize_to(self, value: Any, stream: BinaryIO) -> None:
        if stream is None:
            raise ArgumentError("stream")
        generator = JsonGenerator(stream)
        self._serializers.serialize(value, generator)
        generator.flush()

    def deserialize_to(self, source: Source, target: Any = None) -> Any:
        if source is None:
            raise ArgumentError("source")
        raw = self._parse(_as_stream(source))
        return self._deserializers.deserialize_to(raw, target)

    def _parse(self, stream: BinaryIO) -> Any:
        events = ijson.basic_parse(
            stream,
            buf_size=self._tokenizer.buf_size,
            use_float=False,
            **self._tokenizer.backend_options(),
        )
        try:
            event, value = self._next(events)
            result = self._read_value(events, event, value)
            trailing = next(events, None)
            if trailing is not None:
                raise ParseError(f"Unexpected {trailing[0]} after JSON value",
                                 event=trailing[0])
            return result
        except ijson.JSONError as e:
            logger.error("JSON parsing failed", error=str(e))
            raise ParseError(f"Invalid JSON: {e}") from e

    def _read_value(self, events: Iterator, event: str, value: Any) -> Any:
        if event in _SCALAR_EVENTS:
            return value
        if event == "start_map":
            return self._read_object(events)
        if event == "start_array":
            return self._read_array(events)
        raise ParseError(f"Unexpected token {event}", event=event)

    def _read_array(self, events: Iterator) -> list:
        result = []
        while True:
            event, value = self._next(events)
            if event == "end_array":
                return result
            result.append(self._read_value(events, event, value))

    def _read_object(self, events: Iterator) -> dict:
        result = {}
        while True:
            event, value = self._next(events)
            if event == "end_map":
                return result
            if event != "map_key":
                raise ParseError(f"Unexpected token {event}, expected a field name",
                                 event=event)
            event, item = self._next(events)
            result[value] = self._read_value(events, event, item)

    @staticmethod
    def _next(events: Iterator) -> tuple[str, Any]:
        try:
            return next(events)
        except StopIteration:
            raise ParseError("Unexpected end of JSON input", event="eof") from None


def _as_stream(source: Source) -> BinaryIO:
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source
