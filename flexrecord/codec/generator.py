"""
Streaming JSON event writer.

JsonGenerator is the writing half of the tokenizer: serializers push events
(start/end object, field names, scalars) and the generator writes compact
JSON straight to a binary stream, inserting separators as needed. String
tokens are encoded with orjson.
"""

import base64
import math
from decimal import Decimal
from typing import BinaryIO, Union

import orjson

from ..errors import GeneratorStateError

_OBJECT = "object"
_ARRAY = "array"


class _Frame:
    __slots__ = ("kind", "count", "awaiting_value")

    def __init__(self, kind: str):
        self.kind = kind
        self.count = 0
        # Object frames only: a field name was written and needs its value
        self.awaiting_value = False


class JsonGenerator:
    """Writes JSON tokens to a binary stream."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._stack: list[_Frame] = []
        self._root_written = False

    def write_start_object(self) -> None:
        self._before_value("start-object")
        self._stack.append(_Frame(_OBJECT))
        self._stream.write(b"{")

    def write_end_object(self) -> None:
        self._close(_OBJECT, b"}")

    def write_start_array(self) -> None:
        self._before_value("start-array")
        self._stack.append(_Frame(_ARRAY))
        self._stream.write(b"[")

    def write_end_array(self) -> None:
        self._close(_ARRAY, b"]")

    def write_field_name(self, name: str) -> None:
        if not isinstance(name, str):
            raise GeneratorStateError(
                f"field name {name!r} is not a str", event="field-name")
        frame = self._stack[-1] if self._stack else None
        if frame is None or frame.kind != _OBJECT or frame.awaiting_value:
            raise GeneratorStateError(
                f"cannot write field name {name!r} here", event="field-name")
        if frame.count:
            self._stream.write(b",")
        frame.count += 1
        frame.awaiting_value = True
        self._stream.write(orjson.dumps(name))
        self._stream.write(b":")

    def write_null(self) -> None:
        self._before_value("null")
        self._stream.write(b"null")

    def write_boolean(self, value: bool) -> None:
        self._before_value("boolean")
        self._stream.write(b"true" if value else b"false")

    def write_string(self, value: str) -> None:
        self._before_value("string")
        self._stream.write(orjson.dumps(value))

    def write_number(self, value: Union[int, float, Decimal]) -> None:
        token = _number_token(value)
        self._before_value("number")
        self._stream.write(token)

    def write_binary(self, value: bytes) -> None:
        """JSON has no binary token; binary travels as a base64 string."""
        self._before_value("embedded-binary")
        self._stream.write(b'"')
        self._stream.write(base64.b64encode(value))
        self._stream.write(b'"')

    def flush(self) -> None:
        if self._stack:
            raise GeneratorStateError(
                f"unterminated {self._stack[-1].kind}", event="flush")
        self._stream.flush()

    def _before_value(self, event: str) -> None:
        if not self._stack:
            if self._root_written:
                raise GeneratorStateError(
                    "a complete value has already been written", event=event)
            self._root_written = True
            return

        frame = self._stack[-1]
        if frame.kind == _OBJECT:
            if not frame.awaiting_value:
                raise GeneratorStateError(
                    "field name required before value", event=event)
            frame.awaiting_value = False
        else:
            if frame.count:
                self._stream.write(b",")
            frame.count += 1

    def _close(self, kind: str, token: bytes) -> None:
        frame = self._stack[-1] if self._stack else None
        if frame is None or frame.kind != kind:
            raise GeneratorStateError(f"not writing an {kind}", event=f"end-{kind}")
        if frame.awaiting_value:
            raise GeneratorStateError("field name has no value", event=f"end-{kind}")
        self._stack.pop()
        self._stream.write(token)


def _number_token(value: Union[int, float, Decimal]) -> bytes:
    if isinstance(value, int):
        return int.__repr__(value).encode("ascii")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise GeneratorStateError(f"{value!r} is not a JSON number", event="number")
        return float.__repr__(value).encode("ascii")
    if not value.is_finite():
        raise GeneratorStateError(f"{value!r} is not a JSON number", event="number")
    return str(value).encode("ascii")
