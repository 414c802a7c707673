"""
Scalar serialization and numeric narrowing.

Numbers are read off the wire in their widest form (int or Decimal). When a
member declares a narrower type the ScalarDeserializer converts the value,
but only if it fits; otherwise the wide value is kept as-is. Narrowing never
raises and never truncates.
"""

import math
from decimal import Decimal
from typing import Any, Callable

from ..core.scalars import FIXED_WIDTH_INTS, Float32
from ..errors import DispatchError
from .deserializers import Deserializer, DeserializerChain
from .generator import JsonGenerator
from .serializers import Serializer, SerializerChain


def _write_number(value: Any, generator: JsonGenerator) -> None:
    if not _is_finite(value):
        raise DispatchError(
            f"Non-finite number {value!r} has no JSON representation",
            value_type=type(value),
        )
    generator.write_number(value)


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


class ScalarSerializer(Serializer):
    """Writes booleans, strings and numbers, matched by exact runtime type."""

    def __init__(self) -> None:
        self._writers: dict[type, Callable[[Any, JsonGenerator], None]] = {
            bool: lambda value, generator: generator.write_boolean(value),
            str: lambda value, generator: generator.write_string(value),
            int: _write_number,
            float: _write_number,
            Float32: _write_number,
            Decimal: _write_number,
        }
        for kind in FIXED_WIDTH_INTS:
            self._writers[kind] = _write_number

    def can_serialize(self, value: Any) -> bool:
        return type(value) in self._writers

    def serialize(self, value: Any, generator: JsonGenerator,
                  chain: SerializerChain) -> None:
        self._writers[type(value)](value, generator)


def _is_wide_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _fixed_int(kind: type) -> Callable[[Any], Any]:
    def narrow(value: Any) -> Any:
        if _is_wide_int(value) and kind.fits(value):  # type: ignore[attr-defined]
            return kind(value)
        return value
    return narrow


def _to_int(value: Any) -> Any:
    if isinstance(value, Decimal) and value.is_finite() \
            and value == value.to_integral_value():
        return int(value)
    return value


def _to_float(value: Any) -> Any:
    if _is_wide_int(value) or isinstance(value, Decimal):
        try:
            number = float(value)
        except OverflowError:
            return value
        # Decimal overflows to inf instead of raising
        if math.isinf(number) and not _is_infinite(value):
            return value
        return number
    return value


def _to_float32(value: Any) -> Any:
    if _is_wide_int(value) or isinstance(value, (Decimal, float)):
        if Float32.fits(value):
            return Float32(value)
    return value


def _to_decimal(value: Any) -> Any:
    if _is_wide_int(value):
        return Decimal(value)
    return value


def _is_infinite(value: Any) -> bool:
    return isinstance(value, Decimal) and value.is_infinite()


class ScalarDeserializer(Deserializer):
    """Narrows wide numbers to the requested numeric type when they fit."""

    def __init__(self) -> None:
        self._narrowers: dict[type, Callable[[Any], Any]] = {
            kind: _fixed_int(kind) for kind in FIXED_WIDTH_INTS
        }
        self._narrowers.update({
            int: _to_int,
            float: _to_float,
            Float32: _to_float32,
            Decimal: _to_decimal,
        })

    def can_deserialize(self, value: Any, target: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return False
        return isinstance(target, type) and target in self._narrowers

    def deserialize(self, value: Any, target: Any,
                    chain: DeserializerChain) -> Any:
        return self._narrowers[target](value)
