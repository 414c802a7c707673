"""
Fixed-width numeric scalar types.

Python integers and decimals have arbitrary precision. These subclasses mark
a value (or a declared member type) as a specific width so the codec can
narrow wide wire numbers on demand and refuse when they do not fit.
"""

import math
import struct
from decimal import Decimal
from typing import Union

FLOAT32_MAX = 3.4028234663852886e38


class _FixedWidthInt(int):
    """Signed integer restricted to ``bits`` bits."""

    bits = 64

    def __new__(cls, value=0):
        number = int.__new__(cls, value)
        if not cls.fits(number):
            raise OverflowError(f"{int(number)} does not fit in {cls.__name__}")
        return number

    @classmethod
    def fits(cls, value: int) -> bool:
        """Whether an integer is inside this type's signed range."""
        bound = 1 << (cls.bits - 1)
        return -bound <= value < bound

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"


class Int8(_FixedWidthInt):
    bits = 8


class Int16(_FixedWidthInt):
    bits = 16


class Int32(_FixedWidthInt):
    bits = 32


class Int64(_FixedWidthInt):
    bits = 64


class Float32(float):
    """Single-precision float; the stored value is rounded to float32."""

    def __new__(cls, value=0.0):
        number = float(value)
        if math.isfinite(number) and abs(number) > FLOAT32_MAX:
            raise OverflowError(f"{number} does not fit in Float32")
        rounded = struct.unpack("f", struct.pack("f", number))[0]
        return float.__new__(cls, rounded)

    @classmethod
    def fits(cls, value: Union[int, float, Decimal]) -> bool:
        try:
            number = float(value)
        except OverflowError:
            return False
        return math.isfinite(number) and abs(number) <= FLOAT32_MAX

    def __repr__(self) -> str:
        return f"Float32({float.__repr__(self)})"


FIXED_WIDTH_INTS = (Int8, Int16, Int32, Int64)
