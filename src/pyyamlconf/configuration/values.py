# -*- encoding: utf-8 -*-
# @File   : values.py
# @Time   : 2024/10/12 14:02:11
# @Author : Kariko Lin

"""Value kinds a configuration may hold, and the casting rules between them.

Python itself only knows `int`, `float` and `str`,
so the narrower kinds get thin wrapper types (`Byte`, `Short`, `Long`,
`Float`, `Char`). A plain `int` counts as int32 when it fits, else int64;
a plain `float` is a double.

Casts between numbers truncate and saturate floats, and wrap integers
to the target width.
"""

import math
import re
import struct
from enum import Enum
from typing import Any, Final

from ..abstract import ConfigurationSection

__all__ = [
    'MISSING', 'ValueKind', 'Byte', 'Short', 'Long', 'Float', 'Char',
    'kind_of', 'is_number', 'narrow', 'to_float', 'to_double', 'to_text',
    'parse_integral', 'parse_floating', 'ZERO_VALUES'
]


class _Missing(Enum):
    # `None` is a legit default, so omitted arguments need their own marker.
    MISSING = 'MISSING'

    def __repr__(self) -> str:
        return 'MISSING'


MISSING: Final = _Missing.MISSING


class ValueKind(str, Enum):
    BOOLEAN = 'boolean'
    BYTE = 'byte'
    SHORT = 'short'
    INT = 'int'
    LONG = 'long'
    FLOAT = 'float'
    DOUBLE = 'double'
    CHAR = 'char'
    STRING = 'string'
    LIST = 'list'
    SECTION = 'section'
    OBJECT = 'object'


def _int_range(bits: int) -> tuple[int, int]:
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


INT32_MIN, INT32_MAX = _int_range(32)


def _round_f32(value: float) -> float:
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class _SizedInt(int):
    BITS = 64
    KIND = ValueKind.LONG

    def __new__(cls, value: int = 0):
        value = int(value)
        lo, hi = _int_range(cls.BITS)
        if not lo <= value <= hi:
            raise ValueError(
                f'{value} is out of range for {cls.__name__} [{lo}, {hi}].')
        return super().__new__(cls, value)


class Byte(_SizedInt):
    """Signed 8-bit integer."""
    BITS = 8
    KIND = ValueKind.BYTE


class Short(_SizedInt):
    """Signed 16-bit integer."""
    BITS = 16
    KIND = ValueKind.SHORT


class Long(_SizedInt):
    """Signed 64-bit integer, even when the value would fit 32 bits."""
    BITS = 64
    KIND = ValueKind.LONG


class Float(float):
    """Single precision float. The value is rounded on construction."""

    def __new__(cls, value: float = 0.0):
        return super().__new__(cls, _round_f32(to_double(value)))


class Char(str):
    """A single character, as opposed to a one-letter string."""

    def __new__(cls, value: str):
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f'Char needs exactly one character, got {value!r}.')
        return super().__new__(cls, value)


def kind_of(value: Any) -> ValueKind | None:
    """Classify a stored value. `None` means "no value at all"."""
    if value is None:
        return None
    # bool is an int subclass, check it first.
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, _SizedInt):
        return value.KIND
    if isinstance(value, int):
        return (
            ValueKind.INT if INT32_MIN <= value <= INT32_MAX
            else ValueKind.LONG)
    if isinstance(value, Float):
        return ValueKind.FLOAT
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if isinstance(value, Char):
        return ValueKind.CHAR
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, ConfigurationSection):
        return ValueKind.SECTION
    return ValueKind.OBJECT


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def narrow(value: int | float, bits: int) -> int:
    """Cast a number to a signed integer of `bits` width.

    Floats are truncated towards zero and saturated at the int32
    (or int64) bounds first, NaN turns into 0.
    Integers simply keep their low `bits` bits.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        lo, hi = _int_range(64 if bits == 64 else 32)
        if math.isinf(value):
            value = hi if value > 0 else lo
        else:
            value = max(lo, min(hi, math.trunc(value)))
    return _wrap(int(value), bits)


def to_double(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError:  # int too large for a double
        return math.copysign(math.inf, value)


def to_float(value: int | float) -> float:
    return _round_f32(to_double(value))


def to_text(value: Any) -> str:
    """Canonical text form of a value, `true`/`false` for booleans."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


_DECIMAL = re.compile(r'[+-]?[0-9]+')


def parse_integral(text: str, bits: int) -> int | None:
    """Parse decimal text, refusing anything out of range for `bits`."""
    if not _DECIMAL.fullmatch(text):
        return None
    value = int(text)
    lo, hi = _int_range(bits)
    return value if lo <= value <= hi else None


def parse_floating(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


ZERO_VALUES: dict[ValueKind, Any] = {
    ValueKind.BOOLEAN: False,
    ValueKind.BYTE: 0,
    ValueKind.SHORT: 0,
    ValueKind.INT: 0,
    ValueKind.LONG: 0,
    ValueKind.FLOAT: 0.0,
    ValueKind.DOUBLE: 0.0,
    ValueKind.CHAR: '\x00',
    ValueKind.STRING: None,
    ValueKind.LIST: None,
    ValueKind.SECTION: None,
    ValueKind.OBJECT: None,
}
