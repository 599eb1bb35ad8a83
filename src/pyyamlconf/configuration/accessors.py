# -*- encoding: utf-8 -*-
# @File   : accessors.py
# @Time   : 2024/10/13 10:21:05
# @Author : Kariko Lin

"""Typed getters shared by every section.

For each kind there are three flavours:

- `is_<kind>(path)` tells whether the value (defaults considered) is
  exactly of that kind;
- `get_<kind>(path)` coerces the value, falling back to a default of
  a compatible kind, then to the kind's zero value;
- `get_<kind>(path, default)` coerces the value, else gives `default`
  back untouched. The defaults are not consulted then.

Lookups never raise for missing keys or mismatching kinds.
"""

from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from ..abstract import ConfigurationSection
from ..serialization import ConfigurationSerializable
from .values import (
    MISSING, ValueKind, Char,
    kind_of, is_number, narrow, to_float, to_double, to_text,
    parse_integral, parse_floating, ZERO_VALUES
)

__all__ = ['TypedAccessors']

_ABSENT = object()


def _is_instance(value: Any, cls: type) -> bool:
    # bool is an int, but a flag never counts as a number here.
    if isinstance(value, bool):
        return cls is bool or cls is object
    return isinstance(value, cls)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _integral_element(bits: int) -> Callable[[Any], int | None]:
    def coerce(obj: Any) -> int | None:
        if isinstance(obj, bool):
            return None
        if isinstance(obj, Char):
            return narrow(ord(obj), bits)
        if isinstance(obj, str):
            return parse_integral(obj, bits)
        if is_number(obj):
            return narrow(obj, bits)
        return None
    return coerce


def _floating_element(single: bool) -> Callable[[Any], float | None]:
    cast = to_float if single else to_double

    def coerce(obj: Any) -> float | None:
        if isinstance(obj, bool):
            return None
        if isinstance(obj, Char):
            return cast(ord(obj))
        if isinstance(obj, str):
            value = parse_floating(obj)
            return None if value is None else cast(value)
        if is_number(obj):
            return cast(obj)
        return None
    return coerce


def _boolean_element(obj: Any) -> bool | None:
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, str) and not isinstance(obj, Char):
        return obj.lower() == 'true'
    return None


def _char_element(obj: Any) -> str | None:
    if isinstance(obj, str) and len(obj) == 1:
        return Char(obj)
    return None


def _string_element(obj: Any) -> str | None:
    return None if obj is None else to_text(obj)


def _map_element(obj: Any) -> Mapping | None:
    return obj if isinstance(obj, Mapping) else None


class TypedAccessors(metaclass=ABCMeta):
    # Mixed into sections; relies on their `get` and `create_section`.

    @abstractmethod
    def _get_default(self, path: str) -> Any:
        ...

    def __read(
        self,
        path: str,
        default: Any,
        accepts: Callable[[Any], bool],
        convert: Callable[[Any], Any],
        zero: Any
    ) -> Any:
        if default is MISSING:
            fallback = self._get_default(path)
            default = convert(fallback) if accepts(fallback) else zero
        value = self.get(path, _ABSENT)
        if value is _ABSENT or not accepts(value):
            return default
        return convert(value)

    def __kind(self, path: str) -> ValueKind | None:
        return kind_of(self.get(path))

    # Primitive values

    def is_boolean(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.BOOLEAN

    def get_boolean(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default,
            lambda x: isinstance(x, bool), bool,
            ZERO_VALUES[ValueKind.BOOLEAN])

    def is_byte(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.BYTE

    def get_byte(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, is_number, lambda x: narrow(x, 8),
            ZERO_VALUES[ValueKind.BYTE])

    def is_short(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.SHORT

    def get_short(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, is_number, lambda x: narrow(x, 16),
            ZERO_VALUES[ValueKind.SHORT])

    def is_int(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.INT

    def get_int(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, is_number, lambda x: narrow(x, 32),
            ZERO_VALUES[ValueKind.INT])

    def is_long(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.LONG

    def get_long(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, is_number, lambda x: narrow(x, 64),
            ZERO_VALUES[ValueKind.LONG])

    def is_float(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.FLOAT

    def get_float(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, is_number, to_float,
            ZERO_VALUES[ValueKind.FLOAT])

    def is_double(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.DOUBLE

    def get_double(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, is_number, to_double,
            ZERO_VALUES[ValueKind.DOUBLE])

    def is_char(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.CHAR

    def get_char(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, lambda x: isinstance(x, Char), Char,
            ZERO_VALUES[ValueKind.CHAR])

    def is_string(self, path: str) -> bool:
        return self.__kind(path) == ValueKind.STRING

    def get_string(self, path: str, default: Any = MISSING) -> Any:
        """Text form of whatever is stored, not only of strings."""
        return self.__read(
            path, default, lambda x: x is not None, to_text,
            ZERO_VALUES[ValueKind.STRING])

    # Containers and objects

    def is_list(self, path: str) -> bool:
        return _is_list(self.get(path))

    def get_list(self, path: str, default: Any = MISSING) -> Any:
        return self.__read(
            path, default, _is_list, lambda x: x,
            ZERO_VALUES[ValueKind.LIST])

    def is_configuration_section(self, path: str) -> bool:
        return isinstance(self.get(path), ConfigurationSection)

    def get_configuration_section(
        self, path: str
    ) -> ConfigurationSection | None:
        """Section stored at `path`.

        When only the defaults have a section there, an empty local one
        is created in its place, so that later writes land next to the
        defaults.
        """
        value = self.get(path, None)
        if value is not None:
            return value if isinstance(value, ConfigurationSection) else None
        if isinstance(self._get_default(path), ConfigurationSection):
            return self.create_section(path)
        return None

    def is_object(self, path: str, cls: type) -> bool:
        return _is_instance(self.get(path), cls)

    def get_object(
        self, path: str, cls: type, default: Any = MISSING
    ) -> Any:
        return self.__read(
            path, default, lambda x: _is_instance(x, cls), lambda x: x,
            None)

    def get_serializable(
        self, path: str, cls: type, default: Any = MISSING
    ) -> Any:
        if not (isinstance(cls, type)
                and issubclass(cls, ConfigurationSerializable)):
            raise TypeError(f'{cls!r} is not a ConfigurationSerializable.')
        return self.get_object(path, cls, default)

    # Lists, element by element; elements that do not fit are dropped.

    def __elements(
        self, path: str, coerce: Callable[[Any], Any]
    ) -> list[Any]:
        values = self.get_list(path)
        if not _is_list(values):
            return []
        return [j for j in map(coerce, values) if j is not None]

    def get_boolean_list(self, path: str) -> list[bool]:
        return self.__elements(path, _boolean_element)

    def get_byte_list(self, path: str) -> list[int]:
        return self.__elements(path, _integral_element(8))

    def get_short_list(self, path: str) -> list[int]:
        return self.__elements(path, _integral_element(16))

    def get_int_list(self, path: str) -> list[int]:
        return self.__elements(path, _integral_element(32))

    def get_long_list(self, path: str) -> list[int]:
        return self.__elements(path, _integral_element(64))

    def get_float_list(self, path: str) -> list[float]:
        return self.__elements(path, _floating_element(True))

    def get_double_list(self, path: str) -> list[float]:
        return self.__elements(path, _floating_element(False))

    def get_char_list(self, path: str) -> list[str]:
        return self.__elements(path, _char_element)

    def get_string_list(self, path: str) -> list[str]:
        return self.__elements(path, _string_element)

    def get_map_list(self, path: str) -> list[Mapping]:
        return self.__elements(path, _map_element)
