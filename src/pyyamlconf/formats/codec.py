# -*- encoding: utf-8 -*-
# @File   : codec.py
# @Time   : 2024/10/14 23:52:30
# @Author : Kariko Lin

"""Configuration values <-> ruamel.yaml round-trip values.

A round-trip load hands out `CommentedMap`, `ScalarFloat`,
`LiteralScalarString` and friends. `ValueDecoder` turns them into plain
values, `ValueEncoder` goes the other way before a dump.
Both are bound to the registry of typed objects in use.
"""

import math
from collections.abc import Mapping
from typing import Any

from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.nodes import ScalarNode
from ruamel.yaml.representer import RepresenterError, RoundTripRepresenter
from ruamel.yaml.scalarbool import ScalarBoolean

from ..abstract import ConfigurationSection
from ..configuration.values import Float
from ..serialization import (
    SERIALIZED_TYPE_KEY, ConfigurationSerializable, SerializationRegistry
)

__all__ = [
    'ConfigRepresenter', 'ValueDecoder', 'ValueEncoder', 'is_typed_mapping'
]


def is_typed_mapping(data: Any) -> bool:
    """Whether a mapping stands for a registered object."""
    return isinstance(data, Mapping) and SERIALIZED_TYPE_KEY in data


class ConfigRepresenter(RoundTripRepresenter):
    def ignore_aliases(self, data: Any) -> bool:
        # each occurrence is written out in full.
        return True

    def represent_single(self, data: Float) -> ScalarNode:
        """Shortest text that reads back as the same single precision value."""
        if math.isnan(data) or math.isinf(data):
            return self.represent_float(float(data))
        text = repr(float(data))
        for digits in range(1, 10):
            candidate = f'{data:.{digits}g}'
            if Float(float(candidate)) == data:
                text = candidate
                break
        if '.' not in text:
            text = text.replace('e', '.0e', 1) if 'e' in text else text + '.0'
        return self.represent_scalar('tag:yaml.org,2002:float', text)


ConfigRepresenter.add_representer(Float, ConfigRepresenter.represent_single)


class ValueDecoder:
    def __init__(self, registry: SerializationRegistry) -> None:
        self.registry = registry
        self.__active: set[int] = set()

    def decode(self, data: Any) -> Any:
        """Plain Python value of a loaded one.

        Mappings carrying the type key are handed to the registry.
        Structures containing themselves are refused with `ValueError`.
        """
        if isinstance(data, bool):
            return data
        if isinstance(data, ScalarBoolean):
            return bool(data)
        if isinstance(data, int):
            return int(data)
        if isinstance(data, float):
            return float(data)
        if isinstance(data, str):
            return str(data)
        if not isinstance(data, (list, Mapping)):
            return data
        if id(data) in self.__active:
            raise ValueError('found a recursive structure')
        self.__active.add(id(data))
        try:
            if isinstance(data, list):
                return [self.decode(i) for i in data]
            return self.__decode_mapping(data)
        finally:
            self.__active.discard(id(data))

    def __decode_mapping(self, data: Mapping[Any, Any]) -> Any:
        ret: dict[Any, Any] = {}
        for k, v in data.items():
            key = self.decode(k)
            try:
                hash(key)
            except TypeError as e:
                raise ValueError(f'found unhashable key {key!r}') from e
            ret[key] = self.decode(v)
        if SERIALIZED_TYPE_KEY in ret:
            return self.registry.deserialize_object(
                {str(k): v for k, v in ret.items()})
        return ret


class ValueEncoder:
    def __init__(self, registry: SerializationRegistry) -> None:
        self.registry = registry
        self.__active: set[int] = set()

    def encode(self, value: Any) -> Any:
        """Value ready for a round-trip dump.

        Sized wrappers lose their wrapper, except `Float` which keeps
        its shortest text. Sections and typed objects become mappings.
        """
        if value is None or isinstance(value, (bool, Float)):
            return value
        if isinstance(value, int):
            return int(value)
        if isinstance(value, float):
            return float(value)
        if isinstance(value, str):
            return str(value)
        if id(value) in self.__active:
            raise RepresenterError(f'cannot represent a recursive {value!r}')
        self.__active.add(id(value))
        try:
            return self.__encode_container(value)
        finally:
            self.__active.discard(id(value))

    def __encode_container(self, value: Any) -> Any:
        if isinstance(value, ConfigurationSection):
            return self.mapping(value.get_values(False))
        if isinstance(value, ConfigurationSerializable):
            values: dict[str, Any] = {
                SERIALIZED_TYPE_KEY: self.registry.alias_for(type(value))}
            values.update(value.serialize())
            return self.mapping(values)
        if isinstance(value, (list, tuple)):
            ret = CommentedSeq(self.encode(i) for i in value)
            if not ret:
                ret.fa.set_flow_style()
            return ret
        if isinstance(value, Mapping):
            return self.mapping(value)
        # left for the representer to refuse.
        return value

    def mapping(self, values: Mapping[Any, Any]) -> CommentedMap:
        ret = CommentedMap()
        for k, v in values.items():
            ret[self.encode(k)] = self.encode(v)
        if not ret:
            ret.fa.set_flow_style()
        return ret
