# -*- encoding: utf-8 -*-
# @File   : serialization.py
# @Time   : 2024/10/13 14:48:20
# @Author : Kariko Lin

"""Typed objects stored inside a configuration.

An object is written as a mapping carrying its type alias under the
reserved key `==`, followed by whatever `serialize()` returns.
Reading it back needs the alias to be registered, together with a
factory taking that mapping, in a `SerializationRegistry`.
"""

import logging
import warnings
from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import SerializationError

__all__ = [
    'SERIALIZED_TYPE_KEY', 'ConfigurationSerializable',
    'TypeHandle', 'SerializationRegistry'
]

SERIALIZED_TYPE_KEY = '=='

logger = logging.getLogger(__name__)


class ConfigurationSerializable(metaclass=ABCMeta):
    """Object that can be stored in a configuration as a mapping.

    Set `serializable_as` on the class to write a short alias instead of
    the fully qualified class name.
    """
    serializable_as: str | None = None

    @abstractmethod
    def serialize(self) -> dict[str, Any]:
        raise NotImplementedError


type Factory = Callable[[Mapping[str, Any]], ConfigurationSerializable]


@dataclass(frozen=True)
class TypeHandle:
    type: type
    alias: str
    factory: Factory


def qualified_name(cls: type) -> str:
    return f'{cls.__module__}.{cls.__qualname__}'


class SerializationRegistry:
    def __init__(self) -> None:
        self.__aliases: dict[str, TypeHandle] = {}

    @staticmethod
    def default_alias(cls: type) -> str:
        return getattr(cls, 'serializable_as', None) or qualified_name(cls)

    def register(
        self,
        cls: type,
        factory: Factory | None = None,
        alias: str | None = None
    ) -> TypeHandle:
        """Register `cls` under `alias` and under its qualified name.

        `factory` defaults to the class itself, called with the mapping.
        """
        if not (isinstance(cls, type)
                and issubclass(cls, ConfigurationSerializable)):
            raise TypeError(f'{cls!r} is not a ConfigurationSerializable.')
        alias = alias or self.default_alias(cls)
        handle = TypeHandle(type=cls, alias=alias, factory=factory or cls)
        for name in dict.fromkeys((alias, qualified_name(cls))):
            former = self.__aliases.get(name)
            if former is not None and former.type is not cls:
                warnings.warn(
                    f'Alias {name!r} of {former.type.__name__} '
                    f'is taken over by {cls.__name__}.')
            self.__aliases[name] = handle
        logger.debug('Registered %s as %r.', cls.__name__, alias)
        return handle

    def unregister(self, alias: str) -> None:
        self.__aliases.pop(alias, None)

    def unregister_class(self, cls: type) -> None:
        for i in [k for k, v in self.__aliases.items() if v.type is cls]:
            del self.__aliases[i]

    def resolve(self, alias: str) -> TypeHandle | None:
        return self.__aliases.get(alias)

    def alias_for(self, cls: type) -> str:
        """Alias written for instances of `cls`.

        The first alias `cls` was registered under wins,
        unregistered classes fall back to their default alias.
        """
        for handle in self.__aliases.values():
            if handle.type is cls:
                return handle.alias
        return self.default_alias(cls)

    def deserialize(
        self, handle: TypeHandle, mapping: Mapping[str, Any]
    ) -> ConfigurationSerializable:
        try:
            result = handle.factory(mapping)
        except Exception as e:
            raise SerializationError(
                f'Could not build {handle.type.__name__} '
                f'from {handle.alias!r}: {e}') from e
        if result is None:
            raise SerializationError(
                f'Factory of {handle.alias!r} returned nothing.')
        return result

    def deserialize_object(
        self, mapping: Mapping[str, Any]
    ) -> ConfigurationSerializable:
        """Build the object a type-tagged mapping describes.

        The mapping is handed to the factory as it is, type key included.
        """
        if SERIALIZED_TYPE_KEY not in mapping:
            raise SerializationError(
                f'Mapping has no type key ({SERIALIZED_TYPE_KEY!r}).')
        alias = mapping[SERIALIZED_TYPE_KEY]
        if not isinstance(alias, str):
            raise SerializationError(f'Type alias must be text, got {alias!r}.')
        handle = self.resolve(alias)
        if handle is None:
            raise SerializationError(f'Unknown type alias {alias!r}.')
        return self.deserialize(handle, mapping)

    def __contains__(self, alias: str) -> bool:
        return alias in self.__aliases

    def __len__(self) -> int:
        return len(self.__aliases)
