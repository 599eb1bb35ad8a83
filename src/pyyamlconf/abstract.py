# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from collections.abc import Mapping, MutableMapping
from typing import Any


class ConfigurationSection(MutableMapping[str, Any]):
    """A node of the configuration tree.

    Keys are addressed by paths joined with the root's path separator,
    so `section.get('a.b')` walks into the child section `a` first.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def current_path(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def root(self) -> 'ConfigurationSection | None':
        raise NotImplementedError

    @property
    @abstractmethod
    def parent(self) -> 'ConfigurationSection | None':
        raise NotImplementedError

    @abstractmethod
    def get(self, path: str, default: Any = ...) -> Any:
        raise NotImplementedError

    @abstractmethod
    def set(self, path: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_section(
        self, path: str, seed: Mapping[Any, Any] | None = None
    ) -> 'ConfigurationSection':
        raise NotImplementedError

    @abstractmethod
    def contains(self, path: str, ignore_defaults: bool = False) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_set(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_keys(self, deep: bool = False) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def get_values(self, deep: bool = False) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_default_section(self) -> 'ConfigurationSection | None':
        raise NotImplementedError

    @abstractmethod
    def add_default(self, path: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_comments(self, path: str) -> list[str | None]:
        raise NotImplementedError

    @abstractmethod
    def set_comments(self, path: str, comments: list[str | None] | None) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_inline_comments(self, path: str) -> list[str | None]:
        raise NotImplementedError

    @abstractmethod
    def set_inline_comments(
        self, path: str, comments: list[str | None] | None
    ) -> None:
        raise NotImplementedError


class FileHandler[T](metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
