# -*- encoding: utf-8 -*-
# @File   : section.py
# @Time   : 2024/10/13 16:02:44
# @Author : Kariko Lin

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from ..abstract import ConfigurationSection
from ..errors import OrphanedSectionError
from .accessors import TypedAccessors
from .arena import SectionSlot
from .comments import validate_lines
from .paths import create_path, resolve
from .values import MISSING

__all__ = ['MemorySection']

logger = logging.getLogger(__name__)


def _snapshot(section: ConfigurationSection) -> dict[str, Any]:
    """Plain nested dict copy of the local contents of `section`."""
    result: dict[str, Any] = {}
    for k, v in section.get_values(False).items():
        result[k] = _snapshot(v) if isinstance(v, ConfigurationSection) else v
    return result


class MemorySection(TypedAccessors, ConfigurationSection):
    """Section of an in-memory configuration tree.

    The object itself is a light proxy; entries and comments live in the
    root's arena. Once detached from the tree (by `set(path, None)`,
    overwriting or re-creating the section) the proxy is an orphan:
    reads find nothing, writes raise `OrphanedSectionError`.
    """

    def __init__(
        self, root: Any, handle: int, name: str, path: str
    ) -> None:
        self._root_config = root
        self._handle = handle
        self._name = name
        self._path = path
        root._arena.slot(handle).proxy = self

    # Tree position

    @property
    def handle(self) -> int:
        return self._handle

    def _slot(self) -> SectionSlot | None:
        return self._root_config._arena.slot(self._handle)

    @property
    def attached(self) -> bool:
        return self._handle in self._root_config._arena

    def _ensure_attached(self, action: str) -> SectionSlot:
        slot = self._slot()
        if slot is None:
            raise OrphanedSectionError(
                f'Cannot {action} in detached section {self._path!r}.')
        return slot

    @property
    def name(self) -> str:
        return self._name

    @property
    def current_path(self) -> str:
        return self._path

    @property
    def root(self) -> Any:
        return self._root_config if self.attached else None

    @property
    def parent(self) -> ConfigurationSection | None:
        slot = self._slot()
        if slot is None or slot.parent is None:
            return None
        parent = self._root_config._arena.slot(slot.parent)
        return None if parent is None else parent.proxy

    # Local storage

    def _entries(self) -> dict[str, Any]:
        slot = self._slot()
        return {} if slot is None else slot.entries

    def _detach(self, value: Any) -> None:
        if isinstance(value, MemorySection) \
                and value._root_config is self._root_config:
            logger.debug('Section %r detached.', value.current_path)
            self._root_config._arena.release(value._handle)

    def _store(self, key: str, value: Any) -> None:
        slot = self._ensure_attached('set values')
        former = slot.entries.get(key)
        if value is None:
            slot.entries.pop(key, None)
            slot.comments.drop(key)
        else:
            slot.entries[key] = value
        if former is not value:
            self._detach(former)

    def _new_child(
        self, key: str, seed: Mapping[Any, Any] | None
    ) -> 'MemorySection':
        slot = self._ensure_attached('create sections')
        if not key:
            raise ValueError('Section name cannot be empty.')
        self._detach(slot.entries.get(key))
        slot.comments.drop(key)
        arena = self._root_config._arena
        child = MemorySection(
            self._root_config,
            arena.allocate(key, self._handle),
            key, create_path(self, key))
        slot.entries[key] = child
        for k, v in (seed or {}).items():
            if isinstance(v, Mapping):
                child.create_section(str(k), v)
            else:
                child.set(str(k), v)
        return child

    # Path-addressed access

    def get(self, path: str, default: Any = MISSING) -> Any:
        """Value at `path`.

        Without `default`, a missing value is looked up in the defaults
        and `None` is returned when there is none either.
        With `default`, it is returned instead and defaults are ignored.
        An empty path means this very section.
        """
        if path is None:
            raise ValueError('Path cannot be None.')
        if not path:
            return self
        section, key = resolve(self, path)
        value = None
        if isinstance(section, MemorySection):
            value = section._entries().get(key)
        elif section is not None:
            value = section.get(key, None)
        if value is not None:
            return value
        return self._get_default(path) if default is MISSING else default

    def _get_default(self, path: str) -> Any:
        root = self.root
        defaults = None if root is None else root.defaults
        if defaults is None:
            return None
        return defaults.get(create_path(self, path))

    def set(self, path: str, value: Any) -> None:
        if not path:
            raise ValueError('Cannot set to an empty path.')
        self._ensure_attached('set values')
        if isinstance(value, ConfigurationSection):
            # sections are never shared between trees, copy the content
            self.create_section(path, _snapshot(value))
            return
        section, key = resolve(self, path, create=value is not None)
        if section is None:
            return
        if isinstance(section, MemorySection):
            section._store(key, value)
        else:
            section.set(key, value)

    def create_section(
        self, path: str, seed: Mapping[Any, Any] | None = None
    ) -> ConfigurationSection:
        if not path:
            raise ValueError('Cannot create a section at an empty path.')
        self._ensure_attached('create sections')
        section, key = resolve(self, path, create=True)
        if isinstance(section, MemorySection):
            return section._new_child(key, seed)
        if section is None:
            raise OrphanedSectionError(
                f'Cannot resolve {path!r} from detached section {self._path!r}.')
        return section.create_section(key, seed)

    def contains(self, path: str, ignore_defaults: bool = False) -> bool:
        value = self.get(path, None) if ignore_defaults else self.get(path)
        return value is not None

    def is_set(self, path: str) -> bool:
        root = self.root
        if root is None:
            return False
        if root.options.copy_defaults:
            return self.contains(path)
        return self.get(path, None) is not None

    # Listings

    def __map_keys(
        self, output: dict[str, None], section: 'MemorySection', deep: bool
    ) -> None:
        for k, v in section._entries().items():
            output[create_path(section, k, self)] = None
            if deep and isinstance(v, MemorySection):
                self.__map_keys(output, v, deep)

    def __map_values(
        self, output: dict[str, Any], section: 'MemorySection', deep: bool
    ) -> None:
        for k, v in section._entries().items():
            path = create_path(section, k, self)
            output.pop(path, None)
            output[path] = v
            if deep and isinstance(v, MemorySection):
                self.__map_values(output, v, deep)

    def get_keys(self, deep: bool = False) -> list[str]:
        """Snapshot of the keys, in insertion order.

        `deep` also lists the keys of nested sections, as paths relative
        to this section. With `copy_defaults`, keys of the defaults come
        first and keep their place when also set locally.
        """
        result: dict[str, None] = {}
        if self.root is None:
            return []
        if self.root.options.copy_defaults:
            defaults = self.get_default_section()
            if defaults is not None:
                result.update(dict.fromkeys(defaults.get_keys(deep)))
        self.__map_keys(result, self, deep)
        return list(result)

    def get_values(self, deep: bool = False) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.root is None:
            return result
        if self.root.options.copy_defaults:
            defaults = self.get_default_section()
            if defaults is not None:
                result.update(defaults.get_values(deep))
        self.__map_values(result, self, deep)
        return result

    # Defaults

    def get_default_section(self) -> ConfigurationSection | None:
        root = self.root
        defaults = None if root is None else root.defaults
        if defaults is not None \
                and defaults.is_configuration_section(self._path):
            return defaults.get_configuration_section(self._path)
        return None

    def add_default(self, path: str, value: Any) -> None:
        if path is None:
            raise ValueError('Path cannot be None.')
        root = self.root
        if root is None:
            raise OrphanedSectionError(
                f'Cannot add defaults through detached section {self._path!r}.')
        root.add_default(create_path(self, path), value)

    # Comments

    def __comment_slot(self, path: str) -> tuple[SectionSlot | None, str]:
        section, key = resolve(self, path)
        if not isinstance(section, MemorySection):
            return None, key
        slot = section._slot()
        if slot is None or key not in slot.entries:
            return None, key
        return slot, key

    def get_comments(self, path: str) -> list[str | None]:
        slot, key = self.__comment_slot(path)
        return [] if slot is None else slot.comments.block(key)

    def get_inline_comments(self, path: str) -> list[str | None]:
        slot, key = self.__comment_slot(path)
        return [] if slot is None else slot.comments.inline(key)

    def set_comments(
        self, path: str, comments: Iterable[str | None] | None
    ) -> None:
        if not path:
            raise ValueError('Cannot set comments of an empty path.')
        lines = validate_lines(comments)
        self._ensure_attached('set comments')
        slot, key = self.__comment_slot(path)
        if slot is not None:
            slot.comments.set_block(key, lines)

    def set_inline_comments(
        self, path: str, comments: Iterable[str | None] | None
    ) -> None:
        if not path:
            raise ValueError('Cannot set comments of an empty path.')
        lines = validate_lines(comments)
        self._ensure_attached('set comments')
        slot, key = self.__comment_slot(path)
        if slot is not None:
            slot.comments.set_inline(key, lines)

    # Mapping protocol, over the local contents only

    def __getitem__(self, path: str) -> Any:
        value = self.get(path, None) if path else None
        if value is None:
            raise KeyError(path)
        return value

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        if not self.contains(path, ignore_defaults=True):
            raise KeyError(path)
        self.set(path, None)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and bool(path) \
            and self.contains(path, ignore_defaults=True)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries()))

    def __len__(self) -> int:
        return len(self._entries())

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        root = self.root
        return (
            f'{type(self).__name__}(path={self._path!r}, '
            f'root={None if root is None else type(root).__name__!r})')
