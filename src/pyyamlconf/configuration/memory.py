# -*- encoding: utf-8 -*-
# @File   : memory.py
# @Time   : 2024/10/13 18:27:09
# @Author : Kariko Lin

from collections.abc import Mapping
from typing import Any

from ..abstract import ConfigurationSection
from .arena import SectionArena
from .options import ConfigurationOptions
from .section import MemorySection

__all__ = ['MemoryConfiguration']


class MemoryConfiguration(MemorySection):
    """Root of a configuration tree, kept in memory only.

    `defaults` is another configuration consulted for values missing
    here. It is shared, except when created on the fly by `add_default`
    (then `owns_defaults` is true).
    """

    def __init__(self, defaults: 'MemoryConfiguration | None' = None) -> None:
        self._arena = SectionArena()
        super().__init__(self, self._arena.allocate('', None), '', '')
        self.__defaults = defaults
        self.__owns_defaults = False
        self.__options: ConfigurationOptions | None = None

    def _create_options(self) -> ConfigurationOptions:
        return ConfigurationOptions(self)

    @property
    def options(self) -> Any:
        if self.__options is None:
            self.__options = self._create_options()
        return self.__options

    @property
    def parent(self) -> None:
        return None

    @property
    def defaults(self) -> 'MemoryConfiguration | None':
        return self.__defaults

    @defaults.setter
    def defaults(self, value: 'MemoryConfiguration | None') -> None:
        self.__defaults = value
        self.__owns_defaults = False

    @property
    def owns_defaults(self) -> bool:
        return self.__owns_defaults

    def add_default(self, path: str, value: Any) -> None:
        if path is None:
            raise ValueError('Path cannot be None.')
        if self.__defaults is None:
            self.__defaults = MemoryConfiguration()
            self.__owns_defaults = True
        self.__defaults.set(path, value)

    def add_defaults(
        self, source: Mapping[str, Any] | ConfigurationSection
    ) -> None:
        """Add every entry of `source` as a default.

        A configuration is walked deeply, so its nested values land
        under the same paths.
        """
        if isinstance(source, ConfigurationSection):
            source = source.get_values(True)
        for path, value in source.items():
            self.add_default(path, value)

    def clear(self) -> None:
        """Drop every entry together with its comments."""
        slot = self._ensure_attached('clear entries')
        for key in list(slot.entries):
            self._store(key, None)
