# -*- encoding: utf-8 -*-
# @File   : options.py
# @Time   : 2024/10/12 17:10:58
# @Author : Kariko Lin

from typing import Any

__all__ = ['ConfigurationOptions']


class ConfigurationOptions:
    """Behaviour switches of an in-memory configuration.

    `path_separator` splits paths into section names (default `.`);
    `copy_defaults` makes key/value listings and `is_set` also look at
    the defaults.
    """

    def __init__(self, configuration: Any) -> None:
        self.__configuration = configuration
        self.__path_separator = '.'
        self.__copy_defaults = False

    @property
    def configuration(self) -> Any:
        return self.__configuration

    @property
    def path_separator(self) -> str:
        return self.__path_separator

    @path_separator.setter
    def path_separator(self, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(
                f'Path separator must be a single character, got {value!r}.')
        self.__path_separator = value

    @property
    def copy_defaults(self) -> bool:
        return self.__copy_defaults

    @copy_defaults.setter
    def copy_defaults(self, value: bool) -> None:
        self.__copy_defaults = bool(value)
