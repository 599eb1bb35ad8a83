# -*- encoding: utf-8 -*-
# @File   : yaml_config.py
# @Time   : 2024/10/15 19:20:57
# @Author : Kariko Lin

import logging
from io import StringIO, TextIOBase
from os import PathLike
from typing import Any

from ruamel.yaml.error import YAMLError

from ..configuration.memory import MemoryConfiguration
from ..errors import InvalidConfigurationError, SerializationError
from ..serialization import SerializationRegistry
from .engine import YamlEngine
from .file import FileConfiguration, FileConfigurationOptions, FileName
from .roundtrip import DocumentTranslator

__all__ = ['YamlConfigurationOptions', 'YamlConfiguration']

logger = logging.getLogger(__name__)


class YamlConfigurationOptions(FileConfigurationOptions):
    def __init__(self, configuration: Any) -> None:
        super().__init__(configuration)
        self.__indent = 2
        self.__width = 80
        self.__max_aliases = 50
        self.__code_point_limit = 3 * 1024 * 1024

    @property
    def indent(self) -> int:
        return self.__indent

    @indent.setter
    def indent(self, value: int) -> None:
        if not 2 <= value <= 9:
            raise ValueError(f'Indent must be between 2 and 9, got {value}.')
        self.__indent = value

    @property
    def width(self) -> int:
        return self.__width

    @width.setter
    def width(self, value: int) -> None:
        if value <= 0:
            raise ValueError(f'Width must be positive, got {value}.')
        self.__width = value

    @property
    def max_aliases(self) -> int:
        return self.__max_aliases

    @max_aliases.setter
    def max_aliases(self, value: int) -> None:
        if value < 0:
            raise ValueError(f'Alias limit cannot be negative, got {value}.')
        self.__max_aliases = value

    @property
    def code_point_limit(self) -> int:
        return self.__code_point_limit

    @code_point_limit.setter
    def code_point_limit(self, value: int) -> None:
        if value < 0:
            raise ValueError(f'Size limit cannot be negative, got {value}.')
        self.__code_point_limit = value

    def engine(self) -> YamlEngine:
        return YamlEngine(
            indent=self.__indent,
            width=self.__width,
            max_aliases=self.__max_aliases,
            code_point_limit=self.__code_point_limit,
            parse_comments=self.parse_comments)


class YamlConfiguration(FileConfiguration):
    """A configuration stored as a YAML document.

    Typed objects inside are looked up in `registry`, an empty one
    unless given.

    ```python
    config = YamlConfiguration()
    config.load_from_string('server:\\n  port: 25565\\n')
    config.get_int('server.port')  # 25565
    ```
    """

    def __init__(
        self,
        defaults: MemoryConfiguration | None = None, *,
        registry: SerializationRegistry | None = None
    ) -> None:
        super().__init__(defaults)
        self.registry = registry or SerializationRegistry()

    def _create_options(self) -> YamlConfigurationOptions:
        return YamlConfigurationOptions(self)

    @property
    def options(self) -> YamlConfigurationOptions:
        return super().options

    def load_from_string(self, contents: str) -> None:
        """Replace everything with what `contents` holds.

        On failure the configuration is left empty and
        `InvalidConfigurationError` is raised.
        """
        self.clear()
        try:
            root = self.options.engine().parse(contents)
        except (YAMLError, RecursionError) as e:
            raise InvalidConfigurationError(f'Malformed YAML: {e}') from e
        if root is None:
            self.options.header = []
            self.options.footer = []
            return
        translator = DocumentTranslator(self.registry)
        header = translator.split_header(root)
        try:
            translator.from_document(root, self)
        except (
            YAMLError, SerializationError, ValueError, RecursionError
        ) as e:
            self.clear()
            raise InvalidConfigurationError(
                f'Cannot load the document: {e}') from e
        self.options.header = header
        self.options.footer = translator.footer_of(root)

    def save_to_string(self) -> str:
        translator = DocumentTranslator(self.registry)
        root = translator.to_document(self)
        translator.attach_header(
            root, self.build_header(), self.options.footer)
        return self.options.engine().emit(root)

    @classmethod
    def load_configuration(
        cls,
        source: FileName | TextIOBase | StringIO, *,
        registry: SerializationRegistry | None = None
    ) -> 'YamlConfiguration':
        """Load a file or a text stream, never failing.

        Problems are logged, and an empty configuration comes back then.
        """
        config = cls(registry=registry)
        try:
            if isinstance(source, (str, PathLike)):
                config.load(source)
            else:
                config.load_stream(source)
        except (OSError, InvalidConfigurationError):
            logger.exception('Cannot load configuration from %s.', source)
        return config
