# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/15 21:03:12
# @Author : Kariko Lin

from ..abstract import FileHandler
from ..serialization import SerializationRegistry
from .yaml_config import YamlConfiguration

__all__ = ['YamlFileParser']


class YamlFileParser(FileHandler[YamlConfiguration]):
    def __init__(
        self,
        filename: str,
        encoding: str | None = None, *,
        registry: SerializationRegistry | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._registry = registry

    def read(self) -> YamlConfiguration:
        """Read the file into a new configuration.

        Unlike `YamlConfiguration.load_configuration()`, errors propagate.
        """
        ret = YamlConfiguration(registry=self._registry)
        ret.load(self._fn, self._codec)
        return ret

    def write(self, instance: YamlConfiguration) -> None:
        instance.save(self._fn)

    def __str__(self) -> str:
        return 'YAML configuration: ' + super().__str__()
