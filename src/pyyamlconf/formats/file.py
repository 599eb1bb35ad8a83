# -*- encoding: utf-8 -*-
# @File   : file.py
# @Time   : 2024/10/15 15:44:06
# @Author : Kariko Lin

import logging
from abc import abstractmethod
from collections.abc import Iterable
from io import StringIO, TextIOBase
from os import PathLike, makedirs
from os.path import dirname
from typing import Any

import chardet

from ..configuration.comments import validate_lines
from ..configuration.memory import MemoryConfiguration
from ..configuration.options import ConfigurationOptions

__all__ = ['FileConfigurationOptions', 'FileConfiguration']

logger = logging.getLogger(__name__)

type FileName = str | PathLike[str]


class FileConfigurationOptions(ConfigurationOptions):
    """Adds document level comments to the options.

    `header` and `footer` are comment lines around the document,
    `copy_header` lets a file based defaults configuration supply the
    header, `parse_comments` turns comment reading on or off.
    """

    def __init__(self, configuration: Any) -> None:
        super().__init__(configuration)
        self.__header: list[str | None] = []
        self.__footer: list[str | None] = []
        self.__copy_header = True
        self.__parse_comments = True

    @property
    def header(self) -> list[str | None]:
        return list(self.__header)

    @header.setter
    def header(self, value: Iterable[str | None] | None) -> None:
        self.__header = list(validate_lines(value))

    @property
    def footer(self) -> list[str | None]:
        return list(self.__footer)

    @footer.setter
    def footer(self, value: Iterable[str | None] | None) -> None:
        self.__footer = list(validate_lines(value))

    @property
    def copy_header(self) -> bool:
        return self.__copy_header

    @copy_header.setter
    def copy_header(self, value: bool) -> None:
        self.__copy_header = bool(value)

    @property
    def parse_comments(self) -> bool:
        return self.__parse_comments

    @parse_comments.setter
    def parse_comments(self, value: bool) -> None:
        self.__parse_comments = bool(value)


class FileConfiguration(MemoryConfiguration):
    """Configuration that can be read from and written to text."""

    def _create_options(self) -> FileConfigurationOptions:
        return FileConfigurationOptions(self)

    @abstractmethod
    def load_from_string(self, contents: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_to_string(self) -> str:
        raise NotImplementedError

    @staticmethod
    def _decode_file(filename: FileName) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        logger.warning(
            'Reading %s as %s (confidence %.2f).',
            filename, codec['encoding'], codec['confidence'])
        return StringIO(raw.decode(codec['encoding'], errors='replace'))

    def load_stream(self, buf: TextIOBase | StringIO) -> None:
        self.load_from_string(buf.read())

    def load(self, filename: FileName, encoding: str | None = None) -> None:
        """Load a file, UTF-8 unless told otherwise.

        Should the bytes not match the encoding, `chardet` takes a guess.
        """
        try:
            with open(filename, 'r', encoding=encoding or 'utf-8-sig') as fp:
                contents = fp.read()
        except UnicodeDecodeError:
            contents = self._decode_file(filename).read()
        self.load_from_string(contents)

    def save_stream(self, buf: TextIOBase | StringIO) -> None:
        buf.write(self.save_to_string())

    def save(self, filename: FileName) -> None:
        """Write the document as UTF-8, creating missing directories."""
        contents = self.save_to_string()
        if folder := dirname(filename):
            makedirs(folder, exist_ok=True)
        with open(filename, 'w', encoding='utf-8') as fp:
            fp.write(contents)

    def build_header(self) -> list[str | None]:
        """Header to write, possibly taken from the defaults."""
        if self.options.copy_header:
            defaults = self.defaults
            if isinstance(defaults, FileConfiguration):
                header = defaults.build_header()
                if header:
                    return header
        return self.options.header
