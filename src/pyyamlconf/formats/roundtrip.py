# -*- encoding: utf-8 -*-
# @File   : roundtrip.py
# @Time   : 2024/10/15 12:08:41
# @Author : Kariko Lin

"""Section tree <-> round-trip document.

Comments travel with the key they belong to, in the `ca` slots of the
mapping holding that key. The root mapping keeps the header (start
comments) and the footer (end comments).
"""

from collections.abc import Iterable
from typing import Any

from ruamel.yaml.comments import CommentedMap

from ..abstract import ConfigurationSection
from ..configuration.values import to_text
from ..serialization import SerializationRegistry
from .codec import ValueDecoder, ValueEncoder, is_typed_mapping
from .engine import (
    block_comments, set_block_comments,
    inline_comments, set_inline_comments,
    start_comments, set_start_comments,
    end_comments, set_end_comments
)

__all__ = ['DocumentTranslator']


def _key_text(key: Any) -> str:
    return 'null' if key is None else to_text(key)


def _strip_tail(lines: list[str | None]) -> list[str | None]:
    while lines and lines[-1] is None:
        lines.pop()
    return lines


class DocumentTranslator:
    def __init__(self, registry: SerializationRegistry) -> None:
        self.registry = registry

    # Loading

    def from_document(
        self, root: CommentedMap, section: ConfigurationSection
    ) -> None:
        """Fill `section` with the entries of a loaded document."""
        self.__load(ValueDecoder(self.registry), root, section, set())

    def __load(
        self,
        decoder: ValueDecoder,
        mapping: CommentedMap,
        section: ConfigurationSection,
        active: set[int]
    ) -> None:
        if id(mapping) in active:
            raise ValueError('found a recursive mapping')
        active = active | {id(mapping)}
        for key, value in mapping.items():
            name = _key_text(decoder.decode(key))
            if isinstance(value, CommentedMap) \
                    and not is_typed_mapping(value):
                self.__load(
                    decoder, value, section.create_section(name), active)
            else:
                section.set(name, decoder.decode(value))
            section.set_comments(name, block_comments(mapping, key))
            section.set_inline_comments(name, inline_comments(mapping, key))

    def split_header(self, root: CommentedMap) -> list[str | None]:
        """Take the header off the root.

        Without own start comments, the block comments of the first key
        up to their last blank line are the header.
        """
        if not start_comments(root) and root:
            key = next(iter(root))
            lines = block_comments(root, key)
            blanks = [i for i, j in enumerate(lines) if j is None]
            if blanks:
                set_start_comments(root, lines[:blanks[-1] + 1])
                set_block_comments(root, key, lines[blanks[-1] + 1:])
        return _strip_tail(start_comments(root))

    @staticmethod
    def footer_of(root: CommentedMap) -> list[str | None]:
        return end_comments(root)

    # Saving

    def to_document(self, section: ConfigurationSection) -> CommentedMap:
        return self.__dump(ValueEncoder(self.registry), section)

    def __dump(
        self, encoder: ValueEncoder, section: ConfigurationSection
    ) -> CommentedMap:
        ret = CommentedMap()
        for key, value in section.get_values(False).items():
            if isinstance(value, ConfigurationSection):
                ret[key] = self.__dump(encoder, value)
            else:
                ret[key] = encoder.encode(value)
            set_block_comments(ret, key, section.get_comments(key))
            set_inline_comments(ret, key, section.get_inline_comments(key))
        if not ret:
            ret.fa.set_flow_style()
        return ret

    @staticmethod
    def attach_header(
        root: CommentedMap,
        header: Iterable[str | None],
        footer: Iterable[str | None]
    ) -> None:
        """Put header and footer on the root.

        A non-empty header is followed by one blank line.
        """
        lines = list(header)
        if lines:
            lines.append(None)
        set_start_comments(root, lines)
        set_end_comments(root, footer)
