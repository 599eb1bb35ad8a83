# -*- encoding: utf-8 -*-
# @File   : paths.py
# @Time   : 2024/10/12 15:30:47
# @Author : Kariko Lin

from typing import Any

from ..abstract import ConfigurationSection
from ..errors import OrphanedSectionError

__all__ = ['separator_of', 'resolve', 'create_path']


def separator_of(section: ConfigurationSection) -> str | None:
    root: Any = section.root
    return None if root is None else root.options.path_separator


def resolve(
    section: ConfigurationSection, path: str, create: bool = False
) -> tuple[ConfigurationSection | None, str]:
    """Walk `path` down to the section that directly holds its last segment.

    Reads (`create=False`) only follow sections that already exist and
    give `(None, leaf)` on the first missing or non-section segment.
    Writes create the missing ones, replacing whatever non-section value
    sat in the way.
    """
    separator = separator_of(section)
    if separator is None:
        return None, path
    *nodes, leaf = path.split(separator)
    for node in nodes:
        child = section.get(node, None) if node else None
        if not isinstance(child, ConfigurationSection):
            if not create:
                return None, leaf
            if not node:
                raise ValueError(f'Path {path!r} contains an empty segment.')
            child = section.create_section(node)
        section = child
    return section, leaf


def create_path(
    section: ConfigurationSection,
    key: str | None = None,
    relative_to: ConfigurationSection | None = None
) -> str:
    """Build the path of `key` inside `section`,
    counted from `relative_to` (the root by default)."""
    root = section.root
    if root is None:
        raise OrphanedSectionError('Cannot create path without a root.')
    if relative_to is None:
        relative_to = root
    separator = separator_of(section)
    names: list[str] = []
    node: ConfigurationSection | None = section
    while node is not None and node is not relative_to:
        names.insert(0, node.name)
        node = node.parent
    if key:
        names.append(key)
    return separator.join(names)
