# -*- encoding: utf-8 -*-
# @File   : comments.py
# @Time   : 2024/10/12 16:05:13
# @Author : Kariko Lin

"""Per-key comment lines of one section.

Every line is either a `str` (the comment text without `#` and the one
space after it) or `None`, standing for a blank line.
An empty string is a bare `#` line.
"""

from collections.abc import Iterable

__all__ = ['CommentLines', 'validate_lines', 'CommentStore']

type CommentLines = tuple[str | None, ...]


def validate_lines(lines: Iterable[str | None] | None) -> CommentLines:
    if lines is None:
        return ()
    if isinstance(lines, str):
        raise TypeError('Comment lines must be given as a list, not a string.')
    result = tuple(lines)
    for i in result:
        if i is not None and not isinstance(i, str):
            raise TypeError(
                f'Comment lines must be str or None, got {type(i).__name__}.')
    return result


class CommentStore:
    def __init__(self) -> None:
        self.__block: dict[str, CommentLines] = {}
        self.__inline: dict[str, CommentLines] = {}

    def block(self, key: str) -> list[str | None]:
        return list(self.__block.get(key, ()))

    def inline(self, key: str) -> list[str | None]:
        return list(self.__inline.get(key, ()))

    @staticmethod
    def __put(
        store: dict[str, CommentLines],
        key: str,
        lines: Iterable[str | None] | None
    ) -> None:
        lines = validate_lines(lines)
        if lines:
            store[key] = lines
        else:
            store.pop(key, None)

    def set_block(
        self, key: str, lines: Iterable[str | None] | None
    ) -> None:
        self.__put(self.__block, key, lines)

    def set_inline(
        self, key: str, lines: Iterable[str | None] | None
    ) -> None:
        self.__put(self.__inline, key, lines)

    def drop(self, key: str) -> None:
        self.__block.pop(key, None)
        self.__inline.pop(key, None)

    def clear(self) -> None:
        self.__block.clear()
        self.__inline.clear()

    def __contains__(self, key: str) -> bool:
        return key in self.__block or key in self.__inline
