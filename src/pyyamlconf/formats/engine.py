# -*- encoding: utf-8 -*-
# @File   : engine.py
# @Time   : 2024/10/14 21:36:18
# @Author : Kariko Lin

"""YAML text <-> ruamel.yaml round-trip document, comments included.

ruamel.yaml keeps comments, but hangs each one on whatever token the
scanner met before it: a comment above a key usually ends up on the
value of the previous key. The loader here also logs the line of every
comment the scanner reads, then re-hangs them by line, using the
line/column data ruamel.yaml records for each key:

- block comments go before a key (`ca.items[key][1]`);
- an inline comment goes after the value (`yaml_add_eol_comment`);
- the root keeps the lines above the document in `ca.comment[1]`
  and the lines after it in `ca.end`.

A comment line is kept as its text (one space after `#` removed),
a blank line as `None`. Emission dumps that very shape back.
"""

from bisect import bisect_right
from collections.abc import Iterable
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedBase, CommentedMap, CommentedSeq
from ruamel.yaml.composer import Composer, ComposerError
from ruamel.yaml.error import CommentMark, YAMLError
from ruamel.yaml.events import AliasEvent
from ruamel.yaml.scanner import RoundTripScanner
from ruamel.yaml.tokens import CommentToken

from .codec import ConfigRepresenter

__all__ = [
    'YamlEngine',
    'block_comments', 'set_block_comments',
    'inline_comments', 'set_inline_comments',
    'start_comments', 'set_start_comments',
    'end_comments', 'set_end_comments',
    'comment_line'
]

type CommentList = list[str | None]


def comment_line(text: str) -> str:
    return f'# {text}' if text else '#'


def _text_of(comment: str) -> str | None:
    """`'# text'` -> `'text'`, blank -> `None`."""
    comment = comment.strip()
    if not comment:
        return None
    comment = comment[1:].rstrip()
    return comment[1:] if comment.startswith(' ') else comment


def _split(lines: Iterable[str | None]) -> CommentList:
    ret: CommentList = []
    for i in lines:
        ret.extend([None] if i is None else i.split('\n'))
    return ret


def _strip_tail(lines: CommentList) -> CommentList:
    while lines and lines[-1] is None:
        lines.pop()
    return lines


def _tokens(lines: Iterable[str | None], column: int = 0) -> list[CommentToken]:
    return [
        CommentToken(
            '\n' if i is None else comment_line(i) + '\n', CommentMark(column))
        for i in _split(lines)]


def block_comments(mapping: CommentedMap, key: Any) -> CommentList:
    slots = mapping.ca.items.get(key)
    if not slots or not slots[1]:
        return []
    return [_text_of(i.value) for i in slots[1]]


def set_block_comments(
    mapping: CommentedMap, key: Any, lines: Iterable[str | None]
) -> None:
    tokens = _tokens(lines)
    if key not in mapping.ca.items and not tokens:
        return
    slots = mapping.ca.items.setdefault(key, [None, None, None, None])
    slots[1] = tokens or None


def inline_comments(mapping: CommentedMap, key: Any) -> CommentList:
    slots = mapping.ca.items.get(key)
    if not slots or slots[2] is None:
        return []
    return [_text_of(slots[2].value)]


def set_inline_comments(
    mapping: CommentedMap, key: Any, lines: Iterable[str | None]
) -> None:
    texts = [comment_line(i) for i in lines if i is not None]
    slots = mapping.ca.items.get(key)
    if slots:
        slots[2] = None
    if texts:
        mapping.yaml_add_eol_comment(' '.join(texts), key, column=0)


def start_comments(root: CommentedMap) -> CommentList:
    comment = root.ca.comment
    if not comment or not comment[1]:
        return []
    return [_text_of(i.value) for i in comment[1]]


def set_start_comments(root: CommentedMap, lines: Iterable[str | None]) -> None:
    if root.ca.comment is None:
        root.ca.comment = [None, []]
    root.ca.comment[1] = _tokens(lines)


def end_comments(root: CommentedMap) -> CommentList:
    return [_text_of(i.value) for i in root.ca.end or ()]


def set_end_comments(root: CommentedMap, lines: Iterable[str | None]) -> None:
    root.ca.end = _tokens(lines)


class _CommentLog:
    """Comments seen by the scanner, by line.

    `lines` holds whole-line comments and blank lines,
    `inline` the comments following some content on their line.
    """

    def __init__(self) -> None:
        self.lines: dict[int, str | None] = {}
        self.inline: dict[int, str] = {}

    def add(self, value: str, line: int, inline: bool) -> None:
        # a comment token is `#...` plus the blank lines after it,
        # a blank token is line breaks only.
        parts = value.split('\n')
        text = _text_of(parts[0])
        if text is None:
            self.add_blanks(line, value.count('\n'))
            return
        if inline:
            self.inline[line] = text
        else:
            self.lines[line] = text
        self.add_blanks(line + 1, len(parts) - 2)

    def add_blanks(self, first: int, count: int) -> None:
        for i in range(first, first + count):
            self.lines.setdefault(i, None)


class _Scanner(RoundTripScanner):
    def scan_to_next_token(self) -> Any:
        mark = self.reader.get_mark()
        found = super().scan_to_next_token()
        if found is not None:
            value, start, _ = found
            self.loader.comment_log.add(
                value, start.line, start.line == mark.line and mark.column > 0)
        return found

    def scan_plain(self) -> Any:
        token = super().scan_plain()
        # blank lines right after a plain scalar are eaten with it.
        trailing = (token.comment or [None])[0]
        if trailing is not None:
            self.loader.comment_log.add_blanks(
                token.end_mark.line + 1, trailing.value.count('\n') - 1)
        return token

    def scan_block_scalar(self, style: Any, rt: Any = True) -> Any:
        token = super().scan_block_scalar(style, rt=rt)
        trailing = (token.comment or [None])[0]
        if trailing is not None:
            breaks = len(trailing.value) - len(trailing.value.lstrip('\n'))
            self.loader.comment_log.add_blanks(
                token.end_mark.line - breaks, breaks)
        return token

    def scan_block_scalar_ignored_line(self, start_mark: Any) -> Any:
        line = self.reader.get_mark().line
        comment = super().scan_block_scalar_ignored_line(start_mark)
        if comment is not None:
            self.loader.comment_log.add(comment.strip(), line, True)
        return comment


class _Composer(Composer):
    def compose_node(self, parent: Any, index: Any) -> Any:
        if self.parser.check_event(AliasEvent):
            self.loader.aliases += 1
            if self.loader.aliases > self.loader.max_aliases:
                raise ComposerError(
                    None, None,
                    f'number of aliases exceeds {self.loader.max_aliases}',
                    self.parser.peek_event().start_mark)
        return super().compose_node(parent, index)


class _Loader(YAML):
    def __init__(self, max_aliases: int) -> None:
        super().__init__(typ='rt', pure=True)
        self.Scanner = _Scanner
        self.Composer = _Composer
        self.allow_duplicate_keys = True
        self.max_aliases = max_aliases
        self.aliases = 0
        self.comment_log = _CommentLog()


def _is_flow(data: CommentedBase) -> bool:
    return bool(data.fa.flow_style())


def _clear_comments(data: Any, seen: set[int]) -> None:
    if not isinstance(data, (CommentedMap, CommentedSeq)) or id(data) in seen:
        return
    seen.add(id(data))
    data.ca.items.clear()
    data.ca.comment = None
    data.ca.end = []
    for i in data.values() if isinstance(data, CommentedMap) else data:
        _clear_comments(i, seen)


class _CommentPlacer:
    """Hangs logged comments on the keys of a loaded document."""

    def __init__(self, log: _CommentLog) -> None:
        self.__log = log
        self.__starts: list[int] = []
        self.__taken: set[int] = set()

    def __collect(self, data: Any, starts: set[int], seen: set[int]) -> None:
        """Lines where some content starts."""
        if not isinstance(data, (CommentedMap, CommentedSeq)) \
                or id(data) in seen:
            return
        seen.add(id(data))
        if data.lc.line is not None:
            starts.add(data.lc.line)
        if _is_flow(data):
            return
        positions = data.lc.data or {}
        if isinstance(data, CommentedMap):
            for key, value in data.items():
                if key in positions:
                    starts.add(positions[key][0])
                    starts.add(positions[key][2])
                self.__collect(value, starts, seen)
        else:
            for i, value in enumerate(data):
                if i in positions:
                    starts.add(positions[i][0])
                self.__collect(value, starts, seen)

    def __run_above(self, line: int) -> CommentList:
        ret: CommentList = []
        line -= 1
        while line in self.__log.lines and line not in self.__taken:
            self.__taken.add(line)
            ret.insert(0, self.__log.lines[line])
            line -= 1
        return ret

    def __inline_between(self, first: int, after: int) -> list[str]:
        at = bisect_right(self.__starts, after)
        until = self.__starts[at] if at < len(self.__starts) else None
        ret: list[str] = []
        for line in sorted(self.__log.inline):
            if line < first or line in self.__taken:
                continue
            if until is not None and line >= until:
                break
            self.__taken.add(line)
            ret.append(self.__log.inline[line])
        return ret

    def __inline_at(self, line: int) -> list[str]:
        if line in self.__taken or line not in self.__log.inline:
            return []
        self.__taken.add(line)
        return [self.__log.inline[line]]

    def __place(self, mapping: CommentedMap, seen: set[int]) -> None:
        seen.add(id(mapping))
        positions = mapping.lc.data or {}
        for key, value in mapping.items():
            if key not in positions:
                # merged in from elsewhere.
                continue
            key_line, _, value_line, _ = positions[key]
            set_block_comments(mapping, key, self.__run_above(key_line))
            is_block = isinstance(value, (CommentedMap, CommentedSeq)) \
                and bool(value) and not _is_flow(value) \
                and id(value) not in seen
            if is_block:
                inline = self.__inline_at(key_line)
            else:
                inline = self.__inline_between(
                    key_line, max(key_line, value_line))
            set_inline_comments(mapping, key, inline)
            if isinstance(value, CommentedMap) and id(value) not in seen:
                self.__place(value, seen)

    def place(self, root: CommentedMap) -> None:
        starts: set[int] = set()
        self.__collect(root, starts, set())
        self.__starts = sorted(starts)
        if root:
            self.__place(root, set())
        elif root.lc.line is not None:
            set_start_comments(root, self.__run_above(root.lc.line))
        last = self.__starts[-1] if self.__starts else -1
        set_end_comments(root, _strip_tail([
            self.__log.lines[i] for i in sorted(self.__log.lines)
            if i > last and i not in self.__taken]))


class YamlEngine:
    def __init__(
        self,
        indent: int = 2,
        width: int = 80,
        max_aliases: int = 50,
        code_point_limit: int = 3 * 1024 * 1024,
        parse_comments: bool = True
    ) -> None:
        self.indent = indent
        self.width = width
        self.max_aliases = max_aliases
        self.code_point_limit = code_point_limit
        self.parse_comments = parse_comments

    def parse(self, text: str) -> CommentedMap | None:
        """Load `text` as a round-trip document.

        Gives `None` for a document with neither content nor comments,
        raises `YAMLError` for anything that is not a mapping.
        """
        if len(text) > self.code_point_limit:
            raise YAMLError(
                'The incoming YAML document exceeds the limit: '
                f'{self.code_point_limit} code points.')
        loader = _Loader(self.max_aliases)
        data = loader.load(text)
        log = loader.comment_log
        if data is None:
            lines = _strip_tail(
                [log.lines[i] for i in sorted(log.lines)])
            if not self.parse_comments or not lines:
                return None
            # comments only, nothing else.
            data = CommentedMap()
            set_start_comments(data, lines)
            return data
        if not isinstance(data, CommentedMap):
            raise YAMLError(
                f'Top level is not a mapping, but a {type(data).__name__}.')
        _clear_comments(data, set())
        if self.parse_comments:
            _CommentPlacer(log).place(data)
        return data

    # Emitting

    def __align(self, mapping: CommentedMap, column: int) -> None:
        for key, value in mapping.items():
            slots = mapping.ca.items.get(key)
            if slots and slots[1]:
                for i in slots[1]:
                    i.start_mark = CommentMark(column)
            if isinstance(value, CommentedMap) and value:
                self.__align(value, column + self.indent)

    def __dumper(self) -> YAML:
        ret = YAML(typ='rt', pure=True)
        ret.Representer = ConfigRepresenter
        ret.indent(mapping=self.indent, sequence=2, offset=0)
        ret.width = self.width
        return ret

    def emit(self, root: CommentedMap) -> str:
        """Render a document, or `''` when there is nothing at all."""
        if not root and not start_comments(root) and not root.ca.end:
            return ''
        if root.ca.comment is None:
            root.ca.comment = [None, []]
        if root:
            self.__align(root, 0)
        else:
            # `{}` takes what follows as its own trailing comment.
            root.fa.set_flow_style()
            if root.ca.end:
                root.ca.comment[0] = CommentToken(
                    '\n' + ''.join(i.value for i in root.ca.end),
                    CommentMark(0))
                root.ca.end = []
        out = StringIO()
        self.__dumper().dump(root, out)
        return out.getvalue()
