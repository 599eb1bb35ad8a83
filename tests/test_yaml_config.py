from __future__ import annotations

import pytest

from pyyamlconf import (
    Byte, Char, Float, InvalidConfigurationError, YamlConfiguration
)

ROUND_TRIP = (
    '# Header line\n'
    '\n'
    '# about name\n'
    'name: demo # inline\n'
    'server:\n'
    '  # the port\n'
    '  port: 25565\n'
    '  hosts:\n'
    '  - a\n'
    '  - b\n'
    'empty: {}\n'
    '# footer\n'
)


@pytest.fixture
def cfg() -> YamlConfiguration:
    return YamlConfiguration()


def test_header_is_split_from_first_key(cfg: YamlConfiguration) -> None:
    cfg.load_from_string('# header\n\nkey: 5\n')
    assert cfg.options.header == ['header']
    assert cfg.get_int('key') == 5
    assert cfg.get_comments('key') == []
    assert cfg.save_to_string() == '# header\n\nkey: 5\n'


def test_comment_without_blank_line_stays_on_key(
    cfg: YamlConfiguration
) -> None:
    cfg.load_from_string('# about key\nkey: 5\n')
    assert cfg.options.header == []
    assert cfg.get_comments('key') == ['about key']
    assert cfg.save_to_string() == '# about key\nkey: 5\n'


def test_round_trip_keeps_document(cfg: YamlConfiguration) -> None:
    cfg.load_from_string(ROUND_TRIP)
    assert cfg.options.header == ['Header line']
    assert cfg.options.footer == ['footer']
    assert cfg.get_comments('name') == ['about name']
    assert cfg.get_inline_comments('name') == ['inline']
    assert cfg.get_comments('server.port') == ['the port']
    assert cfg.get_string_list('server.hosts') == ['a', 'b']
    assert cfg.is_configuration_section('empty')
    assert cfg.save_to_string() == ROUND_TRIP


def test_empty_documents(cfg: YamlConfiguration) -> None:
    assert cfg.save_to_string() == ''
    cfg.load_from_string('')
    assert cfg.get_keys() == []
    assert cfg.options.header == []


def test_header_only(cfg: YamlConfiguration) -> None:
    cfg.options.header = ['only']
    text = cfg.save_to_string()
    assert text == '# only\n\n{}\n'

    other = YamlConfiguration()
    other.load_from_string(text)
    assert other.options.header == ['only']
    assert other.get_keys() == []


def test_comment_only_document_is_header(cfg: YamlConfiguration) -> None:
    cfg.load_from_string('# just a note\n')
    assert cfg.options.header == ['just a note']
    assert cfg.get_keys() == []


def test_footer_only(cfg: YamlConfiguration) -> None:
    cfg.options.footer = ['end']
    text = cfg.save_to_string()
    assert text == '{}\n# end\n'

    other = YamlConfiguration()
    other.load_from_string(text)
    assert other.options.footer == ['end']
    assert other.options.header == []


def test_load_replaces_contents(cfg: YamlConfiguration) -> None:
    cfg.set('old', 1)
    cfg.load_from_string('new: 2\n')
    assert cfg.get_keys() == ['new']


@pytest.mark.parametrize('text', [
    'a: [1, 2\n',
    '- a\n- b\n',
    'plain text\n',
    'a: &x\n  b: *x\n',
])
def test_invalid_documents(cfg: YamlConfiguration, text: str) -> None:
    cfg.set('old', 1)
    with pytest.raises(InvalidConfigurationError):
        cfg.load_from_string(text)
    assert cfg.get_keys() == []


def test_alias_limit(cfg: YamlConfiguration) -> None:
    text = 'a: &x 1\nb: *x\nc: *x\n'
    cfg.load_from_string(text)
    assert cfg.get('c') == 1

    cfg.options.max_aliases = 1
    with pytest.raises(InvalidConfigurationError):
        cfg.load_from_string(text)


def test_code_point_limit(cfg: YamlConfiguration) -> None:
    cfg.options.code_point_limit = 4
    with pytest.raises(InvalidConfigurationError):
        cfg.load_from_string('key: value\n')


def test_merge_keys(cfg: YamlConfiguration) -> None:
    cfg.load_from_string(
        'base: &b\n'
        '  x: 1\n'
        'derived:\n'
        '  <<: *b\n'
        '  y: 2\n')
    assert cfg.get('derived.x') == 1
    assert cfg.get('derived.y') == 2
    assert cfg.get('derived') is not cfg.get('base')


def test_dotted_keys_become_nested(cfg: YamlConfiguration) -> None:
    cfg.load_from_string('a.b: 1\n')
    assert cfg.get_keys() == ['a']
    assert cfg.get('a.b') == 1
    assert cfg.save_to_string() == 'a:\n  b: 1\n'


def test_non_text_keys_are_stringified(cfg: YamlConfiguration) -> None:
    cfg.load_from_string('1: one\ntrue: yes\n')
    assert cfg.get_keys() == ['1', 'true']
    assert cfg.get('true') == 'yes'


def test_deep_nesting_is_invalid(cfg: YamlConfiguration) -> None:
    cfg.set('old', 1)
    with pytest.raises(InvalidConfigurationError):
        cfg.load_from_string('a: ' + '[' * 3000 + ']' * 3000 + '\n')
    assert cfg.get_keys() == []


def test_nested_save(cfg: YamlConfiguration) -> None:
    cfg.set('server.port', 25565)
    cfg.set('server.name', 'Test')
    assert cfg.save_to_string() == 'server:\n  port: 25565\n  name: Test\n'


def test_indent_option(cfg: YamlConfiguration) -> None:
    cfg.options.indent = 4
    cfg.set('server.port', 25565)
    assert cfg.save_to_string() == 'server:\n    port: 25565\n'
    with pytest.raises(ValueError):
        cfg.options.indent = 1
    with pytest.raises(ValueError):
        cfg.options.indent = 10
    with pytest.raises(ValueError):
        cfg.options.width = 0


def test_inline_comment_on_section_and_list(cfg: YamlConfiguration) -> None:
    text = 's: # sect\n  a: 1\nl: # list\n- 1\n- 2\n'
    cfg.load_from_string(text)
    assert cfg.get_inline_comments('s') == ['sect']
    assert cfg.get_inline_comments('l') == ['list']
    assert cfg.get_list('l') == [1, 2]
    assert cfg.save_to_string() == text


def test_inline_comment_on_block_scalar(cfg: YamlConfiguration) -> None:
    cfg.load_from_string('d: |  # lit\n  text\n')
    assert cfg.get('d') == 'text\n'
    assert cfg.get_inline_comments('d') == ['lit']

    again = YamlConfiguration()
    again.load_from_string(cfg.save_to_string())
    assert again.get('d') == 'text\n'
    assert again.get_inline_comments('d') == ['lit']


def test_value_types_on_save(cfg: YamlConfiguration) -> None:
    cfg.set('f', Float(0.1))
    cfg.set('b', Byte(5))
    cfg.set('t', (1, 2))
    cfg.set('c', Char('x'))
    cfg.set('flag', True)
    cfg.set('quoted', '5')
    assert cfg.save_to_string() == (
        'f: 0.1\n'
        'b: 5\n'
        't:\n'
        '- 1\n'
        '- 2\n'
        'c: x\n'
        'flag: true\n'
        "quoted: '5'\n")


def test_comment_lines_on_save(cfg: YamlConfiguration) -> None:
    cfg.set('a', 1)
    cfg.set_comments('a', ['', 'one\ntwo', None, 'three'])
    cfg.set_inline_comments('a', ['x', 'y'])
    text = cfg.save_to_string()
    assert text == '#\n# one\n# two\n\n# three\na: 1 # x # y\n'

    # up to the blank line, comments above the first key read as header.
    other = YamlConfiguration()
    other.load_from_string(text)
    assert other.options.header == ['', 'one', 'two']
    assert other.get_comments('a') == ['three']
    assert other.get_inline_comments('a') == ['x # y']


def test_copy_header_from_defaults() -> None:
    defaults = YamlConfiguration()
    defaults.options.header = ['from defaults']
    cfg = YamlConfiguration(defaults)
    cfg.set('a', 1)
    assert cfg.save_to_string() == '# from defaults\n\na: 1\n'

    cfg.options.copy_header = False
    assert cfg.save_to_string() == 'a: 1\n'


def test_parse_comments_off(cfg: YamlConfiguration) -> None:
    cfg.options.parse_comments = False
    cfg.load_from_string('# h\n\n# about a\na: 1 # c\n')
    assert cfg.options.header == []
    assert cfg.get_comments('a') == []
    assert cfg.get_inline_comments('a') == []
    assert cfg.get('a') == 1
