from __future__ import annotations

import pytest

from pyyamlconf import (
    ConfigurationSection, MemoryConfiguration, OrphanedSectionError
)


def test_set_then_get_returns_value() -> None:
    cfg = MemoryConfiguration()
    cfg.set('name', 'Test')
    assert cfg.get('name') == 'Test'
    assert cfg.get('missing') is None
    assert cfg.get('missing', 'fallback') == 'fallback'


def test_set_creates_intermediate_sections() -> None:
    cfg = MemoryConfiguration()
    cfg.set('a.b.c', 1)

    a = cfg.get('a')
    b = cfg.get('a.b')
    assert isinstance(a, ConfigurationSection)
    assert isinstance(b, ConfigurationSection)
    assert b.name == 'b'
    assert b.current_path == 'a.b'
    assert b.parent is a
    assert b.root is cfg
    assert b.get('c') == 1
    assert cfg.parent is None
    assert cfg.root is cfg


def test_get_keys_and_values_deep() -> None:
    cfg = MemoryConfiguration()
    cfg.set('server.port', 25565)
    cfg.set('server.name', 'Test')

    assert cfg.get_keys(False) == ['server']
    assert cfg.get_keys(True) == ['server', 'server.port', 'server.name']
    values = cfg.get_values(True)
    assert list(values) == ['server', 'server.port', 'server.name']
    assert values['server.port'] == 25565
    assert cfg.get('server').get_keys() == ['port', 'name']


def test_set_none_removes_key() -> None:
    cfg = MemoryConfiguration()
    cfg.set('a', 1)
    cfg.set('b', 2)
    cfg.set('a', None)
    assert cfg.get_keys() == ['b']
    assert not cfg.contains('a')


def test_set_none_through_missing_section_is_noop() -> None:
    cfg = MemoryConfiguration()
    cfg.set('x.y', None)
    assert cfg.get_keys() == []


def test_set_replaces_value_in_the_way() -> None:
    cfg = MemoryConfiguration()
    cfg.set('a', 1)
    cfg.set('a.b', 2)
    assert cfg.is_configuration_section('a')
    assert cfg.get('a.b') == 2


def test_read_does_not_create_sections() -> None:
    cfg = MemoryConfiguration()
    assert cfg.get('a.b.c') is None
    assert not cfg.contains('a')
    assert cfg.get_keys() == []


def test_empty_path() -> None:
    cfg = MemoryConfiguration()
    assert cfg.get('') is cfg
    with pytest.raises(ValueError):
        cfg.set('', 1)
    with pytest.raises(ValueError):
        cfg.create_section('')


def test_create_section_with_seed() -> None:
    cfg = MemoryConfiguration()
    section = cfg.create_section('s', {'a': 1, 'nested': {'b': 2}})
    assert section.current_path == 's'
    assert cfg.get('s.a') == 1
    assert cfg.is_configuration_section('s.nested')
    assert cfg.get('s.nested.b') == 2


def test_set_section_copies_its_contents() -> None:
    cfg = MemoryConfiguration()
    source = cfg.create_section('src', {'x': 1, 'inner': {'y': 2}})
    cfg.set('dst', source)

    copy = cfg.get('dst')
    assert copy is not source
    assert copy.current_path == 'dst'
    assert cfg.get('dst.inner.y') == 2
    source.set('x', 5)
    assert cfg.get('dst.x') == 1


def test_set_section_onto_itself_keeps_contents() -> None:
    cfg = MemoryConfiguration()
    cfg.set('src.x', 1)
    cfg.set('src', cfg.get('src'))
    assert cfg.get('src.x') == 1


def test_removed_section_becomes_orphan() -> None:
    cfg = MemoryConfiguration()
    cfg.set('a.b', 1)
    section = cfg.get('a')
    cfg.set('a', None)

    assert section.root is None
    assert section.parent is None
    assert section.get('b') is None
    assert section.get_keys() == []
    with pytest.raises(OrphanedSectionError):
        section.set('c', 1)
    with pytest.raises(OrphanedSectionError):
        section.create_section('d')
    with pytest.raises(OrphanedSectionError):
        section.add_default('e', 1)


def test_unresolved_parent_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = MemoryConfiguration()
    monkeypatch.setattr(
        'pyyamlconf.configuration.section.resolve',
        lambda section, path, create=False: (None, 'x'))
    with pytest.raises(OrphanedSectionError):
        cfg.create_section('a.x')


def test_clear_needs_attached_root(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = MemoryConfiguration()
    cfg.set('a', 1)
    cfg.clear()
    assert cfg.get_keys() == []

    monkeypatch.setattr(cfg, '_slot', lambda: None)
    with pytest.raises(OrphanedSectionError):
        cfg.clear()


def test_overwritten_section_becomes_orphan() -> None:
    cfg = MemoryConfiguration()
    cfg.set('a.b.c', 1)
    inner = cfg.get('a.b')
    cfg.set('a', 'plain')
    assert inner.root is None
    assert cfg.get('a') == 'plain'


def test_mapping_protocol() -> None:
    cfg = MemoryConfiguration()
    cfg['a.b'] = 1
    cfg['c'] = 2
    assert cfg['a.b'] == 1
    assert 'a.b' in cfg
    assert 'x' not in cfg
    assert list(cfg) == ['a', 'c']
    assert len(cfg) == 2
    del cfg['c']
    assert list(cfg) == ['a']
    with pytest.raises(KeyError):
        cfg['missing']
    with pytest.raises(KeyError):
        del cfg['missing']


def test_custom_path_separator() -> None:
    cfg = MemoryConfiguration()
    cfg.options.path_separator = '/'
    cfg.set('a/b', 1)
    cfg.set('dotted.key', 2)
    assert cfg.get('a').get('b') == 1
    assert cfg.get_keys(True) == ['a', 'a/b', 'dotted.key']
    with pytest.raises(ValueError):
        cfg.options.path_separator = '::'


def test_repr() -> None:
    cfg = MemoryConfiguration()
    section = cfg.create_section('a')
    assert repr(section) == "MemorySection(path='a', root='MemoryConfiguration')"
    cfg.set('a', None)
    assert repr(section) == "MemorySection(path='a', root=None)"
