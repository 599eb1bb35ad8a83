from __future__ import annotations

import pytest

from pyyamlconf import MemoryConfiguration, OrphanedSectionError


def test_add_default_alone() -> None:
    cfg = MemoryConfiguration()
    cfg.add_default('a', 1)

    assert cfg.owns_defaults
    assert cfg.get('a') == 1
    assert cfg.get('a', None) is None
    assert cfg.contains('a')
    assert not cfg.contains('a', ignore_defaults=True)
    assert not cfg.is_set('a')
    assert cfg.get_keys() == []


def test_is_set_follows_copy_defaults() -> None:
    cfg = MemoryConfiguration()
    cfg.add_default('a', 1)
    cfg.options.copy_defaults = True
    assert cfg.is_set('a')
    assert cfg.get_keys() == ['a']


def test_removed_value_falls_back_to_default() -> None:
    cfg = MemoryConfiguration()
    cfg.add_default('a', 1)
    cfg.set('a', 2)
    assert cfg.get('a') == 2
    cfg.set('a', None)
    assert cfg.get('a') == 1
    assert 'a' not in cfg.get_keys()


def test_copy_defaults_listing_order() -> None:
    defaults = MemoryConfiguration()
    defaults.set('a', 1)
    defaults.set('b', 2)
    cfg = MemoryConfiguration(defaults)
    cfg.options.copy_defaults = True
    cfg.set('c', 3)
    cfg.set('b', 20)

    # keys keep their first place, values move to the end.
    assert cfg.get_keys() == ['a', 'b', 'c']
    assert list(cfg.get_values().items()) == [('a', 1), ('c', 3), ('b', 20)]


def test_nested_sections_see_defaults() -> None:
    defaults = MemoryConfiguration()
    defaults.set('s.x', 1)
    cfg = MemoryConfiguration(defaults)

    assert cfg.get('s.x') == 1
    assert cfg.is_configuration_section('s')
    assert not cfg.contains('s', ignore_defaults=True)

    section = cfg.get_configuration_section('s')
    assert section is not None
    assert cfg.contains('s', ignore_defaults=True)
    assert section.get('x') == 1
    assert section.get_default_section() is defaults.get('s')


def test_add_default_through_section() -> None:
    cfg = MemoryConfiguration()
    section = cfg.create_section('s')
    section.add_default('y', 2)
    assert cfg.defaults.get('s.y') == 2
    assert section.get('y') == 2


def test_add_defaults_from_mapping_and_configuration() -> None:
    cfg = MemoryConfiguration()
    cfg.add_defaults({'a': 1, 'b.c': 2})
    assert cfg.get('b.c') == 2

    other = MemoryConfiguration()
    other.set('d.e', 3)
    cfg.add_defaults(other)
    assert cfg.get('d.e') == 3
    assert cfg.defaults.get('d') is not other.get('d')


def test_replacing_defaults() -> None:
    cfg = MemoryConfiguration()
    cfg.add_default('a', 1)
    shared = MemoryConfiguration()
    shared.set('a', 5)
    cfg.defaults = shared
    assert not cfg.owns_defaults
    assert cfg.defaults is shared
    assert cfg.get('a') == 5


def test_orphan_ignores_defaults() -> None:
    cfg = MemoryConfiguration()
    cfg.add_default('s.x', 1)
    section = cfg.create_section('s')
    assert section.get('x') == 1
    cfg.set('s', None)
    assert section.get('x') is None
    with pytest.raises(OrphanedSectionError):
        section.add_default('x', 2)
