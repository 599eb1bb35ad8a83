# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/16 00:12:48
# @Author : Kariko Lin

from .abstract import ConfigurationSection, FileHandler
from .configuration import (
    MemoryConfiguration, MemorySection, ConfigurationOptions,
    MISSING, ValueKind, Byte, Short, Long, Float, Char, kind_of
)
from .errors import (
    InvalidConfigurationError, OrphanedSectionError, SerializationError
)
from .formats import (
    FileConfiguration, YamlConfiguration, YamlConfigurationOptions,
    YamlFileParser
)
from .serialization import (
    SERIALIZED_TYPE_KEY, ConfigurationSerializable, SerializationRegistry
)

__all__ = [
    'ConfigurationSection', 'FileHandler',
    'MemoryConfiguration', 'MemorySection', 'ConfigurationOptions',
    'MISSING', 'ValueKind', 'Byte', 'Short', 'Long', 'Float', 'Char',
    'kind_of',
    'InvalidConfigurationError', 'OrphanedSectionError', 'SerializationError',
    'FileConfiguration', 'YamlConfiguration', 'YamlConfigurationOptions',
    'YamlFileParser',
    'SERIALIZED_TYPE_KEY', 'ConfigurationSerializable', 'SerializationRegistry'
]
