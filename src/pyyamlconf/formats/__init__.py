# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/15 21:10:26
# @Author : Kariko Lin
from .engine import YamlEngine
from .file import FileConfiguration, FileConfigurationOptions
from .parser import YamlFileParser
from .roundtrip import DocumentTranslator
from .yaml_config import YamlConfiguration, YamlConfigurationOptions

__all__ = [
    'YamlEngine', 'DocumentTranslator',
    'FileConfiguration', 'FileConfigurationOptions',
    'YamlConfiguration', 'YamlConfigurationOptions', 'YamlFileParser'
]
