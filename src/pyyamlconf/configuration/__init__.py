# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/13 10:02:44
# @Author : Kariko Lin

from .comments import CommentStore
from .memory import MemoryConfiguration
from .options import ConfigurationOptions
from .paths import create_path
from .section import MemorySection
from .values import (
    MISSING, ValueKind, Byte, Short, Long, Float, Char, kind_of
)

__all__ = [
    'CommentStore',
    'MemoryConfiguration',
    'ConfigurationOptions',
    'create_path',
    'MemorySection',
    'MISSING', 'ValueKind', 'Byte', 'Short', 'Long', 'Float', 'Char',
    'kind_of'
]
