# -*- encoding: utf-8 -*-
# @File   : arena.py
# @Time   : 2024/10/12 16:41:36
# @Author : Kariko Lin

"""Storage behind section proxies.

Each section of a configuration tree is a slot in the root's arena,
looked up by an integer handle.
Parents are referred to by handle too, so detaching a subtree is just
freeing its slots: proxies still pointing at them become orphans.
"""

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import Any

from ..abstract import ConfigurationSection
from .comments import CommentStore

__all__ = ['SectionSlot', 'SectionArena']

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class SectionSlot:
    name: str
    parent: int | None
    entries: dict[str, Any] = field(default_factory=dict)
    comments: CommentStore = field(default_factory=CommentStore)
    proxy: Any = None


class SectionArena:
    def __init__(self) -> None:
        self.__slots: dict[int, SectionSlot] = {}
        self.__handles = count()

    def allocate(self, name: str, parent: int | None) -> int:
        handle = next(self.__handles)
        self.__slots[handle] = SectionSlot(name=name, parent=parent)
        return handle

    def slot(self, handle: int) -> SectionSlot | None:
        return self.__slots.get(handle)

    def release(self, handle: int) -> None:
        """Free `handle` together with every section nested under it."""
        slot = self.__slots.pop(handle, None)
        if slot is None:
            return
        logger.debug('Section %r (#%d) released.', slot.name, handle)
        for i in slot.entries.values():
            if not isinstance(i, ConfigurationSection):
                continue
            child = getattr(i, 'handle', None)
            if child is not None and child in self.__slots \
                    and self.__slots[child].parent == handle:
                self.release(child)

    def __contains__(self, handle: int) -> bool:
        return handle in self.__slots

    def __len__(self) -> int:
        return len(self.__slots)
