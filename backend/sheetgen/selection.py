"""
选中视图集合 - 由勾选的叶节点名称反查视图

按名称去重，保持文档枚举顺序；找不到的名称直接忽略
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .models import CategoryNode, ViewItem

logger = logging.getLogger(__name__)


class SelectionSet:
    """选中视图集合（有序，按名称唯一）"""

    def __init__(self) -> None:
        self._items: dict[str, ViewItem] = {}

    @classmethod
    def resolve(
        cls,
        categories: Iterable[CategoryNode],
        all_items: Iterable[ViewItem],
    ) -> SelectionSet:
        """根据分类树的勾选状态构建选中集合"""
        names = [
            leaf.text
            for node in categories
            for leaf in node.children
            if leaf.checked and leaf.is_leaf
        ]
        return cls.from_names(names, all_items)

    @classmethod
    def from_names(cls, names: Iterable[str], all_items: Iterable[ViewItem]) -> SelectionSet:
        wanted = set(names)
        selection = cls()
        for item in all_items:
            if item.name in wanted:
                selection.add(item)

        missing = wanted - set(selection.names)
        if missing:
            logger.debug(f"勾选的视图未找到，已忽略: {sorted(missing)}")
        return selection

    def add(self, item: ViewItem) -> bool:
        """加入视图，同名已存在时返回False"""
        if item.name in self._items:
            return False
        self._items[item.name] = item
        return True

    @property
    def names(self) -> list[str]:
        return list(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __iter__(self) -> Iterator[ViewItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items
