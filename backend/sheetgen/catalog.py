"""
视图分类索引 - 按视图类型归类，供勾选树显示

职责：
1. 过滤样板视图与 Schedule/Drawing Sheet 类型（填充时由调用方执行）
2. 按类型显示名归入类别节点，保持插入顺序
3. 记录叶节点勾选状态

测试要点：
- test_insert_groups_by_label: 同类型归入同一节点
- test_elevation_display: Building Elevation 显示文本
- test_insert_no_dedup: 重复插入产生两个叶节点
- test_is_selectable: 过滤规则
"""

from __future__ import annotations

from collections.abc import Iterable

from .config import CatalogConfig
from .models import CategoryNode, LeafNode, ViewItem


def is_selectable(view: ViewItem, excluded_type_labels: Iterable[str]) -> bool:
    """视图能否进入分类索引"""
    if view.is_template:
        return False
    return view.type_label not in set(excluded_type_labels)


class CategoryIndex:
    """视图分类索引"""

    def __init__(self, config: CatalogConfig | None = None):
        self.config = config or CatalogConfig()
        self._nodes: list[CategoryNode] = []

    def insert(self, name: str, type_label: str) -> LeafNode:
        """把视图名称挂到对应类别下，类别不存在则新建"""
        leaf = LeafNode(text=name)
        for node in self._nodes:
            if node.tag == type_label:
                node.children.append(leaf)
                return leaf

        node = CategoryNode(tag=type_label, text=self.display_text(type_label))
        node.children.append(leaf)
        self._nodes.append(node)
        return leaf

    def display_text(self, type_label: str) -> str:
        if type_label == self.config.elevation_type_label:
            return self.config.elevation_display.format(label=type_label)
        return type_label + self.config.plural_suffix

    def populate(self, views: Iterable[ViewItem]) -> list[ViewItem]:
        """
        过滤并插入视图

        Returns:
            实际进入索引的视图（文档顺序）
        """
        accepted = []
        for view in views:
            if not is_selectable(view, self.config.excluded_type_labels):
                continue
            self.insert(view.name, view.type_label)
            accepted.append(view)
        return accepted

    def all_categories(self) -> list[CategoryNode]:
        return list(self._nodes)

    def check(self, name: str, checked: bool = True) -> int:
        """按名称设置勾选状态，返回命中的叶节点数"""
        hits = 0
        for node in self._nodes:
            for leaf in node.children:
                if leaf.text == name:
                    leaf.checked = checked
                    hits += 1
        return hits

    def check_all(self, checked: bool = True) -> None:
        for node in self._nodes:
            for leaf in node.children:
                leaf.checked = checked

    def checked_names(self) -> list[str]:
        """已勾选的真叶节点名称"""
        return [
            leaf.text
            for node in self._nodes
            for leaf in node.children
            if leaf.checked and leaf.is_leaf
        ]

    def __len__(self) -> int:
        return len(self._nodes)
