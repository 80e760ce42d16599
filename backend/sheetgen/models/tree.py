"""
分类树模型 - 类别 → 视图名称 两级结构

与任何UI控件无关；勾选状态由UI协作方写入 LeafNode.checked
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LeafNode(BaseModel):
    """叶节点（视图名称）"""
    text: str
    checked: bool = False
    # 正常叶节点为空；非空说明是误挂的类别节点，选择时跳过
    children: list[LeafNode] = Field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class CategoryNode(BaseModel):
    """类别节点"""
    tag: str = Field(..., description="视图类型显示名，用于归类匹配")
    text: str = Field(..., description="显示文本")
    children: list[LeafNode] = Field(default_factory=list)

    @property
    def leaf_names(self) -> list[str]:
        return [leaf.text for leaf in self.children]
