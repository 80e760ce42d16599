"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Outline/UV: 平面几何
- ViewItem/TitleBlock/Page/Placement: 宿主文档元素快照
- CategoryNode/LeafNode: 视图分类树
- GenerationReport: 批量生成结果
"""

from .document import Page, Placement, PlacementResult, TitleBlock, ViewItem
from .geometry import UV, Outline
from .report import GenerationReport, GenerationState
from .tree import CategoryNode, LeafNode

__all__ = [
    "UV",
    "Outline",
    "ViewItem",
    "TitleBlock",
    "Page",
    "Placement",
    "PlacementResult",
    "CategoryNode",
    "LeafNode",
    "GenerationReport",
    "GenerationState",
]
