"""
排版引擎 - 单元格划分/放置原点/视图比例

计算规则：
1. 可绘制宽度 = 图纸宽度 × (1 - 标题栏比例)，可绘制高度 = 图纸高度
2. 视图数量向上取整到完全平方数 N，行数 = √N
3. 单元格面积 = 可绘制面积 / N，长边方向按黄金分割拆分宽高
4. 放置原点固定为 (maxU × 0.45, maxV / 2)
5. 新比例 = 四舍五入(当前比例 × 视图长边/单元格对应边 × 2)，0.5 向上进位

测试要点：
- test_rows_round_up_to_square: 行数取整
- test_cell_orientation: 横向/纵向图纸
- test_origin_offset_container: 原点只取最大角的固定比例
- test_rescale_scale_one_untouched: 比例为1时不改
- test_place_conflict: 放置冲突抛出 PlacementConflictError
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .config import LayoutConfig
from .interfaces import HostDocumentError, PlacementConflictError
from .models import UV, Outline, Page, Placement, ViewItem

if TYPE_CHECKING:
    from .interfaces import IHostDocument

logger = logging.getLogger(__name__)

TITLE_BAR_FRACTION = 0.11
GOLDEN_SECTION = 0.618


@dataclass(frozen=True)
class CellSize:
    """单元格尺寸"""
    width: float
    height: float
    rows: int


def square_ceil(count: int) -> int:
    """不小于 count 的最小完全平方数"""
    root = math.isqrt(count)
    if root * root < count:
        root += 1
    return root * root


class LayoutEngine:
    """排版引擎（纯几何计算，放置动作委托宿主）"""

    def __init__(
        self,
        title_bar_fraction: float = TITLE_BAR_FRACTION,
        golden_section: float = GOLDEN_SECTION,
        origin_u_fraction: float = 0.45,
        origin_v_fraction: float = 0.5,
        baseline_rescale: float = 2.0,
    ) -> None:
        self.title_bar_fraction = title_bar_fraction
        self.golden_section = golden_section
        self.origin_u_fraction = origin_u_fraction
        self.origin_v_fraction = origin_v_fraction
        self.baseline_rescale = baseline_rescale

    @classmethod
    def from_config(cls, config: LayoutConfig) -> LayoutEngine:
        return cls(
            title_bar_fraction=config.title_bar_fraction,
            golden_section=config.golden_section,
            origin_u_fraction=config.origin_u_fraction,
            origin_v_fraction=config.origin_v_fraction,
            baseline_rescale=config.baseline_rescale,
        )

    def compute_cell_size(self, container: Outline, item_count: int) -> CellSize:
        """
        计算每个视图分得的单元格尺寸

        Args:
            container: 图纸外轮廓
            item_count: 视图数量（>=1）

        Returns:
            CellSize(width, height, rows)
        """
        if item_count < 1:
            raise ValueError(f"item_count must be >= 1, got {item_count}")

        drawable_w = container.width * (1 - self.title_bar_fraction)
        drawable_h = container.height

        slots = square_ceil(item_count)
        rows = math.isqrt(slots)
        area = drawable_w * drawable_h / slots

        if drawable_w > drawable_h:
            width = math.sqrt(area / self.golden_section)
            height = self.golden_section * width
        else:
            height = math.sqrt(area / self.golden_section)
            width = self.golden_section * height

        return CellSize(width=width, height=height, rows=rows)

    def compute_origin(self, container: Outline) -> UV:
        """放置原点，只依赖图纸外轮廓"""
        return UV(
            u=container.max_u * self.origin_u_fraction,
            v=container.max_v * self.origin_v_fraction,
        )

    def compute_rescale(self, item_outline: Outline, cell_width: float, cell_height: float) -> float:
        """视图长边相对单元格的缩放倍数"""
        if item_outline.width > item_outline.height:
            return item_outline.width / cell_width * self.baseline_rescale
        return item_outline.height / cell_height * self.baseline_rescale

    @staticmethod
    def rescaled(current_scale: int, factor: float) -> int:
        """按倍数换算新比例（四舍五入）；比例为1或倍数为0时保持不变"""
        if current_scale == 1 or factor == 0:
            return current_scale
        return max(1, math.floor(current_scale * factor + 0.5))

    def place_single_item(self, document: IHostDocument, item: ViewItem, page: Page) -> Placement:
        """
        将单个视图居中缩放后放到图纸上

        Raises:
            PlacementConflictError: 视图已放置在其他图纸上
            HostDocumentError: 宿主未返回放置结果
        """
        cell = self.compute_cell_size(page.outline, 1)
        origin = self.compute_origin(page.outline)

        factor = self.compute_rescale(item.outline, cell.width, cell.height)
        current = document.get_view_scale(item.item_id)
        scale = self.rescaled(current, factor)
        if scale != current:
            document.set_view_scale(item.item_id, scale)
            logger.debug(f"视图比例调整: {item.name} 1:{current} -> 1:{scale}")

        result = document.create_viewport(page.page_id, item.item_id, origin)
        if result.conflict:
            raise PlacementConflictError(item.name, result.message)
        if result.placement is None:
            raise HostDocumentError(f"宿主未返回放置结果: {item.name}")
        return result.placement
