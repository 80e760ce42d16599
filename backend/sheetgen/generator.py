"""
图纸生成器 - 每个选中视图生成一张图纸

职责：
1. 校验选中集合非空
2. 逐个视图：按当前图框新建图纸 → 命名 → 排版放置
3. 首个失败即中止整批（回滚由外层事务负责）

测试要点：
- test_generate_one_sheet_per_view: 一视图一图纸
- test_sheet_name_format: 前缀+视图种类+" - "+视图名
- test_empty_selection: 空选择不创建图纸
- test_conflict_aborts_batch: 冲突中止后续视图
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .config import SheetConfig
from .interfaces import EmptySelectionError
from .layout import LayoutEngine
from .models import GenerationReport, ViewItem

if TYPE_CHECKING:
    from .interfaces import IHostDocument
    from .selection import SelectionSet
    from .titleblocks import TitleBlockRegistry

logger = logging.getLogger(__name__)


class SheetGenerator:
    """图纸生成器"""

    def __init__(
        self,
        document: IHostDocument,
        registry: TitleBlockRegistry,
        engine: LayoutEngine | None = None,
        sheet_config: SheetConfig | None = None,
    ):
        self.document = document
        self.registry = registry
        self.engine = engine or LayoutEngine()
        self.sheet_config = sheet_config or SheetConfig()
        self.last_report: GenerationReport | None = None

    def sheet_name(self, prefix: str, item: ViewItem) -> str:
        return f"{prefix}{item.view_type}{self.sheet_config.name_separator}{item.name}"

    def generate(self, selection: SelectionSet, prefix: str | None = None) -> GenerationReport:
        """批量生成图纸"""
        if selection.is_empty():
            raise EmptySelectionError()

        if prefix is None:
            prefix = self.sheet_config.name_prefix
        title_block = self.registry.current

        report = GenerationReport()
        self.last_report = report
        report.mark_running()
        logger.info(f"开始生成图纸: {len(selection)} 个视图, 图框 {title_block.composite_name}")

        try:
            for item in selection:
                page = self.document.create_sheet(title_block.block_id)
                page.name = self.sheet_name(prefix, item)
                self.document.set_sheet_name(page.page_id, page.name)

                placement = self.engine.place_single_item(self.document, item, page)
                report.record(page, placement)
                logger.info(f"图纸已生成: {page.name} (1:{placement.scale})")
        except Exception as e:
            report.mark_failed(str(e))
            logger.error(f"图纸生成中止: 已完成 {len(report.pages)}/{len(selection)}: {e}")
            raise

        report.mark_done()
        return report
