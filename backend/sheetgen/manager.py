"""
视图管理门面 - 汇总分类索引/图框注册表/生成器

使用方式：
    manager = ViewsManager(document)
    manager.categories            # 勾选树
    manager.choose_title_block("A1 metric:A1")
    manager.index.check("Level 1")
    manager.select_views()
    manager.generate_sheets()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .catalog import CategoryIndex
from .config import RuntimeConfig, get_config
from .generator import SheetGenerator
from .interfaces import EmptySelectionError
from .layout import LayoutEngine
from .selection import SelectionSet
from .titleblocks import TitleBlockRegistry

if TYPE_CHECKING:
    from .interfaces import IHostDocument
    from .models import CategoryNode, GenerationReport, ViewItem


class ViewsManager:
    """视图管理器"""

    def __init__(self, document: IHostDocument, config: RuntimeConfig | None = None):
        self.document = document
        self.config = config or get_config()

        self.index = CategoryIndex(self.config.catalog)
        self.all_views: list[ViewItem] = self.index.populate(document.collect_views())
        self.registry = TitleBlockRegistry.load(document.collect_title_blocks())

        self.sheet_name_prefix = self.config.sheet.name_prefix
        self.selection: SelectionSet | None = None

    @property
    def categories(self) -> list[CategoryNode]:
        return self.index.all_categories()

    @property
    def title_block_names(self) -> list[str]:
        return self.registry.names

    def choose_title_block(self, name: str) -> bool:
        return self.registry.choose_by_name(name)

    def select_views(self) -> SelectionSet:
        """从勾选树解析选中视图"""
        self.selection = SelectionSet.resolve(self.categories, self.all_views)
        return self.selection

    def generate_sheets(self) -> GenerationReport:
        if self.selection is None:
            raise EmptySelectionError()

        generator = SheetGenerator(
            self.document,
            self.registry,
            engine=LayoutEngine.from_config(self.config.layout),
            sheet_config=self.config.sheet,
        )
        return generator.generate(self.selection, prefix=self.sheet_name_prefix)
