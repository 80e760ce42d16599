"""
图纸生成器/视图管理器单元测试
"""

import pytest

from sheetgen.config import RuntimeConfig, SheetConfig
from sheetgen.generator import SheetGenerator
from sheetgen.hosts import MemoryDocument
from sheetgen.interfaces import (
    EmptySelectionError,
    HostDocumentError,
    NoTitleBlockError,
    PlacementConflictError,
)
from sheetgen.manager import ViewsManager
from sheetgen.models import GenerationState, TitleBlock
from sheetgen.selection import SelectionSet
from sheetgen.titleblocks import TitleBlockRegistry


class TestSheetGenerator:
    """图纸生成器测试"""

    def test_generate_one_sheet_per_view(self, memory_document: MemoryDocument):
        """测试三个视图生成三张图纸，每张一个视口"""
        views = memory_document.collect_views()
        selection = SelectionSet.from_names(["A", "B", "C"], views)
        registry = TitleBlockRegistry.load(memory_document.collect_title_blocks())

        report = SheetGenerator(memory_document, registry).generate(selection)

        assert report.state == GenerationState.DONE
        assert len(memory_document.pages) == 3
        for page in memory_document.pages.values():
            assert len(memory_document.placements_on(page.page_id)) == 1
        assert len({p.item_id for p in report.placements}) == 3

    def test_sheet_name_format(self, memory_document: MemoryDocument):
        """测试图纸命名：前缀+视图种类+" - "+视图名"""
        views = memory_document.collect_views()
        registry = TitleBlockRegistry.load(memory_document.collect_title_blocks())
        generator = SheetGenerator(memory_document, registry)

        report = generator.generate(SelectionSet.from_names(["A", "B"], views), prefix="P-")

        assert [p.name for p in report.pages] == ["P-FloorPlan - A", "P-Elevation - B"]
        assert sorted(p.name for p in memory_document.pages.values()) == [
            "P-Elevation - B",
            "P-FloorPlan - A",
        ]

    def test_default_prefix_from_config(self, memory_document: MemoryDocument):
        """测试默认前缀取自配置"""
        views = memory_document.collect_views()
        registry = TitleBlockRegistry.load(memory_document.collect_title_blocks())
        generator = SheetGenerator(
            memory_document, registry, sheet_config=SheetConfig(name_prefix="S-")
        )
        report = generator.generate(SelectionSet.from_names(["C"], views))
        assert report.pages[0].name == "S-Section - C"

    def test_empty_selection(self, memory_document: MemoryDocument):
        """测试空选择不创建图纸"""
        registry = TitleBlockRegistry.load(memory_document.collect_title_blocks())
        with pytest.raises(EmptySelectionError):
            SheetGenerator(memory_document, registry).generate(SelectionSet())
        assert memory_document.pages == {}

    def test_conflict_aborts_batch(self, memory_document: MemoryDocument, a1_title_block: TitleBlock):
        """测试冲突后中止剩余视图"""
        occupied = memory_document.create_sheet(a1_title_block.block_id)
        memory_document.create_viewport(
            occupied.page_id, "view-B", memory_document.pages[occupied.page_id].outline.center
        )

        views = memory_document.collect_views()
        registry = TitleBlockRegistry.load(memory_document.collect_title_blocks())
        selection = SelectionSet.from_names(["A", "B", "C"], views)

        with pytest.raises(PlacementConflictError):
            SheetGenerator(memory_document, registry).generate(selection)

        # A 已放置，B 冲突，C 未处理
        assert set(memory_document.placements) == {"view-A", "view-B"}
        assert len(memory_document.pages) == 3


class TestViewsManager:
    """视图管理器测试"""

    def test_populate(self, memory_document: MemoryDocument, runtime_config: RuntimeConfig):
        """测试构建分类树与图框列表"""
        manager = ViewsManager(memory_document, runtime_config)
        assert [v.name for v in manager.all_views] == ["A", "B", "C"]
        assert [n.text for n in manager.categories] == [
            "Floor Plans",
            "Elevations [Building Elevation]",
            "Sections",
        ]
        assert manager.title_block_names == ["A1 metric:A1"]

    def test_no_title_block(self, sample_views, runtime_config: RuntimeConfig):
        """测试没有图框时加载失败且不创建图纸"""
        doc = MemoryDocument(views=sample_views)
        with pytest.raises(NoTitleBlockError):
            ViewsManager(doc, runtime_config)
        assert doc.pages == {}

    def test_generate_without_select(self, memory_document: MemoryDocument, runtime_config: RuntimeConfig):
        """测试未解析选择就生成"""
        manager = ViewsManager(memory_document, runtime_config)
        manager.index.check_all()
        with pytest.raises(EmptySelectionError):
            manager.generate_sheets()

    def test_generate_all(self, memory_document: MemoryDocument, runtime_config: RuntimeConfig):
        """测试全选生成"""
        manager = ViewsManager(memory_document, runtime_config)
        manager.index.check_all()
        manager.sheet_name_prefix = "X-"
        manager.select_views()

        report = manager.generate_sheets()

        assert [p.name for p in report.pages] == [
            "X-FloorPlan - A",
            "X-Elevation - B",
            "X-Section - C",
        ]

    def test_choose_title_block(self, memory_document: MemoryDocument, runtime_config: RuntimeConfig):
        """测试选择图框后新图纸使用该图框"""
        a3 = memory_document.add_title_block(
            TitleBlock(
                block_id="tb-a3",
                family_name="A3 metric",
                type_name="A3",
                outline=memory_document.title_blocks["tb-a1"].outline.model_copy(
                    update={"max_u": 420, "max_v": 297}
                ),
            )
        )
        manager = ViewsManager(memory_document, runtime_config)
        assert manager.choose_title_block(a3.composite_name)
        manager.index.check("A")
        manager.select_views()

        report = manager.generate_sheets()
        assert report.pages[0].title_block_id == "tb-a3"
        assert report.pages[0].outline.width == 420


class TestHostFailure:
    """宿主一般性失败测试"""

    def test_host_failure_aborts_batch(self, failing_document):
        """测试第二张图纸失败时中止，状态为FAILED"""
        views = failing_document.collect_views()
        registry = TitleBlockRegistry.load(failing_document.collect_title_blocks())
        generator = SheetGenerator(failing_document, registry)

        with pytest.raises(HostDocumentError):
            generator.generate(SelectionSet.from_names(["A", "B", "C"], views))

        report = generator.last_report
        assert report.state == GenerationState.FAILED
        assert report.error == str(failing_document.error)
        assert [p.name for p in report.pages] == ["FloorPlan - A"]
        # C 未处理
        assert failing_document.sheet_calls == 2
