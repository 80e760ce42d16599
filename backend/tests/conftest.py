"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(memory_document, runtime_config):
        manager = ViewsManager(memory_document, runtime_config)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sheetgen.config import RuntimeConfig
from sheetgen.hosts import MemoryDocument
from sheetgen.interfaces import HostDocumentError
from sheetgen.models import Outline, Page, TitleBlock, ViewItem

REPO_ROOT = Path(__file__).resolve().parents[2]


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def runtime_yaml_path() -> Path:
    """仓库自带的运行期配置"""
    return REPO_ROOT / "documents" / "sheetgen_runtime.yaml"


# ============================================================================
# 数据模型 Fixtures
# ============================================================================

@pytest.fixture
def a1_outline() -> Outline:
    """A1横向图纸"""
    return Outline(min_u=0, min_v=0, max_u=841, max_v=594)


@pytest.fixture
def a1_title_block(a1_outline: Outline) -> TitleBlock:
    return TitleBlock(
        block_id="tb-a1",
        family_name="A1 metric",
        type_name="A1",
        outline=a1_outline,
    )


def make_view(
    name: str,
    type_label: str = "Floor Plan",
    view_type: str = "FloorPlan",
    scale: int = 100,
    width: float = 400.0,
    height: float = 250.0,
    is_template: bool = False,
) -> ViewItem:
    """构造视图"""
    return ViewItem(
        item_id=f"view-{name}",
        name=name,
        type_label=type_label,
        view_type=view_type,
        outline=Outline.from_size(width, height),
        scale=scale,
        is_template=is_template,
    )


@pytest.fixture
def sample_views() -> list[ViewItem]:
    """三个可出图视图 + 明细表/图纸/样板（应被过滤）"""
    return [
        make_view("A"),
        make_view("B", type_label="Building Elevation", view_type="Elevation", scale=50),
        make_view("C", type_label="Section", view_type="Section", scale=20, width=100, height=300),
        make_view("Door Schedule", type_label="Schedule", view_type="Schedule"),
        make_view("Cover", type_label="Drawing Sheet", view_type="DrawingSheet"),
        make_view("Plan Template", is_template=True),
    ]


@pytest.fixture
def memory_document(sample_views: list[ViewItem], a1_title_block: TitleBlock) -> MemoryDocument:
    """一个图框 + 示例视图"""
    return MemoryDocument(views=sample_views, title_blocks=[a1_title_block])


class FailingSheetDocument(MemoryDocument):
    """第 fail_on 次新建图纸时宿主报错"""

    def __init__(self, *args, fail_on: int = 2, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_on = fail_on
        self.sheet_calls = 0
        self.error = HostDocumentError("sheet number already in use")

    def create_sheet(self, title_block_id: str) -> Page:
        self.sheet_calls += 1
        if self.sheet_calls == self.fail_on:
            raise self.error
        return super().create_sheet(title_block_id)


@pytest.fixture
def failing_document(sample_views: list[ViewItem], a1_title_block: TitleBlock) -> FailingSheetDocument:
    """第二张图纸创建失败"""
    return FailingSheetDocument(views=sample_views, title_blocks=[a1_title_block])
