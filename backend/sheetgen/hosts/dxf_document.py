"""
DXF宿主文档 - 基于 ezdxf 的宿主适配

约定：
1. 视图 = VIEW 表项，XDATA(appid) 依次记录 类型显示名/视图种类/比例/样板标记
2. 图框 = 配置中声明且图中存在的块定义（族名/类型名/图幅）
3. 图纸 = 图纸空间布局，插入图框块
4. 放置 = VIEWPORT，XDATA 记录视图句柄，用于判断视图是否已被占用

依赖：
- ezdxf: DXF读写
- sheetgen_runtime.yaml: dxf.title_blocks / dxf.xdata_appid

测试要点：
- test_collect_views_from_xdata: 读取视图标签
- test_create_sheet_layout: 新建布局并插入图框
- test_viewport_conflict: 重复放置返回冲突
- test_transaction_rollback: 回滚删除布局并恢复比例
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import ezdxf
from ezdxf.document import Drawing
from ezdxf.lldxf.const import DXFError

from ..config import DxfConfig, get_config
from ..interfaces import HostDocumentError, IHostDocument
from ..models import UV, Outline, Page, Placement, PlacementResult, TitleBlock, ViewItem

logger = logging.getLogger(__name__)

DEFAULT_DXF_VERSION = "R2010"


class DxfDocument(IHostDocument):
    """DXF宿主文档"""

    def __init__(self, doc: Drawing, config: DxfConfig | None = None):
        self.doc = doc
        self.config = config or get_config().dxf
        self.appid = self.config.xdata_appid
        if not self.doc.appids.has_entry(self.appid):
            self.doc.appids.new(self.appid)

        self._pages: dict[str, object] = {}  # page_id -> Paperspace
        self._placed: dict[str, str] = self._scan_viewports()  # view handle -> layout name

    @classmethod
    def new(cls, config: DxfConfig | None = None) -> DxfDocument:
        return cls(ezdxf.new(DEFAULT_DXF_VERSION), config)

    @classmethod
    def readfile(cls, dxf_path: str | Path, config: DxfConfig | None = None) -> DxfDocument:
        path = Path(dxf_path)
        if not path.exists():
            raise HostDocumentError(f"DXF文件不存在: {path}")
        try:
            doc = ezdxf.readfile(str(path))
        except Exception as e:
            raise HostDocumentError(f"DXF解析失败: {e}") from e
        return cls(doc, config)

    def save(self, dxf_path: str | Path) -> Path:
        path = Path(dxf_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.doc.saveas(str(path))
        return path

    # ------------------------------------------------------------------
    # 建模辅助（测试/工具使用）
    # ------------------------------------------------------------------

    def add_view(
        self,
        name: str,
        center: tuple[float, float],
        width: float,
        height: float,
        type_label: str,
        view_type: str,
        scale: int = 1,
        is_template: bool = False,
    ):
        """新建VIEW表项并写入标签"""
        view = self.doc.views.new(
            name,
            dxfattribs={"center": center, "width": width, "height": height},
        )
        self._write_tags(view, type_label, view_type, scale, is_template)
        return view

    def add_title_block_definition(self, block_name: str) -> None:
        """按配置的图幅画出图框块（外框矩形）"""
        variant = self.config.title_blocks.get(block_name)
        if variant is None:
            raise HostDocumentError(f"未配置的图框块: {block_name}")
        block = self.doc.blocks.new(name=block_name)
        w, h = variant.width, variant.height
        block.add_lwpolyline([(0, 0), (w, 0), (w, h), (0, h)], close=True)

    # ------------------------------------------------------------------
    # IHostDocument
    # ------------------------------------------------------------------

    def collect_views(self) -> list[ViewItem]:
        views = []
        for view in self.doc.views:
            type_label, view_type, scale, is_template = self._read_tags(view)
            views.append(
                ViewItem(
                    item_id=view.dxf.handle,
                    name=view.dxf.name,
                    type_label=type_label,
                    view_type=view_type,
                    outline=Outline.from_size(view.dxf.width / scale, view.dxf.height / scale),
                    scale=scale,
                    is_template=is_template,
                )
            )
        return views

    def collect_title_blocks(self) -> list[TitleBlock]:
        blocks = []
        for block_name, variant in self.config.title_blocks.items():
            if block_name not in self.doc.blocks:
                continue
            blocks.append(
                TitleBlock(
                    block_id=block_name,
                    family_name=variant.family,
                    type_name=variant.type_name,
                    outline=Outline.from_size(variant.width, variant.height),
                )
            )
        return blocks

    def create_sheet(self, title_block_id: str) -> Page:
        variant = self.config.title_blocks.get(title_block_id)
        if variant is None or title_block_id not in self.doc.blocks:
            raise HostDocumentError(f"图框不存在: {title_block_id}")

        page_id = uuid.uuid4().hex
        try:
            layout = self.doc.layouts.new(f"{title_block_id}-{page_id[:8]}")
        except DXFError as e:
            raise HostDocumentError(f"新建图纸失败: {e}") from e

        try:
            layout.page_setup(
                size=(variant.width, variant.height),
                margins=(0, 0, 0, 0),
                units="mm",
            )
            layout.add_blockref(title_block_id, (0, 0))
        except DXFError as e:
            # 半成品布局不留在图中
            self.doc.layouts.delete(layout.name)
            raise HostDocumentError(f"新建图纸失败: {e}") from e

        self._pages[page_id] = layout
        return Page(
            page_id=page_id,
            name=layout.name,
            title_block_id=title_block_id,
            outline=Outline.from_size(variant.width, variant.height),
        )

    def set_sheet_name(self, page_id: str, name: str) -> None:
        layout = self._layout(page_id)
        try:
            self.doc.layouts.rename(layout.name, name)
        except DXFError as e:
            raise HostDocumentError(f"图纸命名失败: {name}: {e}") from e

    def get_view_scale(self, item_id: str) -> int:
        return self._read_tags(self._view(item_id))[2]

    def set_view_scale(self, item_id: str, scale: int) -> None:
        if scale < 1:
            raise HostDocumentError(f"比例无效: {scale}")
        view = self._view(item_id)
        type_label, view_type, _, is_template = self._read_tags(view)
        self._write_tags(view, type_label, view_type, scale, is_template)

    def create_viewport(self, page_id: str, item_id: str, position: UV) -> PlacementResult:
        layout = self._layout(page_id)
        view = self._view(item_id)

        if item_id in self._placed:
            return PlacementResult.rejected(
                f"视图 {view.dxf.name} 已放置在 {self._placed[item_id]}"
            )

        scale = self.get_view_scale(item_id)
        try:
            viewport = layout.add_viewport(
                center=(position.u, position.v),
                size=(view.dxf.width / scale, view.dxf.height / scale),
                view_center_point=view.dxf.center,
                view_height=view.dxf.height,
            )
            viewport.set_xdata(self.appid, [(1000, item_id)])
        except DXFError as e:
            raise HostDocumentError(f"放置视口失败: {e}") from e

        self._placed[item_id] = layout.name
        return PlacementResult.placed(
            Placement(page_id=page_id, item_id=item_id, position=position, scale=scale)
        )

    @contextmanager
    def transaction(self, name: str) -> Iterator[None]:
        pages_before = set(self._pages)
        placed_before = dict(self._placed)
        scales_before = {view.dxf.handle: self._read_tags(view) for view in self.doc.views}
        try:
            yield
        except BaseException:
            self._rollback(pages_before, placed_before, scales_before)
            logger.info(f"事务已回滚: {name}")
            raise

    # ------------------------------------------------------------------

    @property
    def sheet_names(self) -> list[str]:
        return [layout.name for layout in self._pages.values()]

    @property
    def placed_views(self) -> dict[str, str]:
        return dict(self._placed)

    def _rollback(
        self,
        pages_before: set[str],
        placed_before: dict[str, str],
        tags_before: dict[str, tuple[str, str, int, bool]],
    ) -> None:
        for page_id in [p for p in self._pages if p not in pages_before]:
            layout = self._pages.pop(page_id)
            self.doc.layouts.delete(layout.name)
        self._placed = placed_before
        for handle, tags in tags_before.items():
            self._write_tags(self._view(handle), *tags)

    def _scan_viewports(self) -> dict[str, str]:
        """从已有布局的视口XDATA恢复视图占用关系"""
        placed = {}
        for layout in self.doc.layouts:
            if not layout.is_any_paperspace:
                continue
            for viewport in layout.query("VIEWPORT"):
                if not viewport.has_xdata(self.appid):
                    continue
                for tag in viewport.get_xdata(self.appid):
                    if tag.code == 1000:
                        placed[tag.value] = layout.name
        return placed

    def _read_tags(self, view) -> tuple[str, str, int, bool]:
        """(类型显示名, 视图种类, 比例, 是否样板)"""
        type_label = self.config.default_type_label
        view_type = self.config.default_view_type
        scale = 1
        is_template = False
        if not view.has_xdata(self.appid):
            return type_label, view_type, scale, is_template

        strings = []
        for tag in view.get_xdata(self.appid):
            if tag.code == 1000:
                strings.append(tag.value)
            elif tag.code == 1071:
                scale = max(1, int(tag.value))
            elif tag.code == 1070:
                is_template = bool(tag.value)
        if len(strings) > 0:
            type_label = strings[0]
        if len(strings) > 1:
            view_type = strings[1]
        return type_label, view_type, scale, is_template

    def _write_tags(self, view, type_label: str, view_type: str, scale: int, is_template: bool) -> None:
        view.set_xdata(
            self.appid,
            [
                (1000, type_label),
                (1000, view_type),
                (1071, int(scale)),
                (1070, 1 if is_template else 0),
            ],
        )

    def _layout(self, page_id: str):
        layout = self._pages.get(page_id)
        if layout is None:
            raise HostDocumentError(f"图纸不存在: {page_id}")
        return layout

    def _view(self, item_id: str):
        view = self.doc.entitydb.get(item_id)
        if view is None or view.dxftype() != "VIEW":
            raise HostDocumentError(f"视图不存在: {item_id}")
        return view
