"""
内存宿主文档 - 视图/图框/图纸全部保存在内存中

用于单元测试和不依赖CAD的嵌入调用；事务通过快照实现回滚
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from ..interfaces import HostDocumentError, IHostDocument
from ..models import UV, Page, Placement, PlacementResult, TitleBlock, ViewItem


class MemoryDocument(IHostDocument):
    """内存宿主文档"""

    def __init__(
        self,
        views: list[ViewItem] | None = None,
        title_blocks: list[TitleBlock] | None = None,
    ):
        self.views: dict[str, ViewItem] = {v.item_id: v for v in views or []}
        self.title_blocks: dict[str, TitleBlock] = {t.block_id: t for t in title_blocks or []}
        self.pages: dict[str, Page] = {}
        self.placements: dict[str, Placement] = {}  # item_id -> placement
        self.committed: list[str] = []

    def add_view(self, view: ViewItem) -> ViewItem:
        self.views[view.item_id] = view
        return view

    def add_title_block(self, title_block: TitleBlock) -> TitleBlock:
        self.title_blocks[title_block.block_id] = title_block
        return title_block

    # ------------------------------------------------------------------
    # IHostDocument
    # ------------------------------------------------------------------

    def collect_views(self) -> list[ViewItem]:
        return [v.model_copy() for v in self.views.values()]

    def collect_title_blocks(self) -> list[TitleBlock]:
        return list(self.title_blocks.values())

    def create_sheet(self, title_block_id: str) -> Page:
        title_block = self.title_blocks.get(title_block_id)
        if title_block is None:
            raise HostDocumentError(f"图框不存在: {title_block_id}")

        page = Page(
            page_id=str(uuid.uuid4()),
            title_block_id=title_block_id,
            outline=title_block.outline,
        )
        self.pages[page.page_id] = page
        return page.model_copy()

    def set_sheet_name(self, page_id: str, name: str) -> None:
        self._page(page_id).name = name

    def get_view_scale(self, item_id: str) -> int:
        return self._view(item_id).scale

    def set_view_scale(self, item_id: str, scale: int) -> None:
        if scale < 1:
            raise HostDocumentError(f"比例无效: {scale}")
        self._view(item_id).scale = scale

    def create_viewport(self, page_id: str, item_id: str, position: UV) -> PlacementResult:
        self._page(page_id)
        view = self._view(item_id)

        if item_id in self.placements:
            return PlacementResult.rejected(
                f"viewId cannot be added to the ViewSheet: {view.name}"
            )

        placement = Placement(
            page_id=page_id,
            item_id=item_id,
            position=position,
            scale=view.scale,
        )
        self.placements[item_id] = placement
        return PlacementResult.placed(placement)

    @contextmanager
    def transaction(self, name: str) -> Iterator[None]:
        snapshot = (
            copy.deepcopy(self.views),
            copy.deepcopy(self.pages),
            copy.deepcopy(self.placements),
        )
        try:
            yield
        except BaseException:
            self.views, self.pages, self.placements = snapshot
            raise
        self.committed.append(name)

    # ------------------------------------------------------------------

    def placements_on(self, page_id: str) -> list[Placement]:
        return [p for p in self.placements.values() if p.page_id == page_id]

    def _page(self, page_id: str) -> Page:
        page = self.pages.get(page_id)
        if page is None:
            raise HostDocumentError(f"图纸不存在: {page_id}")
        return page

    def _view(self, item_id: str) -> ViewItem:
        view = self.views.get(item_id)
        if view is None:
            raise HostDocumentError(f"视图不存在: {item_id}")
        return view
