"""
模块接口契约 - 定义宿主文档抽象接口与异常

设计原则：
1. 排版引擎/生成器只通过 IHostDocument 访问宿主文档
2. 宿主元素的创建/修改全部是同步调用，不可重入
3. 事务由宿主提供，是唯一的原子性边界

使用方式：
    from sheetgen.interfaces import IHostDocument

    class MyDocument(IHostDocument):
        def collect_views(self) -> list[ViewItem]:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import UV, Page, PlacementResult, TitleBlock, ViewItem


# ============================================================================
# 宿主文档接口
# ============================================================================

class IHostDocument(ABC):
    """宿主文档接口 - 视图/图框的读取与图纸/视口的创建"""

    @abstractmethod
    def collect_views(self) -> list[ViewItem]:
        """
        枚举文档中的全部视图（含样板视图，过滤由调用方完成）

        Returns:
            按文档枚举顺序排列的视图快照
        """
        ...

    @abstractmethod
    def collect_title_blocks(self) -> list[TitleBlock]:
        """枚举全部图框模板"""
        ...

    @abstractmethod
    def create_sheet(self, title_block_id: str) -> Page:
        """
        以图框模板新建一张图纸

        Args:
            title_block_id: 图框ID

        Returns:
            新图纸（outline 继承自图框）

        Raises:
            HostDocumentError: 图框不存在或宿主拒绝
        """
        ...

    @abstractmethod
    def set_sheet_name(self, page_id: str, name: str) -> None:
        """设置图纸显示名称"""
        ...

    @abstractmethod
    def get_view_scale(self, item_id: str) -> int:
        """读取视图当前比例"""
        ...

    @abstractmethod
    def set_view_scale(self, item_id: str, scale: int) -> None:
        """写入视图比例"""
        ...

    @abstractmethod
    def create_viewport(self, page_id: str, item_id: str, position: UV) -> PlacementResult:
        """
        在图纸指定位置放置视图

        Args:
            page_id: 图纸ID
            item_id: 视图ID
            position: 视口中心（图纸坐标）

        Returns:
            成功时带 placement；视图已放置在其他图纸上时 conflict=True

        Raises:
            HostDocumentError: 其他宿主失败
        """
        ...

    @abstractmethod
    def transaction(self, name: str) -> AbstractContextManager[None]:
        """
        事务上下文：正常退出提交，异常退出回滚后继续抛出
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class SheetGenError(Exception):
    """基础异常"""
    pass


class NoTitleBlockError(SheetGenError):
    """文档中没有图框，无法生成图纸"""

    def __init__(self, message: str = "There is no title block to generate sheet."):
        super().__init__(message)


class EmptySelectionError(SheetGenError):
    """未选中任何视图"""

    def __init__(self, message: str = "No view be selected, generate sheet be canceled."):
        super().__init__(message)


class PlacementConflictError(SheetGenError):
    """视图已放置在其他图纸上，不能重复使用"""

    user_message = "Cannot reuse the same view"

    def __init__(self, view_name: str, detail: str = ""):
        self.view_name = view_name
        self.detail = detail
        message = (
            f"The view '{view_name}' can't be added, "
            "it may have already been placed in another sheet."
        )
        super().__init__(message)


class HostDocumentError(SheetGenError):
    """宿主文档操作失败"""
    pass
