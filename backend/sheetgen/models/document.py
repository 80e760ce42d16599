"""
宿主文档模型 - 视图/图框/图纸/放置

对应宿主文档中的只读元素快照；比例等可变属性通过宿主接口读写
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .geometry import UV, Outline


class ViewItem(BaseModel):
    """可放置的视图"""
    item_id: str = Field(..., description="宿主元素ID")
    name: str = Field(..., description="视图名称（参与布图的视图中唯一）")
    type_label: str = Field(..., description="视图类型显示名(如 Floor Plan)")
    view_type: str = Field(..., description="视图种类(如 FloorPlan)，用于图纸命名")
    outline: Outline
    scale: int = Field(1, gt=0, description="比例(1:scale)")
    is_template: bool = False


class TitleBlock(BaseModel):
    """图框模板"""
    block_id: str
    family_name: str
    type_name: str
    outline: Outline = Field(..., description="由此图框生成的图纸可绘制范围")

    @property
    def composite_name(self) -> str:
        return f"{self.family_name}:{self.type_name}"


class Page(BaseModel):
    """图纸（每个视图一张）"""
    page_id: str
    name: str = ""
    title_block_id: str
    outline: Outline


class Placement(BaseModel):
    """视图在图纸上的放置结果"""
    page_id: str
    item_id: str
    position: UV
    scale: int


class PlacementResult(BaseModel):
    """放置请求的结果：成功返回placement，视图已被占用时返回冲突"""
    placement: Placement | None = None
    conflict: bool = False
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.placement is not None and not self.conflict

    @classmethod
    def placed(cls, placement: Placement) -> PlacementResult:
        return cls(placement=placement)

    @classmethod
    def rejected(cls, message: str) -> PlacementResult:
        return cls(conflict=True, message=message)
