"""
几何模型 - 平面坐标与外轮廓

图纸与视图的外轮廓统一使用 (u, v) 平面坐标
"""

from __future__ import annotations

from pydantic import BaseModel


class UV(BaseModel):
    """平面点"""
    u: float
    v: float


class Outline(BaseModel):
    """外轮廓（最小角/最大角）"""
    min_u: float
    min_v: float
    max_u: float
    max_v: float

    @property
    def width(self) -> float:
        return self.max_u - self.min_u

    @property
    def height(self) -> float:
        return self.max_v - self.min_v

    @property
    def center(self) -> UV:
        return UV(u=(self.min_u + self.max_u) / 2, v=(self.min_v + self.max_v) / 2)

    @classmethod
    def from_size(cls, width: float, height: float) -> Outline:
        """以原点为左下角构建"""
        return cls(min_u=0.0, min_v=0.0, max_u=width, max_v=height)
