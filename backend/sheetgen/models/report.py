"""
生成报告模型 - 图纸生成器的状态与结果

状态机：IDLE → PER_ITEM → DONE，前置条件不满足或放置失败时 → FAILED
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from .document import Page, Placement


class GenerationState(str, Enum):
    """生成状态"""
    IDLE = "idle"
    PER_ITEM = "per_item"
    DONE = "done"
    FAILED = "failed"


class GenerationReport(BaseModel):
    """一次批量生成的结果"""
    state: GenerationState = GenerationState.IDLE
    pages: list[Page] = Field(default_factory=list)
    placements: list[Placement] = Field(default_factory=list)
    error: str | None = None

    started_at: datetime | None = None
    finished_at: datetime | None = None

    def mark_running(self) -> None:
        """进入逐项循环"""
        self.state = GenerationState.PER_ITEM
        self.started_at = datetime.now()

    def mark_done(self) -> None:
        self.state = GenerationState.DONE
        self.finished_at = datetime.now()

    def mark_failed(self, error: str) -> None:
        self.state = GenerationState.FAILED
        self.finished_at = datetime.now()
        self.error = error

    def record(self, page: Page, placement: Placement) -> None:
        """记录一张已完成的图纸"""
        self.pages.append(page)
        self.placements.append(placement)
