"""
图框注册表 - 枚举可用图框并记录当前选择

规则：
- 文档中没有图框时抛出 NoTitleBlockError
- 第一个枚举到的图框为默认选择
- 按 "族名:类型名" 选择，名称不存在时保持原选择
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .interfaces import NoTitleBlockError
from .models import TitleBlock

logger = logging.getLogger(__name__)


class TitleBlockRegistry:
    """图框注册表"""

    def __init__(self) -> None:
        self._blocks: list[TitleBlock] = []
        self._current: TitleBlock | None = None

    @classmethod
    def load(cls, title_blocks: Iterable[TitleBlock]) -> TitleBlockRegistry:
        registry = cls()
        registry._blocks = list(title_blocks)
        if not registry._blocks:
            raise NoTitleBlockError()
        registry._current = registry._blocks[0]
        return registry

    @property
    def names(self) -> list[str]:
        return [block.composite_name for block in self._blocks]

    @property
    def current(self) -> TitleBlock:
        if self._current is None:
            raise NoTitleBlockError()
        return self._current

    def choose_by_name(self, name: str) -> bool:
        """按组合名选择图框，返回是否命中"""
        if not name:
            raise ValueError("name")

        for block in self._blocks:
            if block.composite_name == name:
                self._current = block
                return True

        logger.warning(f"图框不存在，保持当前选择 {self.current.composite_name}: {name}")
        return False

    def __len__(self) -> int:
        return len(self._blocks)
