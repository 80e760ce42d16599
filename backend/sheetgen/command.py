"""
用户命令 - "Create Multiple Sheets"

职责：
1. 在宿主事务内构建视图管理器并交给UI回调完成勾选
2. 确认后批量生成图纸并提交；取消则不做任何修改
3. 任一失败回滚整个事务，并映射为面向用户的消息

测试要点：
- test_command_succeeded: 正常提交
- test_command_cancelled: 取消不创建图纸
- test_command_conflict_message: 冲突显示固定消息
- test_command_rollback: 失败后图纸全部回滚
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

from .config import RuntimeConfig
from .interfaces import PlacementConflictError
from .manager import ViewsManager
from .models import GenerationReport

if TYPE_CHECKING:
    from .interfaces import IHostDocument

logger = logging.getLogger(__name__)

TRANSACTION_NAME = "Create Multiple Sheets"


class CommandStatus(str, Enum):
    """命令结果状态"""
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    FAILED = "failed"


class CommandResult(BaseModel):
    """命令结果"""
    status: CommandStatus
    message: str = ""
    report: GenerationReport | None = None


class _Cancelled(Exception):
    """UI取消（仅用于触发事务回滚）"""


class CreateSheetsCommand:
    """批量建图命令"""

    def __init__(self, config: RuntimeConfig | None = None):
        self.config = config

    def execute(
        self,
        document: IHostDocument,
        choose: Callable[[ViewsManager], bool],
    ) -> CommandResult:
        """
        执行命令

        Args:
            document: 宿主文档
            choose: UI回调，完成勾选/图框选择/前缀设置后返回True，取消返回False
        """
        report = None
        try:
            with document.transaction(TRANSACTION_NAME):
                manager = ViewsManager(document, self.config)
                if not choose(manager):
                    raise _Cancelled()
                manager.select_views()
                report = manager.generate_sheets()
        except _Cancelled:
            logger.info("用户取消，未生成图纸")
            return CommandResult(status=CommandStatus.CANCELLED)
        except PlacementConflictError as e:
            logger.warning(f"视图重复放置，已回滚: {e}")
            return CommandResult(status=CommandStatus.FAILED, message=e.user_message)
        except Exception as e:
            logger.exception("批量建图失败，已回滚")
            return CommandResult(status=CommandStatus.FAILED, message=str(e))

        return CommandResult(status=CommandStatus.SUCCEEDED, report=report)
