"""
配置层 - 加载运行期配置

职责：
- 加载 documents/sheetgen_runtime.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .runtime_config import (
    CatalogConfig,
    DxfConfig,
    LayoutConfig,
    LoggingConfig,
    RuntimeConfig,
    SheetConfig,
    TitleBlockVariant,
    get_config,
    reload_config,
)

__all__ = [
    "RuntimeConfig",
    "LayoutConfig",
    "CatalogConfig",
    "SheetConfig",
    "DxfConfig",
    "TitleBlockVariant",
    "LoggingConfig",
    "get_config",
    "reload_config",
]
