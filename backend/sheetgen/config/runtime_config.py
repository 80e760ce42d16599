"""
运行期配置 - 读取 documents/sheetgen_runtime.yaml

职责：
- 加载排版常数/分类规则/图纸命名/DXF约定等运行参数
- 提供环境变量覆盖机制（SHEETGEN_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

DEFAULT_RUNTIME_PATH = Path("documents/sheetgen_runtime.yaml")


class LayoutConfig(BaseModel):
    """排版配置"""

    title_bar_fraction: float = Field(0.11, ge=0, lt=1)
    golden_section: float = Field(0.618, gt=0)
    origin_u_fraction: float = 0.45
    origin_v_fraction: float = 0.5
    baseline_rescale: float = 2.0


class CatalogConfig(BaseModel):
    """视图分类配置"""

    excluded_type_labels: list[str] = Field(
        default_factory=lambda: ["Schedule", "Drawing Sheet"]
    )
    elevation_type_label: str = "Building Elevation"
    elevation_display: str = "Elevations [{label}]"
    plural_suffix: str = "s"


class SheetConfig(BaseModel):
    """图纸命名配置"""

    name_prefix: str = ""
    name_separator: str = " - "


class TitleBlockVariant(BaseModel):
    """DXF图框块定义"""

    family: str
    type_name: str
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class DxfConfig(BaseModel):
    """DXF宿主约定"""

    xdata_appid: str = "SHEETGEN"
    default_type_label: str = "Model View"
    default_view_type: str = "Model"
    title_blocks: dict[str, TitleBlockVariant] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    runtime_spec_path: Path = DEFAULT_RUNTIME_PATH

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    sheet: SheetConfig = Field(default_factory=SheetConfig)
    dxf: DxfConfig = Field(default_factory=DxfConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "SHEETGEN_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        return cls(
            runtime_spec_path=path,
            layout=LayoutConfig(**cls._extract(runtime_opts, "layout")),
            catalog=CatalogConfig(**cls._extract(runtime_opts, "catalog")),
            sheet=SheetConfig(**cls._extract(runtime_opts, "sheet")),
            dxf=DxfConfig(**cls._extract(runtime_opts, "dxf")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    _config = RuntimeConfig.from_yaml(yaml_path or DEFAULT_RUNTIME_PATH)
    return _config
