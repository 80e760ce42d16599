"""
宿主文档适配 - IHostDocument 的实现

子模块：
- memory: 内存宿主（测试/嵌入调用）
- dxf_document: ezdxf 宿主（VIEW表项/图纸空间布局/视口）
"""

from .dxf_document import DxfDocument
from .memory import MemoryDocument

__all__ = [
    "MemoryDocument",
    "DxfDocument",
]
