"""
图纸批量生成 - 后端核心模块

模块结构：
- config/     运行期配置加载
- models/     数据模型定义
- hosts/      宿主文档适配（内存/DXF）
- catalog     视图分类索引
- selection   选中视图集合
- titleblocks 图框（标题栏）注册表
- layout      排版引擎（单元格/原点/比例）
- generator   图纸生成器
- manager     视图管理门面
- command     用户命令（事务包装+错误映射）
"""

__version__ = "0.1.0"
