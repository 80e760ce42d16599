import argparse
import logging
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Create one sheet per selected view in a DXF file."
    )
    parser.add_argument("dxf", help="输入DXF文件")
    parser.add_argument(
        "--out",
        default="",
        help="输出DXF路径（默认：<输入>_sheets.dxf）",
    )
    parser.add_argument(
        "--view",
        action="append",
        default=[],
        help="要出图的视图名称，可重复；不指定则全部视图",
    )
    parser.add_argument("--title-block", default="", help="图框 族名:类型名")
    parser.add_argument("--prefix", default=None, help="图纸名称前缀")
    parser.add_argument("--config", default="", help="运行期配置YAML")
    args = parser.parse_args()

    _add_backend_to_path()
    from sheetgen.command import CommandStatus, CreateSheetsCommand  # type: ignore
    from sheetgen.config import get_config, reload_config  # type: ignore
    from sheetgen.hosts import DxfDocument  # type: ignore

    config = reload_config(args.config) if args.config else get_config()
    logging.basicConfig(level=config.logging.log_level, format=config.logging.log_format)

    dxf_path = Path(args.dxf)
    out_path = Path(args.out) if args.out else dxf_path.with_name(f"{dxf_path.stem}_sheets.dxf")

    document = DxfDocument.readfile(dxf_path, config.dxf)

    def choose(manager) -> bool:
        print(f"图框: {manager.title_block_names}")
        if args.title_block:
            manager.choose_title_block(args.title_block)
        if args.prefix is not None:
            manager.sheet_name_prefix = args.prefix
        if args.view:
            for name in args.view:
                if not manager.index.check(name):
                    print(f"未找到视图: {name}")
        else:
            manager.index.check_all()
        return True

    result = CreateSheetsCommand(config).execute(document, choose)
    if result.status != CommandStatus.SUCCEEDED:
        print(f"Error: {result.message}")
        return 1

    for page in result.report.pages:
        print(f"{page.name}")
    document.save(out_path)
    print(f"已保存: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
