# src/donegraph/__main__.py
"""
donegraph 主執行入口。
"""

# 1. 標準庫導入
import argparse
import logging
import sys
from pathlib import Path

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from donegraph.core.config_loader import ConfigLoader
from donegraph.core.render_pipeline import RenderPipeline
from donegraph.errors import DoneGraphError, format_error_chain
from donegraph.utils.logging_utils import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="donegraph", description="將工作項目依賴圖 (JSON) 渲染為圖片。")
    parser.add_argument("--config", type=Path, default=None, help="YAML 設定檔路徑 (預設: configs/donegraph.yaml)")
    parser.add_argument("--input", type=Path, default=None, help="輸入 JSON 檔案路徑")
    parser.add_argument("--output", type=Path, default=None, help="輸出圖片路徑")
    parser.add_argument("--temp", type=Path, default=None, help="暫存 DOT 檔案路徑")
    parser.add_argument("--engine", default=None, help="Graphviz 佈局引擎 (預設: dot)")
    parser.add_argument("--format", dest="output_format", default=None, help="輸出圖片格式 (預設: png)")
    parser.add_argument("--emit-source", action="store_true", help="只輸出 DOT 原始碼到 stdout，不進行渲染")
    parser.add_argument("-v", "--verbose", action="store_true", help="顯示除錯日誌")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """主函式，讀取設定並執行渲染流程。成功回傳 0，失敗回傳 1。"""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        loader = ConfigLoader(args.config)
        config = loader.to_render_config(
            {
                "input_path": args.input,
                "output_path": args.output,
                "temp_path": args.temp,
                "layout_engine": args.engine,
                "output_format": args.output_format,
            }
        )
        pipeline = RenderPipeline(config)
        if args.emit_source:
            print(pipeline.generate_source())
            return 0
        output_path = pipeline.run()
    except DoneGraphError as e:
        logging.debug("流程中止", exc_info=True)
        for line in format_error_chain(e):
            print(line, file=sys.stderr)
        return 1

    print(f"已生成圖表: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
