# src/donegraph/parsers/graph_loader.py
"""
負責從磁碟讀取 JSON 輸入並解碼為 Graph。
"""

# 1. 標準庫導入
import logging
from pathlib import Path

# 2. 第三方庫導入
from pydantic import ValidationError

# 3. 本專案導入
from donegraph.errors import GraphDecodeError
from donegraph.models import Graph


def decode_graph(raw: str | bytes) -> Graph:
    """
    將 JSON 文字解碼為 Graph。

    解碼是原子性的：要嘛得到完整的 Graph，要嘛拋出 GraphDecodeError。
    """
    try:
        return Graph.model_validate_json(raw)
    except ValidationError as e:
        raise GraphDecodeError(f"無法將 JSON 反序列化為圖形 ({e.error_count()} 個錯誤)") from e


def load_graph(input_path: Path) -> Graph:
    """讀取並解碼指定路徑的 JSON 檔案。"""
    logging.info(f"讀取圖形定義檔: {input_path}")
    try:
        with open(input_path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise GraphDecodeError(f"無法開啟或讀取 JSON 檔案: {input_path}") from e

    graph = decode_graph(raw)
    logging.info(f"已載入 {len(graph.nodes)} 個節點與 {len(graph.dependencies)} 組依賴關係。")
    return graph
