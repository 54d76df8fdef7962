"""
解析器套件，負責將輸入檔案解碼為圖形資料模型。
"""

from .graph_loader import decode_graph, load_graph

__all__ = [
    "decode_graph",
    "load_graph",
]
