"""
渲染器套件，負責將 DOT 原始碼交給 Graphviz 並輸出圖檔。
"""

from .dot_renderer import PERMISSION_HINT, DotRenderer, write_dot_source, write_image

__all__ = [
    "PERMISSION_HINT",
    "DotRenderer",
    "write_dot_source",
    "write_image",
]
