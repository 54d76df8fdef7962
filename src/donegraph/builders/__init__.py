"""
建構器套件，負責將圖形資料轉換為 DOT 原始碼。
"""

from .dot_builder import (
    COLOR_SCHEME,
    assemble_document,
    colour,
    format_dependencies,
    format_dependency,
    format_node,
    format_nodes,
)

__all__ = [
    "COLOR_SCHEME",
    "assemble_document",
    "colour",
    "format_dependencies",
    "format_dependency",
    "format_node",
    "format_nodes",
]
