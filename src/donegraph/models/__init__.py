"""
資料模型套件，定義輸入圖形的節點與依賴關係。
"""

from .graph import Dependency, Graph, Node

__all__ = [
    "Dependency",
    "Graph",
    "Node",
]
