"""
donegraph 的核心協調器套件。

此套件負責將設定、解析、建構與渲染等子系統串連起來，執行完整的渲染流程。
"""

from .config_loader import ConfigLoader, RenderConfig
from .render_pipeline import RenderPipeline

__all__ = [
    "ConfigLoader",
    "RenderConfig",
    "RenderPipeline",
]
