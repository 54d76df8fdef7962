"""
通用工具函式套件。
"""

from .logging_utils import setup_logging

__all__ = [
    "setup_logging",
]
