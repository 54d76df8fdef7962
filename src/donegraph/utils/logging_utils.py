# src/donegraph/utils/logging_utils.py
"""
提供與日誌記錄相關的通用工具。
"""

# 1. 標準庫導入
import logging

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    設定根日誌記錄器。已有 handler 時不重複加入，只調整層級。
    """
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not root_logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(console_handler)

    return root_logger
