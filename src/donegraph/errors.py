# src/donegraph/errors.py
"""
donegraph 的例外階層與錯誤鏈格式化工具。

每個流程步驟失敗時都會以 `raise ... from exc` 包裝一層帶有步驟描述的例外，
因此最外層例外的 `__cause__` 鏈即為完整的失敗脈絡。
"""

# 1. 標準庫導入
from collections.abc import Iterator

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
# (無)


class DoneGraphError(Exception):
    """所有 donegraph 例外的基底類別。"""


class ConfigError(DoneGraphError):
    """設定檔不存在、無法解析或設定值不合法。"""


class GraphDecodeError(DoneGraphError):
    """輸入檔案無法讀取，或其內容無法解碼為完整的 Graph。"""


class DonenessOutOfRangeError(DoneGraphError):
    """
    完成度超出 [0, 100] 範圍。

    這代表資料或程式的不變量遭到破壞，呼叫端不應嘗試恢復，整個流程必須中止。
    """

    def __init__(self, doneness: int):
        self.doneness = doneness
        super().__init__(f"完成度 {doneness} 超出允許範圍 [0, 100]")


class ArtifactIOError(DoneGraphError):
    """暫存 DOT 檔案或輸出圖片無法建立或寫入。"""


class RendererError(DoneGraphError):
    """外部渲染器 (Graphviz) 執行失敗、找不到或逾時。"""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        super().__init__(message)


class PipelineError(DoneGraphError):
    """包裝流程中某一步驟的失敗，訊息為該步驟的單行描述。"""


class CleanupError(PipelineError):
    """圖片已產生，但暫存檔案無法移除。"""


def iter_error_chain(exc: BaseException) -> Iterator[BaseException]:
    """依序走訪例外本身及其 `__cause__` / `__context__` 鏈。"""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def format_error_chain(exc: BaseException) -> list[str]:
    """
    將例外鏈格式化為可直接輸出到 stderr 的多行文字。

    Returns:
        第一行為 `error: ...`，其後每個成因一行 `caused by: ...`。
    """
    lines = []
    for index, error in enumerate(iter_error_chain(exc)):
        prefix = "error" if index == 0 else "caused by"
        lines.append(f"{prefix}: {error}")
    return lines
