# src/donegraph/renderers/dot_renderer.py
"""
封裝 Graphviz 的檔案輸出與渲染邏輯。

渲染器以暫存 DOT 檔案的路徑作為唯一的輸入參數，並從 stdout 擷取圖片位元組。
"""

# 1. 標準庫導入
import logging
import subprocess
from pathlib import Path

# 2. 第三方庫導入
import graphviz

# 3. 本專案導入
from donegraph.errors import ArtifactIOError, RendererError


PERMISSION_HINT = "請確認是否具有寫入權限"


def write_dot_source(dot_source: str, source_path: Path) -> Path:
    """
    將 DOT 原始碼寫入實體檔案，供外部渲染器讀取。

    所在目錄必須已存在；graphviz 會自動建立缺少的目錄，這裡先行檢查以拒絕這種情況。
    """
    if not source_path.parent.is_dir():
        raise ArtifactIOError(f"無法建立暫存 GV 檔案 '{source_path}'：目錄不存在")
    try:
        saved = graphviz.Source(dot_source).save(filename=source_path.name, directory=str(source_path.parent))
    except OSError as e:
        raise ArtifactIOError(f"無法建立暫存 GV 檔案 '{source_path}'；{PERMISSION_HINT}？") from e
    logging.debug(f"DOT 原始檔已寫入: {saved}")
    return Path(saved)


def write_image(image_bytes: bytes, output_path: Path) -> Path:
    try:
        with open(output_path, "wb") as f:
            f.write(image_bytes)
    except OSError as e:
        raise ArtifactIOError(f"無法寫入輸出圖片 '{output_path}'；{PERMISSION_HINT}？") from e
    logging.info(f"圖表已成功儲存至: {output_path}")
    return output_path


class DotRenderer:
    """以子程序呼叫 Graphviz 佈局引擎，將 DOT 檔案渲染為圖片位元組。"""

    def __init__(self, layout_engine: str = "dot", output_format: str = "png", timeout: float | None = None):
        self.layout_engine = layout_engine
        self.output_format = output_format
        self.timeout = timeout

    def build_command(self, source_path: Path) -> list[str]:
        return [self.layout_engine, f"-T{self.output_format}", str(source_path)]

    def __call__(self, source_path: Path) -> bytes:
        """
        渲染指定的 DOT 檔案。

        Raises:
            RendererError: 指令不存在、返回非零狀態或執行逾時。
        """
        command = self.build_command(source_path)
        logging.info(f"準備以 {self.layout_engine} 渲染: {source_path}")
        try:
            process = subprocess.run(command, capture_output=True, check=True, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            error_message = e.stderr.decode("utf-8", errors="ignore") if e.stderr else ""
            logging.error(f"Graphviz 錯誤訊息:\n{error_message}")
            raise RendererError(
                f"Graphviz ({self.layout_engine}) 執行時返回錯誤 (狀態碼 {e.returncode})", stderr=error_message
            ) from e
        except FileNotFoundError as e:
            raise RendererError(
                f"指令 '{self.layout_engine}' 未找到。請確保 Graphviz 已被正確安裝並加入系統 PATH。"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RendererError(f"Graphviz 執行超時 (超過 {self.timeout} 秒)。") from e
        return process.stdout
