# src/donegraph/core/render_pipeline.py
"""
donegraph 的核心處理流程：載入圖形、組裝 DOT、渲染並清理暫存檔。

每一步都必須在前一步完全成功後才開始；任何失敗都會以該步驟的描述包裝後
向上拋出，不重試、不保留部分結果。
"""

# 1. 標準庫導入
import logging
from collections.abc import Callable
from pathlib import Path

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from donegraph.builders.dot_builder import assemble_document, format_dependencies, format_nodes
from donegraph.core.config_loader import RenderConfig
from donegraph.errors import CleanupError, PipelineError
from donegraph.models import Graph
from donegraph.parsers.graph_loader import load_graph
from donegraph.renderers.dot_renderer import PERMISSION_HINT, DotRenderer, write_dot_source, write_image

Renderer = Callable[[Path], bytes]
Loader = Callable[[Path], Graph]


class RenderPipeline:
    """一個處理單次「JSON → DOT → 圖片」完整流程的類別。"""

    def __init__(self, config: RenderConfig, renderer: Renderer | None = None, loader: Loader | None = None):
        self.config = config
        self.renderer = renderer or DotRenderer(config.layout_engine, config.output_format, config.render_timeout)
        self.loader = loader or load_graph

    def generate_source(self) -> str:
        """執行載入與組裝步驟，回傳完整的 DOT 文件。"""
        try:
            graph = self.loader(self.config.input_path)
        except Exception as e:
            raise PipelineError("無法取得反序列化的 JSON 資料") from e

        try:
            node_block = format_nodes(graph.nodes)
        except Exception as e:
            raise PipelineError("無法組裝節點定義") from e

        try:
            edge_block = format_dependencies(graph.dependencies)
        except Exception as e:
            raise PipelineError("無法組裝依賴關係定義") from e

        edge_count = sum(len(dependency.depends_on) for dependency in graph.dependencies)
        logging.debug(f"DOT 文件組裝完成：共 {len(graph.nodes)} 個節點，{edge_count} 條依賴邊。")
        return assemble_document(node_block, edge_block)

    def _render(self, temp_path: Path) -> Path:
        image_bytes = self.renderer(temp_path)
        return write_image(image_bytes, self.config.output_path)

    def run(self) -> Path:
        """
        執行完整的渲染流程。

        Returns:
            輸出圖片的路徑。

        Raises:
            PipelineError: 任一步驟失敗；原始例外保留在 `__cause__`。
            CleanupError: 圖片已產生，但暫存檔無法移除。
        """
        dot_source = self.generate_source()

        try:
            temp_path = write_dot_source(dot_source, self.config.temp_path)
        except Exception as e:
            raise PipelineError("無法寫入暫存 GV 檔案，終止執行。") from e

        try:
            output_path = self._render(temp_path)
        except Exception as e:
            raise PipelineError("無法寫入輸出圖片，終止執行。") from e

        try:
            temp_path.unlink()
        except OSError as e:
            raise CleanupError(f"無法移除暫存 GV 檔案 '{temp_path}'；{PERMISSION_HINT}？") from e

        logging.info(f"已完成渲染並移除暫存檔: {temp_path}")
        return output_path
