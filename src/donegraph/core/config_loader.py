# src/donegraph/core/config_loader.py
"""
負責載入、合併與驗證渲染流程的設定。
"""

# 1. 標準庫導入
import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
import graphviz
import yaml

# 3. 本專案導入
from donegraph.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("configs") / "donegraph.yaml"

DEFAULT_RENDER_CONFIG: dict[str, Any] = {
    "paths": {
        "input": "./data/test_graph.json",
        "temp": "temp.gv",
        "output": "output.png",
    },
    "renderer": {
        "layout_engine": "dot",
        "output_format": "png",
        "render_timeout": None,
    },
}


@dataclass(frozen=True)
class RenderConfig:
    """單次渲染流程所需的全部設定值，於建構 RenderPipeline 時傳入。"""

    input_path: Path
    temp_path: Path
    output_path: Path
    layout_engine: str = "dot"
    output_format: str = "png"
    render_timeout: float | None = None


class ConfigLoader:
    """一個處理設定檔載入、合併與驗證的類別。"""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path
        self.base_dir = Path(".")
        user_config: dict[str, Any] = {}

        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"指定的設定檔不存在: {config_path}")
            user_config = self._load_yaml(config_path)
            self.base_dir = config_path.parent
        elif DEFAULT_CONFIG_PATH.is_file():
            self.config_path = DEFAULT_CONFIG_PATH
            user_config = self._load_yaml(DEFAULT_CONFIG_PATH)
            self.base_dir = DEFAULT_CONFIG_PATH.parent
        else:
            logging.debug("未找到設定檔，使用預設設定。")

        user_paths = user_config.get("paths")
        self.user_path_keys = set(user_paths) if isinstance(user_paths, dict) else set()
        self.config = self._merge_configs(copy.deepcopy(DEFAULT_RENDER_CONFIG), user_config)
        self._validate()

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        """安全地載入一個 YAML 檔案。空檔案視為空設定。"""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"解析設定檔 '{path.name}' 時發生錯誤") from e
        except OSError as e:
            raise ConfigError(f"無法讀取設定檔: {path}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"設定檔 '{path.name}' 的頂層必須是映射 (mapping)。")
        logging.info(f"已載入設定檔: {path}")
        return data

    @staticmethod
    def _merge_configs(default: dict, user: dict) -> dict:
        """遞迴地合併使用者設定到預設設定中。"""
        for key, value in user.items():
            if isinstance(value, dict) and isinstance(default.get(key), dict):
                default[key] = ConfigLoader._merge_configs(default[key], value)
            else:
                default[key] = value
        return default

    def _validate(self):
        for section in ("paths", "renderer"):
            if not isinstance(self.config.get(section), dict):
                raise ConfigError(f"設定區段 '{section}' 必須是映射 (mapping)。")
        renderer = self.config["renderer"]
        self._check_renderer_settings(
            renderer.get("layout_engine"), renderer.get("output_format"), renderer.get("render_timeout")
        )
        for key in ("input", "temp", "output"):
            value = self.config["paths"].get(key)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"設定 'paths.{key}' 必須是非空字串。")

    @staticmethod
    def _check_renderer_settings(layout_engine: Any, output_format: Any, render_timeout: Any):
        if layout_engine not in graphviz.ENGINES:
            raise ConfigError(f"不支援的佈局引擎 '{layout_engine}'，可用: {', '.join(sorted(graphviz.ENGINES))}")
        if output_format not in graphviz.FORMATS:
            raise ConfigError(f"不支援的輸出格式 '{output_format}'。")
        if render_timeout is not None and (
            isinstance(render_timeout, bool) or not isinstance(render_timeout, (int, float)) or render_timeout <= 0
        ):
            raise ConfigError(f"'render_timeout' 必須是正數或留空，目前為: {render_timeout!r}")

    def _resolve(self, key: str) -> Path:
        """設定檔中給定的相對路徑以設定檔目錄為基準；預設值以目前工作目錄為基準。"""
        path = Path(self.config["paths"][key])
        if path.is_absolute() or key not in self.user_path_keys:
            return path
        return self.base_dir / path

    def to_render_config(self, overrides: dict[str, Any] | None = None) -> RenderConfig:
        """
        產生 RenderConfig。

        Args:
            overrides: 來自命令列的覆寫值，鍵為 RenderConfig 欄位名稱；值為 None 者忽略。
                       命令列給定的路徑相對於目前工作目錄。

        Returns:
            合併後的 RenderConfig。
        """
        renderer = self.config["renderer"]
        values: dict[str, Any] = {
            "input_path": self._resolve("input"),
            "temp_path": self._resolve("temp"),
            "output_path": self._resolve("output"),
            "layout_engine": renderer["layout_engine"],
            "output_format": renderer["output_format"],
            "render_timeout": renderer["render_timeout"],
        }
        for key, value in (overrides or {}).items():
            if value is None:
                continue
            if key not in values:
                raise ConfigError(f"未知的設定覆寫項目: {key}")
            values[key] = Path(value) if key.endswith("_path") else value

        self._check_renderer_settings(values["layout_engine"], values["output_format"], values["render_timeout"])
        return RenderConfig(**values)
