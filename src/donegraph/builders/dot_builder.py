# src/donegraph/builders/dot_builder.py
"""
將 Graph 組裝為 Graphviz DOT 原始碼。

節點顏色以 rdylgn10 色彩方案的索引 (1-10) 表示，1 為最不完整 (紅)，
10 為完成 (綠)。COLOR_SCHEME 與 colour() 的映射必須一起修改。
"""

# 1. 標準庫導入
import logging
import math
from collections.abc import Iterable

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from donegraph.errors import DonenessOutOfRangeError
from donegraph.models import Dependency, Node

COLOR_SCHEME = "rdylgn10"
COLOR_SCALE_STEPS = 10

DOCUMENT_TEMPLATE = "digraph G {{\nnode [colorscheme={scheme}]\n{nodes}\n\n{edges}\n}}"


def colour(doneness: int) -> str:
    """
    將完成度百分比映射為色階索引字串。

    Args:
        doneness: 介於 0 到 100 (含) 的整數。

    Returns:
        "1" 到 "10" 的十進位字串。

    Raises:
        DonenessOutOfRangeError: doneness 不在 [0, 100] 範圍內。
    """
    if doneness == 100:
        return str(COLOR_SCALE_STEPS)
    if 0 <= doneness <= 99:
        return str(math.ceil((doneness + 1) / 10))
    raise DonenessOutOfRangeError(doneness)


def _warn_if_quoted(owner: str, **fields: str):
    """欄位含有雙引號時 DOT 文件會損毀；不做跳脫，只發出警告。"""
    for name, value in fields.items():
        if '"' in value:
            logging.warning(f"{owner} 的 '{name}' 欄位包含雙引號，產生的 DOT 文件將無法被正確解析: {value!r}")


def format_node(node: Node) -> str:
    """產生單一節點的宣告敘述，label 以字面上的 \\n 分隔 text 與 description。"""
    _warn_if_quoted(
        f"節點 '{node.short_code}'",
        short_code=node.short_code,
        text=node.text,
        description=node.description,
    )
    return f'\t"{node.short_code}" [label="{node.text}\\n{node.description}",color="{colour(node.doneness)}"]\n'


def format_nodes(nodes: Iterable[Node]) -> str:
    return "".join(format_node(node) for node in nodes)


def format_dependency(dependency: Dependency) -> str:
    """每個依賴目標產生一條邊；depends_on 為空時回傳空字串。"""
    _warn_if_quoted(f"依賴關係 '{dependency.node}'", node=dependency.node)
    edges = []
    for target in dependency.depends_on:
        _warn_if_quoted(f"依賴關係 '{dependency.node}'", depends_on=target)
        edges.append(f'\t"{dependency.node}" -> "{target}"\n')
    return "".join(edges)


def format_dependencies(dependencies: Iterable[Dependency]) -> str:
    return "".join(format_dependency(dependency) for dependency in dependencies)


def assemble_document(node_block: str, edge_block: str) -> str:
    """將節點區塊與邊區塊包裝為完整的 digraph 文件，區塊為空時仍為合法文件。"""
    return DOCUMENT_TEMPLATE.format(scheme=COLOR_SCHEME, nodes=node_block, edges=edge_block)
