# src/donegraph/models/graph.py
"""
輸入圖形的資料模型。

所有模型皆為 frozen + strict：解碼時型別必須完全吻合 (例如 doneness 不接受
"45" 或 45.0)，解碼成功後即不可變。
"""

# 1. 標準庫導入
# (無)

# 2. 第三方庫導入
from pydantic import BaseModel, ConfigDict

# 3. 本專案導入
# (無)


class Node(BaseModel):
    """一個工作項目。doneness 的範圍檢查交由 colour() 負責。"""

    model_config = ConfigDict(frozen=True, strict=True)

    short_code: str
    text: str
    description: str
    doneness: int


class Dependency(BaseModel):
    """`node` 依賴 `depends_on` 中的每一個節點；不檢查引用是否存在。"""

    model_config = ConfigDict(frozen=True, strict=True)

    node: str
    depends_on: list[str]


class Graph(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    nodes: list[Node]
    dependencies: list[Dependency]
