"""树形查询测试辅助工具

提供节点构造函数与内存版 TreeQueryService（记录每次调用，模拟过滤与分页）。
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ytree.tree import PageList, TreeNode, TreeQueryParameter, sort_nodes


def build_nodes(rows: Iterable[Tuple[Any, ...]]) -> List[TreeNode]:
    """按 (id, parent_id, sort_id[, hide]) 构造节点，自动计算 path 与 level

    父节点必须出现在子节点之前。
    """
    nodes: Dict[str, TreeNode] = {}
    for row in rows:
        node_id, parent_id, sort_id = row[0], row[1], row[2]
        hide = row[3] if len(row) > 3 else None
        parent = nodes.get(str(parent_id)) if parent_id is not None else None
        path = f"{parent.path}{node_id}/" if parent else f"/{node_id}/"
        level = parent.level + 1 if parent else 1
        nodes[str(node_id)] = TreeNode(
            id=node_id,
            parent_id=parent_id,
            path=path,
            level=level,
            sort_id=sort_id,
            hide=hide,
        )
    return list(nodes.values())


def sample_nodes() -> List[TreeNode]:
    """示例树

    1
    ├── 2
    │   ├── 4
    │   └── 5 (hide)
    └── 3
    6
    └── 7
    """
    return build_nodes([
        ("1", None, 1),
        ("2", "1", 1),
        ("3", "1", 2),
        ("4", "2", 1),
        ("5", "2", 2, True),
        ("6", None, 2),
        ("7", "6", 1),
    ])


class InMemoryTreeQueryService:
    """内存版树形查询服务

    每次调用返回节点副本。

    Args:
        nodes: 全部节点
        error: 设置后所有调用抛出该异常
    """

    def __init__(self, nodes: Sequence[TreeNode], error: Optional[Exception] = None):
        self.nodes = list(nodes)
        self.error = error
        self.calls: List[Tuple[str, Any]] = []

    def _record(self, method: str, argument: Any):
        self.calls.append((method, argument))
        if self.error is not None:
            raise self.error

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def calls_of(self, method: str) -> List[Any]:
        return [argument for name, argument in self.calls if name == method]

    @staticmethod
    def _copy(nodes: Iterable[TreeNode]) -> List[TreeNode]:
        return [node.model_copy(deep=True) for node in nodes]

    def _matches(self, node: TreeNode, query: TreeQueryParameter) -> bool:
        if query.parent_id and node.parent_id != query.parent_id:
            return False
        if query.path and not (node.path or "").startswith(query.path):
            return False
        if query.level is not None and node.level != query.level:
            return False
        return True

    async def page_query(self, query: TreeQueryParameter) -> PageList[TreeNode]:
        self._record("page_query", query.model_copy())
        matched = sort_nodes([node for node in self.nodes if self._matches(node, query)])
        start = (query.page - 1) * query.page_size
        return PageList(
            data=self._copy(matched[start:start + query.page_size]),
            total=len(matched),
            page=query.page,
            page_size=query.page_size,
        )

    async def get_by_id(self, id: str) -> Optional[TreeNode]:
        self._record("get_by_id", id)
        for node in self.nodes:
            if node.id == id:
                return node.model_copy(deep=True)
        return None

    async def get_by_ids(self, ids: Sequence[str]) -> List[TreeNode]:
        self._record("get_by_ids", list(ids))
        return self._copy(node for node in self.nodes if node.id in ids)

    async def get_by_parent_ids(self, parent_ids: Sequence[str]) -> List[TreeNode]:
        self._record("get_by_parent_ids", list(parent_ids))
        return self._copy(node for node in self.nodes if node.parent_id in parent_ids)
