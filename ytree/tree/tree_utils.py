"""树形结构工具函数

提供物化路径解析、缺失父节点识别等通用工具函数。

使用示例:
    from ytree.tree import get_parent_ids_from_path, get_missing_parent_ids

    node = TreeNode(id="3", parent_id="2", path="/1/2/3/", level=3)
    get_parent_ids_from_path(node)                     # ["1", "2"]
    get_parent_ids_from_path(node, exclude_self=False) # ["1", "2", "3"]

    # 当前页缺少的祖先节点
    get_missing_parent_ids([node])                     # ["1", "2"]
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .schemas import TreeNode, is_empty_key

TNode = TypeVar("TNode", bound=TreeNode)

# 默认路径分隔符
PATH_SEPARATOR = "/"


def split_keys(keys: Any) -> List[str]:
    """将标识集合统一为字符串列表

    支持逗号分隔的字符串或任意可迭代对象，忽略空值，保持原有顺序并去重。

    Args:
        keys: "1,2,3" 或 ["1", 2, 3]

    Returns:
        标识列表
    """
    if keys is None:
        return []
    if isinstance(keys, str):
        items = keys.split(",")
    else:
        items = list(keys)

    result: List[str] = []
    for item in items:
        if is_empty_key(item):
            continue
        key = str(item).strip()
        if key not in result:
            result.append(key)
    return result


def get_parent_ids_from_path(
    node: Optional[TreeNode],
    exclude_self: bool = True,
    separator: str = PATH_SEPARATOR,
) -> List[str]:
    """从物化路径解析祖先节点标识

    path 格式: "/1/2/3/" -> ["1", "2"]（默认不包含自己）

    Args:
        node: 树节点
        exclude_self: 是否排除节点自身（比较时忽略大小写）
        separator: 路径分隔符

    Returns:
        从根开始的祖先标识列表
    """
    if node is None or not node.path:
        return []

    result = [part.strip() for part in node.path.split(separator) if part.strip()]
    if exclude_self:
        own_id = str(node.id).lower()
        result = [part for part in result if part.lower() != own_id]
    return result


def get_missing_parent_ids(
    nodes: Iterable[TreeNode],
    separator: str = PATH_SEPARATOR,
) -> List[str]:
    """获取节点集合中缺失的祖先节点标识

    汇总每个节点路径上的祖先标识，去掉已在集合中的标识。

    Args:
        nodes: 节点集合
        separator: 路径分隔符

    Returns:
        缺失的祖先标识列表（按首次出现顺序，已去重）
    """
    node_list = [node for node in nodes if node is not None]
    present = {node.id for node in node_list}

    result: List[str] = []
    for node in node_list:
        for parent_id in get_parent_ids_from_path(node, separator=separator):
            if parent_id not in present and parent_id not in result:
                result.append(parent_id)
    return result


def extend_distinct(target: List[TNode], nodes: Iterable[TNode]) -> int:
    """追加节点并按 id 去重

    Args:
        target: 目标列表（原地修改）
        nodes: 待追加节点

    Returns:
        实际追加的节点数量
    """
    seen = {node.id for node in target}
    added = 0
    for node in nodes:
        if node is None or node.id in seen:
            continue
        seen.add(node.id)
        target.append(node)
        added += 1
    return added


def sort_key(node: TreeNode) -> Tuple[bool, int]:
    """同级排序键：按 sort_id 升序，未设置的排在前面"""
    return (node.sort_id is not None, node.sort_id or 0)


def sort_nodes(nodes: Sequence[TNode]) -> List[TNode]:
    """按 sort_id 稳定排序"""
    return sorted(nodes, key=sort_key)


__all__ = [
    "PATH_SEPARATOR",
    "split_keys",
    "get_parent_ids_from_path",
    "get_missing_parent_ids",
    "extend_distinct",
    "sort_key",
    "sort_nodes",
]
