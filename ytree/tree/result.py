"""树形结果构建

将扁平节点集合组装为树形结果，并计算节点的叶子、展开状态。

- TreeTableResult: 扁平树表结果，按深度优先先序输出，层级关系仅通过 parent_id 保留
- TreeResult: 嵌套树结果，子节点填充到 children
- TreeTableConverter / TreeConverter: 引擎使用的结果转换器

使用示例:
    from ytree.tree import TreeResult, TreeNode

    nodes = [
        TreeNode(id="1", parent_id=None, level=1, sort_id=1),
        TreeNode(id="2", parent_id="1", level=2, sort_id=1),
        TreeNode(id="3", parent_id="1", level=2, sort_id=2, hide=True),
    ]
    roots = TreeResult(nodes).get_result()
    # roots[0].id == "1"，roots[0].children 为 ["2", "3"]
    # roots[0].leaf is False（存在未隐藏的子节点 2），children[0].leaf is True
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Protocol, Set, Tuple, TypeVar

from ..exceptions import Err
from ..log import get_logger
from .schemas import PageList, TreeNode, is_empty_key
from .tree_utils import sort_nodes

logger = get_logger()

TNode = TypeVar("TNode", bound=TreeNode)
TResult = TypeVar("TResult", covariant=True)

NodeMapper = Callable[[TreeNode], Any]


class TreeTableResult(Generic[TNode]):
    """扁平树表结果

    根节点识别:
        - 集合中存在 parent_id 为空的节点时，根节点即这些节点
        - 否则（子树切片），根节点为 level 最小的节点

    根节点及同级节点按 sort_id 升序排列，深度优先遍历。

    Args:
        data: 扁平节点集合
        is_async: 是否异步加载（异步时无法判断真实叶子状态，一律 leaf=False）
        expand_all: 是否展开全部节点
        node_mapper: 目标节点转换函数，默认原样输出
    """

    def __init__(
        self,
        data: Iterable[TNode],
        is_async: bool = False,
        expand_all: bool = False,
        node_mapper: Optional[NodeMapper] = None,
    ):
        if data is None:
            raise Err.argument_null("data")
        self._data: List[TNode] = list(data)
        self._async = is_async
        self._expand_all = expand_all
        self._node_mapper = node_mapper
        self._result: List[Any] = []
        self._reached: Set[int] = set()
        self._children_index = self._build_children_index()
        self._all_top_level = all(node.level == 1 for node in self._data)

    def _build_children_index(self) -> Dict[str, List[TNode]]:
        index: Dict[str, List[TNode]] = defaultdict(list)
        for node in self._data:
            if not is_empty_key(node.parent_id):
                index[node.parent_id].append(node)
        return {parent_id: sort_nodes(children) for parent_id, children in index.items()}

    # ==================== 结果构建 ====================

    def get_result(self) -> List[Any]:
        """构建结果

        Returns:
            目标节点列表

        Raises:
            TreeIntegrityException: parent_id 数据存在环
        """
        for root in self.get_root_nodes():
            self._add_node(root, (root.id,))

        orphan_ids = [node.id for node in self._data if id(node) not in self._reached]
        if orphan_ids:
            logger.warning(
                f"{len(orphan_ids)} tree nodes are not reachable from any root and were left out: {orphan_ids}",
                extra={"orphan_ids": orphan_ids},
            )
        return self._result

    def get_root_nodes(self) -> List[TNode]:
        """获取根节点，按 sort_id 排序"""
        if any(node.is_root_candidate for node in self._data):
            roots = [node for node in self._data if node.is_root_candidate]
        else:
            min_level = min(
                (node.level for node in self._data if node.level is not None),
                default=None,
            )
            roots = [node for node in self._data if node.level == min_level]
        return sort_nodes(roots)

    def get_children(self, node: TNode) -> List[TNode]:
        """获取直接子节点，按 sort_id 排序"""
        return list(self._children_index.get(node.id, []))

    def _add_node(self, node: TNode, chain: Tuple[str, ...]):
        self._mark_reached(node)
        self.init_node(node)
        self._add_destination_node(node)
        for child in self.get_children(node):
            self._add_node(child, self._extend_chain(chain, child))

    def _add_destination_node(self, node: TNode):
        self._result.append(self.to_destination_node(node))

    def to_destination_node(self, node: TNode) -> Any:
        if self._node_mapper is None:
            return node
        return self._node_mapper(node)

    def _mark_reached(self, node: TNode):
        self._reached.add(id(node))

    @staticmethod
    def _extend_chain(chain: Tuple[str, ...], child: TNode) -> Tuple[str, ...]:
        """沿下降路径追加节点，检测到环时抛出异常"""
        if child.id in chain:
            raise Err.cycle(
                f"树形数据存在循环引用: {' -> '.join(chain + (child.id,))}",
                node_id=child.id,
                chain=list(chain),
            )
        return chain + (child.id,)

    # ==================== 节点状态 ====================

    def init_node(self, node: TNode):
        """初始化节点叶子、展开状态"""
        self.init_leaf(node)
        self.init_expanded(node)

    def init_leaf(self, node: TNode):
        node.leaf = False
        if self._async:
            return
        if self.is_leaf(node):
            node.leaf = True

    def is_leaf(self, node: TNode) -> bool:
        """没有子节点，或子节点全部隐藏"""
        children = self._children_index.get(node.id)
        if not children:
            return True
        return all(child.hide is True for child in children)

    def init_expanded(self, node: TNode):
        if not self._expand_all:
            return
        if not self._async:
            node.expanded = True
            return
        # 只有一层数据时没有可展开的内容
        if self._all_top_level:
            return
        if node.leaf is False:
            node.expanded = True


class TreeResult(TreeTableResult[TNode]):
    """嵌套树结果

    子节点先挂载到 children，再将根节点转换为目标节点。
    """

    def _add_node(self, node: TNode, chain: Tuple[str, ...]):
        self._mark_reached(node)
        self.init_node(node)
        self._add_children(node, chain)
        self._add_destination_node(node)

    def _add_children(self, node: TNode, chain: Tuple[str, ...]):
        children = self.get_children(node)
        for child in children:
            self._mark_reached(child)
            self.init_node(child)
        node.children = children
        for child in children:
            self._add_children(child, self._extend_chain(chain, child))


# ==================== 结果转换器 ====================

class TreeResultConverter(Protocol[TResult]):
    """结果转换器协议

    具体转换器只需要实现 to_result 一个方法。
    """

    def to_result(self, page: PageList[Any], is_async: bool = False, expand_all: bool = False) -> TResult:
        ...


class TreeTableConverter:
    """扁平树表转换器，返回保留分页信息的 PageList"""

    result_class = TreeTableResult

    def __init__(self, node_mapper: Optional[NodeMapper] = None):
        self.node_mapper = node_mapper

    def to_result(self, page: PageList[Any], is_async: bool = False, expand_all: bool = False) -> PageList[Any]:
        nodes = self.result_class(page.data, is_async, expand_all, self.node_mapper).get_result()
        return page.convert(nodes)


class TreeConverter(TreeTableConverter):
    """嵌套树转换器，PageList.data 为根节点列表"""

    result_class = TreeResult


__all__ = [
    "TreeTableResult",
    "TreeResult",
    "TreeResultConverter",
    "TreeTableConverter",
    "TreeConverter",
    "NodeMapper",
]
