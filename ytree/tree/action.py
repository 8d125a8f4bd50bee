"""树形查询动作

根据 加载模式 × 加载操作 选择处理流程，调用外部查询服务获取一页节点，
补齐缺失的祖先节点，最后交给结果转换器组装为树或树表。

处理流程（每次调用顺序执行）:
    before_query 钩子 -> 查询初始化 -> 分页查询（RootAsync 加载子节点时先按 id 查询被点击节点）
    -> 补齐祖先 / 展开预选节点 -> after_fetch 钩子 -> 结果转换

加载策略:
    ┌──────────────┬────────────────────────────┬────────────────────────────┬────────────────────────────┐
    │ 操作 \\ 模式   │ SYNC                       │ ASYNC                      │ ROOT_ASYNC                 │
    ├──────────────┼────────────────────────────┼────────────────────────────┼────────────────────────────┤
    │ QUERY        │ 整树查询 + 补齐祖先          │ 首次: 只查第1层 + 展开预选   │ 同 ASYNC                   │
    │              │                            │ 搜索: 查询 + 补齐祖先        │                            │
    │ LOAD_CHILDREN│ 同 ASYNC                   │ 只查直接子节点               │ 按路径查整棵子树，剔除自身    │
    └──────────────┴────────────────────────────┴────────────────────────────┴────────────────────────────┘

使用示例:
    from ytree.tree import create_tree_table_action, LoadMode, TreeQueryParameter

    query = TreeQueryParameter(parent_id="42")
    action = create_tree_table_action(service, load_mode=LoadMode.ASYNC, query=query)
    page = await action.query(query)
"""

from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from ..config import AppSettings, TreeSettings
from ..exceptions import Err, ErrorCode
from ..log import get_logger
from .enums import LoadMode, LoadOperation
from .result import NodeMapper, TreeConverter, TreeResultConverter, TreeTableConverter
from .schemas import PageList, TreeNode, TreeQueryParameter, is_empty_key
from .service import TreeQueryService
from .tree_utils import extend_distinct, get_missing_parent_ids, get_parent_ids_from_path, split_keys

logger = get_logger()

TNode = TypeVar("TNode", bound=TreeNode)
TQuery = TypeVar("TQuery", bound=TreeQueryParameter)
TResult = TypeVar("TResult")

BeforeQueryHook = Callable[[Any], None]
AfterFetchHook = Callable[[PageList[Any], Any], None]


class TreeQueryAction(Generic[TNode, TQuery, TResult]):
    """树形查询动作

    构造时固定加载模式、加载操作与各项开关，实例本身不保存请求状态，
    同一实例可被并发调用。

    Args:
        service: 树形查询服务
        converter: 结果转换器
        load_mode: 加载模式
        load_operation: 加载操作
        max_page_size: 整树 / 子树 / 直接子节点查询使用的页大小，默认取配置
        is_first_load: 是否首次加载（异步模式下只查询第1层）
        expand_all: 是否展开全部节点
        expand_for_root_async: 根节点异步模式加载子树时是否展开子树节点
        preselected_keys: 首次加载时需要展开到的节点标识，列表或逗号分隔字符串
        before_query: 查询前钩子，可修改查询参数
        after_fetch: 查询后钩子，可修改查询结果
        settings: 树形查询配置，也可传入 AppSettings（使用其 tree 子配置）
    """

    # 加载操作 × 加载模式 -> 处理方法
    POLICIES: Dict[Tuple[LoadOperation, LoadMode], str] = {
        (LoadOperation.QUERY, LoadMode.SYNC): "sync_load_query",
        (LoadOperation.QUERY, LoadMode.ASYNC): "async_load_query",
        (LoadOperation.QUERY, LoadMode.ROOT_ASYNC): "async_load_query",
        (LoadOperation.LOAD_CHILDREN, LoadMode.SYNC): "async_load_children",
        (LoadOperation.LOAD_CHILDREN, LoadMode.ASYNC): "async_load_children",
        (LoadOperation.LOAD_CHILDREN, LoadMode.ROOT_ASYNC): "root_async_load_children",
    }

    def __init__(
        self,
        service: TreeQueryService,
        converter: TreeResultConverter,
        load_mode: Union[LoadMode, str] = LoadMode.SYNC,
        load_operation: Union[LoadOperation, str] = LoadOperation.QUERY,
        *,
        max_page_size: Optional[int] = None,
        is_first_load: bool = False,
        expand_all: bool = False,
        expand_for_root_async: bool = True,
        preselected_keys: Union[str, Sequence[Any], None] = None,
        before_query: Optional[BeforeQueryHook] = None,
        after_fetch: Optional[AfterFetchHook] = None,
        settings: Union[TreeSettings, AppSettings, None] = None,
    ):
        if service is None:
            raise Err.argument_null("service")
        if converter is None:
            raise Err.argument_null("converter")

        if isinstance(settings, AppSettings):
            settings = settings.tree
        if max_page_size is not None and max_page_size < 1:
            raise Err.invalid(
                f"最大页大小必须大于 0: {max_page_size}",
                code=ErrorCode.INVALID_PARAMETER,
                field="max_page_size",
                value=max_page_size,
            )

        self.settings = settings or TreeSettings()
        self.service = service
        self.converter = converter
        self.load_mode = LoadMode.parse(load_mode, strict=True)
        self.load_operation = LoadOperation(load_operation)
        self.max_page_size = max_page_size if max_page_size is not None else self.settings.max_page_size
        self.is_first_load = is_first_load
        self.expand_all = expand_all
        self.expand_for_root_async = expand_for_root_async
        self.preselected_keys = tuple(split_keys(preselected_keys))
        self.before_query = before_query
        self.after_fetch = after_fetch

        self._policy = getattr(self, self.POLICIES[(self.load_operation, self.load_mode)])

    @property
    def path_separator(self) -> str:
        return self.settings.path_separator

    # ==================== 入口 ====================

    async def query(self, query: TQuery) -> TResult:
        """执行树形查询

        Args:
            query: 查询参数（会被原地修改）

        Returns:
            结果转换器的输出

        Raises:
            ArgumentNullException: 查询参数为空
            TreeContractException: 加载子节点时 parent_id 为空
        """
        if query is None:
            raise Err.argument_null("query")
        if self.before_query is not None:
            self.before_query(query)
        self.init_query(query)
        logger.debug(
            f"Tree query: mode={self.load_mode.value}, operation={self.load_operation.value}, "
            f"policy={self._policy.__name__}"
        )
        return await self._policy(query)

    def init_query(self, query: TQuery) -> TQuery:
        """查询初始化

        - 未指定排序时使用默认排序字段
        - 始终清空 path，层级关系由 parent_id / level 重新计算
        - 非加载子节点操作清空 parent_id
        """
        if not query.order:
            query.order = self.settings.default_order
        query.path = None
        if self.load_operation != LoadOperation.LOAD_CHILDREN:
            query.parent_id = None
        return query

    # ==================== 加载策略 ====================

    async def sync_load_query(self, query: TQuery) -> TResult:
        """同步加载：一次查询整棵树并补齐祖先"""
        page = await self.fetch_all(query)
        await self.backfill(page)
        return self.to_result(page, query, is_async=False, expand_all=self.expand_all)

    async def async_load_query(self, query: TQuery) -> TResult:
        """异步加载的根层级查询

        首次加载只查询第1层并展开预选节点；之后的查询（如搜索）查询匹配节点并补齐祖先。
        """
        if self.is_first_load:
            return await self.first_load_query(query)
        page = await self.fetch_all(query)
        await self.backfill(page)
        return self.to_result(page, query, is_async=True, expand_all=self.expand_all)

    async def first_load_query(self, query: TQuery) -> TResult:
        query.level = 1
        page = await self.fetch(query)
        if self.preselected_keys:
            await self.expand_preselected(page)
        return self.to_result(page, query, is_async=True, expand_all=self.expand_all)

    async def async_load_children(self, query: TQuery) -> TResult:
        """异步加载：只查询被点击节点的直接子节点"""
        self._require_parent_id(query)
        query.page = 1
        query.level = None
        query.path = None
        page = await self.fetch_all(query)
        return self.to_result(page, query, is_async=True, expand_all=self.expand_all)

    async def root_async_load_children(self, query: TQuery) -> TResult:
        """根节点异步加载：查询被点击节点的整棵子树，剔除被点击节点自身"""
        self._require_parent_id(query)
        query.page = 1
        clicked = await self.scope_to_subtree(query)
        page = await self.fetch_all(query)
        self.exclude_node(page, clicked.id)
        return self.to_result(page, query, is_async=False, expand_all=self.expand_for_root_async)

    # ==================== 查询执行 ====================

    async def fetch(self, query: TQuery) -> PageList[TNode]:
        """按调用方分页查询一页节点"""
        page = await self.service.page_query(query)
        logger.debug(
            f"Fetched {len(page.data)} of {page.total} tree nodes "
            f"(page={query.page}, page_size={query.page_size})"
        )
        return page

    async def fetch_all(self, query: TQuery) -> PageList[TNode]:
        """使用最大页大小查询，覆盖调用方的分页参数"""
        query.page_size = self.max_page_size
        return await self.fetch(query)

    async def scope_to_subtree(self, query: TQuery) -> TNode:
        """将查询范围改写为被点击节点的整棵子树

        按 id 获取被点击节点的路径，按路径前缀查询，清空 parent_id 与 level。

        Returns:
            被点击节点（标识为查询服务返回的规范形式）
        """
        node_id = query.parent_id
        node = await self.service.get_by_id(node_id)
        if node is None:
            raise Err.not_found(
                f"树节点不存在: {node_id}",
                code=ErrorCode.TREE_NODE_NOT_FOUND,
                resource_id=node_id,
            )
        if not node.path:
            raise Err.invalid(
                f"树节点缺少物化路径，无法加载子树: {node_id}",
                code=ErrorCode.INVALID_PARAMETER,
                node_id=node_id,
            )
        query.path = node.path
        query.level = None
        query.parent_id = None
        return node

    @staticmethod
    def exclude_node(page: PageList[TNode], node_id: str) -> PageList[TNode]:
        """从结果中剔除指定节点，总数减 1"""
        page.data[:] = [node for node in page.data if node.id != node_id]
        page.total = max(page.total - 1, 0)
        return page

    # ==================== 祖先补齐 ====================

    async def backfill(self, page: PageList[TNode]) -> PageList[TNode]:
        """补齐当前页缺失的祖先节点（原地修改 page.data）

        分页可能截断祖先链，存在 level > 1 的节点时，
        一次性批量查询路径上缺失的祖先，保证每个非根节点都能找到父节点。
        """
        if not any(node.level is not None and node.level > 1 for node in page.data):
            return page
        missing_ids = get_missing_parent_ids(page.data, separator=self.path_separator)
        if not missing_ids:
            return page
        parents = await self.service.get_by_ids(missing_ids)
        added = extend_distinct(page.data, parents)
        logger.debug(f"Backfilled {added} missing ancestor nodes ({len(missing_ids)} requested)")
        return page

    async def expand_preselected(self, page: PageList[TNode]) -> PageList[TNode]:
        """首次加载时展开到预选节点

        1. 查询预选节点
        2. 从路径解析每个预选节点的祖先标识（不含自身）
        3. 批量查询这些祖先的直接子节点，补齐仍缺失的祖先，合并到结果
        4. 将祖先节点标记为展开
        """
        selected = await self.service.get_by_ids(list(self.preselected_keys))

        ancestor_ids: List[str] = []
        for node in selected:
            for parent_id in get_parent_ids_from_path(node, separator=self.path_separator):
                if parent_id not in ancestor_ids:
                    ancestor_ids.append(parent_id)
        if not ancestor_ids:
            return page

        children = await self.service.get_by_parent_ids(ancestor_ids)
        extend_distinct(page.data, children)

        present = {node.id for node in page.data}
        missing_ids = [node_id for node_id in ancestor_ids if node_id not in present]
        if missing_ids:
            extend_distinct(page.data, await self.service.get_by_ids(missing_ids))

        expand_ids = set(ancestor_ids)
        for node in page.data:
            if node.id in expand_ids:
                node.expanded = True
        return page

    # ==================== 结果 ====================

    def to_result(self, page: PageList[TNode], query: TQuery, is_async: bool, expand_all: bool) -> TResult:
        if self.after_fetch is not None:
            self.after_fetch(page, query)
        return self.converter.to_result(page, is_async, expand_all)

    @staticmethod
    def _require_parent_id(query: TQuery) -> str:
        if is_empty_key(query.parent_id):
            raise Err.parent_required()
        return query.parent_id


def create_tree_table_action(
    service: TreeQueryService,
    load_mode: Union[LoadMode, str] = LoadMode.SYNC,
    query: Optional[TreeQueryParameter] = None,
    load_operation: Union[LoadOperation, str, None] = None,
    node_mapper: Optional[NodeMapper] = None,
    **options: Any,
) -> TreeQueryAction:
    """创建扁平树表查询动作

    未指定加载操作时根据查询参数推断：parent_id 非空为加载子节点，否则为查询。

    Args:
        service: 树形查询服务
        load_mode: 加载模式
        query: 查询参数，用于推断加载操作
        load_operation: 加载操作
        node_mapper: 目标节点转换函数
        **options: 透传给 TreeQueryAction 的其他参数

    使用示例:
        action = create_tree_table_action(service, LoadMode.ROOT_ASYNC, query=query)
        page = await action.query(query)
    """
    if load_operation is None:
        load_operation = LoadOperation.from_query(query)
    return TreeQueryAction(service, TreeTableConverter(node_mapper), load_mode, load_operation, **options)


def create_tree_action(
    service: TreeQueryService,
    load_mode: Union[LoadMode, str] = LoadMode.SYNC,
    query: Optional[TreeQueryParameter] = None,
    load_operation: Union[LoadOperation, str, None] = None,
    node_mapper: Optional[NodeMapper] = None,
    **options: Any,
) -> TreeQueryAction:
    """创建嵌套树查询动作，参数同 create_tree_table_action"""
    if load_operation is None:
        load_operation = LoadOperation.from_query(query)
    return TreeQueryAction(service, TreeConverter(node_mapper), load_mode, load_operation, **options)


__all__ = [
    "TreeQueryAction",
    "create_tree_table_action",
    "create_tree_action",
]
