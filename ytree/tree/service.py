"""树形查询服务协议

引擎通过该协议访问外部查询服务，协议之外的持久化细节由实现方负责。
所有方法都是协程，引擎按顺序逐个 await。

使用示例:
    class MenuQueryService:
        async def page_query(self, query): ...
        async def get_by_id(self, id): ...
        async def get_by_ids(self, ids): ...
        async def get_by_parent_ids(self, parent_ids): ...

    action = create_tree_table_action(MenuQueryService(), load_mode=LoadMode.ASYNC)
"""

from typing import List, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from .schemas import PageList, TreeNode, TreeQueryParameter

TNode = TypeVar("TNode", bound=TreeNode)
TQuery = TypeVar("TQuery", bound=TreeQueryParameter)


@runtime_checkable
class TreeQueryService(Protocol[TNode, TQuery]):
    """树形查询服务协议"""

    async def page_query(self, query: TQuery) -> PageList[TNode]:
        """分页查询，按 parent_id / path 前缀 / level 等条件过滤"""
        ...

    async def get_by_id(self, id: str) -> Optional[TNode]:
        """按标识获取单个节点，不存在返回 None"""
        ...

    async def get_by_ids(self, ids: Sequence[str]) -> List[TNode]:
        """按标识批量获取节点"""
        ...

    async def get_by_parent_ids(self, parent_ids: Sequence[str]) -> List[TNode]:
        """批量获取一组父节点的直接子节点"""
        ...


__all__ = ["TreeQueryService"]
