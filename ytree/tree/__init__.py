"""树形查询模块

将外部查询服务返回的扁平节点组装为前端树组件可直接使用的树形结果。

主要组件:
- TreeQueryAction: 树形查询动作（加载模式 × 加载操作 策略）
- TreeTableResult / TreeResult: 扁平树表 / 嵌套树结果构建
- TreeTableConverter / TreeConverter: 结果转换器
- TreeQueryService: 外部查询服务协议
- SQLAlchemyTreeQueryService: 基于 SQLAlchemy 的查询服务实现
- TreeFieldsMixin: 树形字段定义 Mixin
- 工具函数: 物化路径解析、缺失祖先识别

使用示例:
    from ytree.tree import (
        LoadMode,
        TreeQueryParameter,
        SQLAlchemyTreeQueryService,
        create_tree_action,
    )

    service = SQLAlchemyTreeQueryService(session, Menu)

    # 首次加载只查询第1层，并展开到预选节点
    query = TreeQueryParameter(page=1, page_size=20)
    action = create_tree_action(
        service,
        LoadMode.ASYNC,
        query=query,
        is_first_load=True,
        preselected_keys="12,34",
    )
    page = await action.query(query)

    # 点击节点后加载子节点
    query = TreeQueryParameter(parent_id="12")
    page = await create_tree_action(service, LoadMode.ASYNC, query=query).query(query)
"""

from .enums import LoadMode, LoadOperation
from .schemas import TreeNode, TreeQueryParameter, PageList, is_empty_key
from .tree_utils import (
    PATH_SEPARATOR,
    split_keys,
    get_parent_ids_from_path,
    get_missing_parent_ids,
    extend_distinct,
    sort_key,
    sort_nodes,
)
from .service import TreeQueryService
from .result import (
    TreeTableResult,
    TreeResult,
    TreeResultConverter,
    TreeTableConverter,
    TreeConverter,
    NodeMapper,
)
from .action import TreeQueryAction, create_tree_table_action, create_tree_action
from .fields import TreeFieldsMixin
from .sqlalchemy_service import SQLAlchemyTreeQueryService, to_snake_case

__all__ = [
    # 枚举
    "LoadMode",
    "LoadOperation",
    # 数据模型
    "TreeNode",
    "TreeQueryParameter",
    "PageList",
    "is_empty_key",
    # 工具函数
    "PATH_SEPARATOR",
    "split_keys",
    "get_parent_ids_from_path",
    "get_missing_parent_ids",
    "extend_distinct",
    "sort_key",
    "sort_nodes",
    # 查询服务
    "TreeQueryService",
    "SQLAlchemyTreeQueryService",
    "to_snake_case",
    "TreeFieldsMixin",
    # 结果
    "TreeTableResult",
    "TreeResult",
    "TreeResultConverter",
    "TreeTableConverter",
    "TreeConverter",
    "NodeMapper",
    # 查询动作
    "TreeQueryAction",
    "create_tree_table_action",
    "create_tree_action",
]
