"""基于 SQLAlchemy 的树形查询服务

为任意包含 id / parent_id / path / level / sort_id 字段的映射类实现 TreeQueryService 协议，
查询结果转换为 TreeNode（或其子类）。

查询条件:
    - parent_id: 等于
    - path: 前缀匹配（LIKE 'path%'）
    - level: 等于
    - enabled: 等于（模型存在 enabled 字段时生效）

使用示例:
    from ytree.tree import SQLAlchemyTreeQueryService, create_tree_table_action

    service = SQLAlchemyTreeQueryService(session, Menu, dto_class=MenuNode)
    action = create_tree_table_action(service, LoadMode.ROOT_ASYNC, query=query)
    page = await action.query(query)
"""

import re
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from ..exceptions import Err, ErrorCode
from ..log import get_logger
from .schemas import PageList, TreeNode, TreeQueryParameter, is_empty_key

logger = get_logger()

TNode = TypeVar("TNode", bound=TreeNode)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """SortId -> sort_id"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class SQLAlchemyTreeQueryService(Generic[TNode]):
    """SQLAlchemy 树形查询服务

    Args:
        session: 数据库会话
        model: 映射类
        dto_class: 输出节点类型，默认 TreeNode
    """

    def __init__(self, session: Session, model: Type[Any], dto_class: Type[TNode] = TreeNode):
        if session is None:
            raise Err.argument_null("session")
        if model is None:
            raise Err.argument_null("model")

        self.session = session
        self.model = model
        self.dto_class = dto_class

        mapper = inspect(model)
        self._column_keys = [attr.key for attr in mapper.column_attrs]
        self._primary_key = mapper.primary_key[0]
        self._id_key = mapper.get_property_by_column(self._primary_key).key

    # ==================== TreeQueryService ====================

    async def page_query(self, query: TreeQueryParameter) -> PageList[TNode]:
        stmt = select(self.model).where(*self.build_conditions(query))

        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = self.session.scalar(count_stmt) or 0

        stmt = stmt.order_by(*self.parse_order(query.order))
        stmt = stmt.offset((query.page - 1) * query.page_size).limit(query.page_size)
        rows = self.session.execute(stmt).scalars().all()

        logger.debug(f"{self.model.__name__} page query: {len(rows)} of {total} rows")
        return PageList(
            data=[self.to_node(row) for row in rows],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    async def get_by_id(self, id: str) -> Optional[TNode]:
        if is_empty_key(id):
            return None
        row = self.session.get(self.model, self.coerce_id(id))
        return self.to_node(row) if row is not None else None

    async def get_by_ids(self, ids: Sequence[str]) -> List[TNode]:
        if not ids:
            return []
        id_column = getattr(self.model, self._id_key)
        stmt = select(self.model).where(id_column.in_([self.coerce_id(value) for value in ids]))
        return [self.to_node(row) for row in self.session.execute(stmt).scalars().all()]

    async def get_by_parent_ids(self, parent_ids: Sequence[str]) -> List[TNode]:
        if not parent_ids:
            return []
        stmt = select(self.model).where(
            self.model.parent_id.in_([self.coerce_id(value) for value in parent_ids])
        )
        stmt = stmt.order_by(*self.parse_order("sort_id" if "sort_id" in self._column_keys else None))
        return [self.to_node(row) for row in self.session.execute(stmt).scalars().all()]

    # ==================== 查询构建 ====================

    def build_conditions(self, query: TreeQueryParameter) -> list:
        conditions = []
        if not is_empty_key(query.parent_id):
            conditions.append(self.model.parent_id == self.coerce_id(query.parent_id))
        if query.path:
            conditions.append(self.model.path.startswith(query.path, autoescape=True))
        if query.level is not None:
            conditions.append(self.model.level == query.level)
        if query.enabled is not None and "enabled" in self._column_keys:
            conditions.append(self.model.enabled == query.enabled)
        return conditions

    def parse_order(self, order: Optional[str]) -> list:
        """解析排序表达式

        格式: "field [asc|desc], ..."，字段名支持 snake_case 与 CamelCase。
        末尾追加主键升序，相同排序值的行顺序固定，分页不会重复或遗漏。

        Raises:
            ValidationException: 字段不存在或排序方向无效
        """
        clauses = []
        keys = set()
        for part in (order or "").split(","):
            tokens = part.split()
            if not tokens:
                continue
            direction = tokens[1].lower() if len(tokens) > 1 else "asc"
            if len(tokens) > 2 or direction not in ("asc", "desc"):
                raise Err.invalid(f"无效的排序表达式: {part.strip()}", field="order", value=order)
            key = self._resolve_key(tokens[0], order)
            keys.add(key)
            column = getattr(self.model, key)
            clauses.append(column.desc() if direction == "desc" else column.asc())
        if self._id_key not in keys:
            clauses.append(getattr(self.model, self._id_key).asc())
        return clauses

    def _resolve_key(self, name: str, order: str) -> str:
        for key in (name, to_snake_case(name)):
            if key in self._column_keys:
                return key
        raise Err.invalid(f"不支持的排序字段: {name}", field="order", value=order)

    def coerce_id(self, value: Any) -> Any:
        """将字符串标识转换为主键的 Python 类型"""
        try:
            python_type = self._primary_key.type.python_type
        except NotImplementedError:
            return value
        if isinstance(value, python_type):
            return value
        try:
            return python_type(value)
        except (TypeError, ValueError):
            raise Err.invalid(
                f"无效的节点标识: {value}",
                code=ErrorCode.INVALID_PARAMETER,
                field="id",
                value=value,
            )

    # ==================== 结果转换 ====================

    def to_node(self, row: Any) -> TNode:
        """将模型实例转换为节点，只读取列属性，不触发关系加载"""
        values: Dict[str, Any] = {key: getattr(row, key) for key in self._column_keys}
        return self.dto_class.model_validate(values)


__all__ = [
    "SQLAlchemyTreeQueryService",
    "to_snake_case",
]
