"""
树形查询 - 枚举定义

提供加载模式与加载操作枚举
"""

from enum import Enum
from typing import Any, Optional

from ..exceptions import Err, ErrorCode


class LoadMode(str, Enum):
    """加载模式

    在引擎实例生命周期内固定不变。
    """
    SYNC = "sync"               # 同步加载：一次加载整棵树
    ASYNC = "async"             # 异步加载：先加载根层级，展开时按需加载直接子节点
    ROOT_ASYNC = "root_async"   # 根节点异步：根层级异步，首次展开时加载被点击节点的整棵子树

    @classmethod
    def parse(cls, value: Any, default: "LoadMode" = None, strict: bool = False) -> "LoadMode":
        """解析加载模式

        支持枚举实例、枚举值或枚举名（忽略大小写，"RootAsync" 与 "root_async" 等价），
        空值返回默认值；无法识别时返回默认值，strict 为 True 时抛出异常。

        Args:
            value: 待解析的值
            default: 默认加载模式，未指定时为 SYNC
            strict: 无法识别时是否抛出异常

        Returns:
            加载模式

        Raises:
            ValidationException: strict 为 True 且无法识别
        """
        if default is None:
            default = cls.SYNC
        if isinstance(value, cls):
            return value
        if value is None:
            return default
        text = str(value).strip().lower().replace("_", "").replace("-", "")
        if not text:
            return default
        for mode in cls:
            if text in (mode.value.replace("_", ""), mode.name.lower().replace("_", "")):
                return mode
        if strict:
            raise Err.invalid(
                f"无效的加载模式: {value}",
                code=ErrorCode.INVALID_PARAMETER,
                field="load_mode",
                value=value,
            )
        return default


class LoadOperation(str, Enum):
    """加载操作

    每次调用的意图。
    """
    QUERY = "query"                     # 首次加载 / 根层级查询 / 搜索
    LOAD_CHILDREN = "load_children"     # 展开单个节点

    @classmethod
    def from_query(cls, query: Optional[Any]) -> "LoadOperation":
        """根据查询参数推断加载操作

        查询参数携带非空 parent_id 时为加载子节点，否则为查询。
        """
        parent_id = getattr(query, "parent_id", None) if query is not None else None
        if parent_id is None or str(parent_id).strip() == "":
            return cls.QUERY
        return cls.LOAD_CHILDREN


__all__ = [
    "LoadMode",
    "LoadOperation",
]
