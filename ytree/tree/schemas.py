"""树形查询 - 数据模型

提供树节点、树形查询参数与分页容器。

使用示例:
    from ytree.tree import TreeNode, TreeQueryParameter, PageList

    class MenuNode(TreeNode):
        name: str = ""

    query = TreeQueryParameter(page=1, page_size=20)
    page = PageList(data=[MenuNode(id="1", name="系统管理")], total=1)
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator, model_validator

T = TypeVar("T")


def _to_key(value: Any) -> Optional[str]:
    """将 int / UUID 等主键统一为字符串"""
    if value is None:
        return None
    return str(value)


def is_empty_key(value: Any) -> bool:
    """判断节点标识是否为空（None 或空白字符串）"""
    return value is None or str(value).strip() == ""


class TreeNode(PydanticBaseModel):
    """树节点

    叶子、展开等界面状态使用 Optional[bool]：None 表示"尚未计算"，与"计算结果为 False"区分。
    业务节点继承本类并追加自己的字段（如 name、icon）。
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, extra="ignore")

    id: str = Field(description="节点标识")
    parent_id: Optional[str] = Field(default=None, description="父节点标识，为空表示根节点候选")
    path: Optional[str] = Field(default=None, description="物化路径，如 /1/2/3/")
    level: Optional[int] = Field(default=None, description="层级，顶层为 1")
    sort_id: Optional[int] = Field(default=None, description="同级排序号")
    leaf: Optional[bool] = Field(default=None, description="是否叶子节点")
    expanded: Optional[bool] = Field(default=None, description="是否展开")
    hide: Optional[bool] = Field(default=None, description="是否隐藏")
    selectable: Optional[bool] = Field(default=None, description="是否可选")
    checked: Optional[bool] = Field(default=None, description="是否勾选")
    disabled: Optional[bool] = Field(default=None, description="是否禁用")
    children: List["TreeNode"] = Field(default_factory=list, description="子节点，仅嵌套结果填充")

    @field_validator("id", "parent_id", mode="before")
    @classmethod
    def _coerce_key(cls, value: Any) -> Optional[str]:
        return _to_key(value)

    @property
    def is_root_candidate(self) -> bool:
        return is_empty_key(self.parent_id)


class TreeQueryParameter(PydanticBaseModel):
    """树形查询参数

    由调用方构造，查询初始化时被原地修改，不做持久化。
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    parent_id: Optional[str] = Field(default=None, description="父节点标识")
    path: Optional[str] = Field(default=None, description="路径前缀")
    level: Optional[int] = Field(default=None, description="层级")
    enabled: Optional[bool] = Field(default=None, description="是否启用")
    order: Optional[str] = Field(default=None, description="排序，如 \"sort_id desc, level\"")
    page: int = Field(default=1, description="页码")
    page_size: int = Field(default=10, description="每页数量")

    @field_validator("parent_id", mode="before")
    @classmethod
    def _coerce_parent_id(cls, value: Any) -> Optional[str]:
        return _to_key(value)

    @model_validator(mode='after')
    def validate_pagination(self):
        self.page = max(self.page, 1)
        self.page_size = max(self.page_size, 1)
        return self


@dataclass
class PageList(Generic[T]):
    """分页容器

    total 可能被引擎修改（根节点异步加载时剔除被点击节点）。
    """
    data: List[T] = field(default_factory=list)  # 当前页数据
    total: int = 0  # 总条数
    page: int = 1  # 当前页码
    page_size: int = 0  # 每页条数

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def convert(self, data: Iterable[Any]) -> "PageList[Any]":
        """保留分页信息，替换数据列表"""
        return PageList(data=list(data), total=self.total, page=self.page, page_size=self.page_size)

    def to_dict(self):
        """转换为字典格式，支持JSON序列化"""
        return {
            "data": [
                item.model_dump() if isinstance(item, PydanticBaseModel) else item
                for item in self.data
            ],
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


__all__ = [
    "TreeNode",
    "TreeQueryParameter",
    "PageList",
    "is_empty_key",
]
