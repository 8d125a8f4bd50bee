"""树形结构字段定义

提供树形查询所需的标准字段 Mixin，简化模型定义。

使用示例:
    from sqlalchemy import ForeignKey, Integer, String
    from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
    from ytree.tree import TreeFieldsMixin

    class Base(DeclarativeBase):
        pass

    class Menu(Base, TreeFieldsMixin):
        __tablename__ = "menu"

        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        # parent_id 需要自行定义（因为外键目标表名不同）
        parent_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("menu.id"), nullable=True)
        title: Mapped[str] = mapped_column(String(100))

    root = Menu(id=1, title="系统管理")
    root.init_path()          # path="/1/", level=1
    child = Menu(id=2, parent_id=1, title="用户管理")
    child.init_path(root)     # path="/1/2/", level=2
"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column


class TreeFieldsMixin:
    """树形结构字段 Mixin

    提供标准的树形字段定义，包括：
    - path: 节点路径（如 "/1/2/3/"）
    - level: 节点层级（根节点为1）
    - sort_id: 同级排序号
    - hide: 是否隐藏（隐藏的子节点不影响父节点的叶子判断）
    - enabled: 是否启用

    注意：
    - id、parent_id 字段需要用户自行定义
    """

    PATH_SEPARATOR: str = "/"

    # 节点路径，格式如 "/1/2/3/"
    path: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        default=None,
        index=True,
        comment="节点路径（如 /1/2/3/）"
    )

    level: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
        index=True,
        comment="节点层级（根节点为1）"
    )

    sort_id: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        comment="同级排序号"
    )

    hide: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="是否隐藏"
    )

    enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="是否启用"
    )

    def build_path(self, parent=None) -> str:
        """构建当前节点的路径

        Args:
            parent: 父节点，为空时视为根节点

        Returns:
            路径字符串，如 "/1/2/3/"
        """
        if parent is None or not parent.path:
            return f"{self.PATH_SEPARATOR}{self.id}{self.PATH_SEPARATOR}"
        return f"{parent.path}{self.id}{self.PATH_SEPARATOR}"

    def init_path(self, parent=None):
        """根据父节点初始化 path 和 level

        在创建或移动节点时调用，id 必须已赋值。
        """
        self.path = self.build_path(parent)
        self.level = 1 if parent is None else (parent.level or 0) + 1
        return self


__all__ = [
    "TreeFieldsMixin",
]
