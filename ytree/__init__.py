"""
YTree - 树形数据查询基础类库

提供树形查询、结果组装、配置、日志、异常等基础功能
"""

from .version import __version__, __author__, __description__

# 导出树形查询
from .tree import (
    LoadMode,
    LoadOperation,
    TreeNode,
    TreeQueryParameter,
    PageList,
    TreeQueryService,
    SQLAlchemyTreeQueryService,
    TreeFieldsMixin,
    TreeTableResult,
    TreeResult,
    TreeTableConverter,
    TreeConverter,
    TreeQueryAction,
    create_tree_table_action,
    create_tree_action,
)

# 导出配置
from .config import AppSettings, TreeSettings, LoggingSettings, load_settings

# 导出日志
from .log import configure_logging, get_logger

# 导出异常
from .exceptions import (
    Err,
    ErrorCode,
    BusinessException,
    ArgumentNullException,
    TreeContractException,
    TreeIntegrityException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # 树形查询
    "LoadMode",
    "LoadOperation",
    "TreeNode",
    "TreeQueryParameter",
    "PageList",
    "TreeQueryService",
    "SQLAlchemyTreeQueryService",
    "TreeFieldsMixin",
    "TreeTableResult",
    "TreeResult",
    "TreeTableConverter",
    "TreeConverter",
    "TreeQueryAction",
    "create_tree_table_action",
    "create_tree_action",
    # 配置
    "AppSettings",
    "TreeSettings",
    "LoggingSettings",
    "load_settings",
    # 日志
    "configure_logging",
    "get_logger",
    # 异常
    "Err",
    "ErrorCode",
    "BusinessException",
    "ArgumentNullException",
    "TreeContractException",
    "TreeIntegrityException",
    "ResourceNotFoundException",
    "ValidationException",
]
