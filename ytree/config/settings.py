"""
配置模块
提供树形查询引擎的默认配置，业务项目可以继承并覆盖
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class TreeSettings(BaseSettings):
    """树形查询配置

    使用示例:
        from ytree.config import TreeSettings

        tree_config = TreeSettings(
            max_page_size=500,
            path_separator=",",
        )

    配置说明:
        - max_page_size: 整树查询、子树查询、直接子节点查询时强制使用的页大小
        - default_order: 调用方未指定排序时使用的稳定排序键
        - path_separator: 物化路径分隔符，路径格式如 "/1/2/3/"
    """
    max_page_size: int = Field(default=999, ge=1, description="最大页大小")
    default_order: str = Field(default="sort_id", description="默认排序字段")
    path_separator: str = Field(default="/", min_length=1, description="物化路径分隔符")

    class Config:
        env_prefix = "YTREE_TREE_"


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        from ytree.config import LoggingSettings
        from ytree.log import configure_logging

        configure_logging(LoggingSettings(level="DEBUG", file_path="logs/tree.log"))
    """
    level: str = Field(default="INFO", description="日志级别")
    file_path: str = Field(default="", description="日志文件路径，为空则不写文件")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")

    class Config:
        env_prefix = "YTREE_LOG_"


class AppSettings(BaseSettings):
    """应用基础配置

    将各子配置类聚合为嵌套结构。

    配置优先级（从高到低）:
        load_settings 覆盖项 > YAML 配置文件 > 环境变量 > 代码中的默认值

    内置子配置及环境变量前缀:
        - tree:    TreeSettings    (YTREE_TREE_)
        - logging: LoggingSettings (YTREE_LOG_)

    使用示例:
        from ytree.config import load_settings

        settings = load_settings("config/settings.yaml")

    YAML 配置示例 (config/settings.yaml):
        tree:
          max_page_size: 500
        logging:
          level: "DEBUG"
    """
    tree: TreeSettings = Field(default_factory=TreeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
