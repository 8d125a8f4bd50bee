"""配置模块

- AppSettings: 聚合配置，可直接传给树形查询动作
- 子配置类: TreeSettings, LoggingSettings
- load_settings: 从 YAML 文件 + 覆盖项构建 AppSettings 并配置日志

快速开始:
    from ytree.config import load_settings

    settings = load_settings("config/settings.yaml")

配置优先级: 关键字覆盖项 > YAML 文件 > 环境变量 > 默认值
"""

from .settings import (
    AppSettings,
    TreeSettings,
    LoggingSettings,
)

from .loader import (
    read_yaml,
    load_settings,
)

__all__ = [
    "AppSettings",
    "TreeSettings",
    "LoggingSettings",
    "read_yaml",
    "load_settings",
]
