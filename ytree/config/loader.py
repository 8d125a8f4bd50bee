"""配置加载

load_settings() 是宿主应用接入 ytree 的入口：读取可选的 YAML 文件，
合并关键字覆盖项，构建 AppSettings，并按其中的 logging 子配置挂载包日志器。
返回的 AppSettings 可直接传给 TreeQueryAction / create_tree_table_action。

使用示例:
    from ytree.config import load_settings
    from ytree.tree import create_tree_table_action

    settings = load_settings("config/settings.yaml", tree={"max_page_size": 200})
    action = create_tree_table_action(service, "RootAsync", settings=settings)
"""

import os
from typing import Any, Dict, Optional

import yaml

from ..log import configure_logging
from .settings import AppSettings


def read_yaml(config_path: str, base_dir: Optional[str] = None) -> Dict[str, Any]:
    """读取 YAML 文件为字典，空文件返回 {}

    Raises:
        FileNotFoundError: 文件不存在
        yaml.YAMLError: YAML 语法错误
    """
    path = config_path if os.path.isabs(config_path) else os.path.join(base_dir or os.getcwd(), config_path)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"配置文件不存在: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def load_settings(
    config_path: Optional[str] = None,
    base_dir: Optional[str] = None,
    configure_log: bool = True,
    **overrides,
) -> AppSettings:
    """构建 AppSettings

    Args:
        config_path: YAML 配置文件路径，为空则只使用默认值与环境变量
        base_dir: 解析相对路径的基础目录，默认当前工作目录
        configure_log: 是否按 logging 子配置挂载 "ytree" 包日志器
        **overrides: 顶层覆盖项，如 tree={"max_page_size": 100}

    Returns:
        AppSettings 实例
    """
    data = read_yaml(config_path, base_dir) if config_path else {}
    data.update(overrides)
    settings = AppSettings(**data)
    if configure_log:
        configure_logging(settings.logging)
    return settings
