"""
日志工具模块

ytree 内部模块通过 get_logger() 获取 "ytree.*" 命名空间下的日志器；
宿主应用可调用 configure_logging() 为 "ytree" 包日志器挂载处理器，
也可以不配置，直接沿用宿主的根日志器。
"""

import inspect
import logging
import os

PACKAGE_LOGGER = "ytree"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """按日志配置为包日志器挂载处理器

    重复调用会先关闭并移除已挂载的处理器，不会重复输出。

    Args:
        settings: 日志配置，需提供 level / file_path / enable_console（如 LoggingSettings）
        name: 日志器名称，默认 "ytree"

    Returns:
        配置好的日志器

    使用示例:
        from ytree.config import LoggingSettings
        from ytree.log import configure_logging

        configure_logging(LoggingSettings(level="DEBUG", file_path="logs/tree.log"))
    """
    target = logging.getLogger(name)
    level = logging.getLevelName(settings.level.upper())
    target.setLevel(level if isinstance(level, int) else logging.INFO)

    for handler in list(target.handlers):
        handler.close()
        target.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = []
    if settings.enable_console:
        handlers.append(logging.StreamHandler())
    if settings.file_path:
        log_dir = os.path.dirname(settings.file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(settings.file_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        target.addHandler(handler)
    return target


def get_logger(name: str = None) -> logging.Logger:
    """获取日志记录器

    不传名称时取调用模块的 __name__；不含点号的简写挂到 "ytree." 下。

    使用示例:
        logger = get_logger()                     # ytree/tree/action.py 中 -> "ytree.tree.action"
        logger = get_logger("tree")               # -> "ytree.tree"
        logger = get_logger("sqlalchemy.engine")  # -> "sqlalchemy.engine"
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        name = caller.f_globals.get("__name__", PACKAGE_LOGGER) if caller is not None else PACKAGE_LOGGER
    elif name != PACKAGE_LOGGER and "." not in name:
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
