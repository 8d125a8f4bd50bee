"""日志模块

使用示例:
    from ytree.log import configure_logging, get_logger

    # 为 "ytree" 包日志器挂载处理器
    configure_logging(settings.logging)

    # 在模块中获取日志记录器（自动推断模块名）
    logger = get_logger()
"""

from .logger import (
    PACKAGE_LOGGER,
    configure_logging,
    get_logger,
)

__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "get_logger",
]
