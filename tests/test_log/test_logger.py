"""日志模块测试"""

import logging

import pytest

from ytree.config import LoggingSettings
from ytree.log import PACKAGE_LOGGER, configure_logging, get_logger


@pytest.fixture
def logger_name(request):
    name = f"ytree.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


class TestGetLogger:
    """get_logger 测试"""

    def test_infer_module_name(self):
        assert get_logger().name == __name__

    def test_short_name_prefixed(self):
        assert get_logger("tree").name == "ytree.tree"

    def test_full_name_kept(self):
        assert get_logger("ytree.tree.action").name == "ytree.tree.action"
        assert get_logger("sqlalchemy.engine").name == "sqlalchemy.engine"

    def test_package_name_kept(self):
        assert get_logger(PACKAGE_LOGGER).name == "ytree"

    def test_engine_modules_use_package_logger(self):
        from ytree.tree import action, result

        assert action.logger.name == "ytree.tree.action"
        assert result.logger.name == "ytree.tree.result"


class TestConfigureLogging:
    """configure_logging 测试"""

    def test_level_and_console(self, logger_name):
        logger = configure_logging(LoggingSettings(level="DEBUG"), name=logger_name)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_no_duplicate_handlers(self, logger_name):
        configure_logging(LoggingSettings(), name=logger_name)
        logger = configure_logging(LoggingSettings(), name=logger_name)
        assert len(logger.handlers) == 1

    def test_file_handler(self, logger_name, tmp_path):
        log_file = tmp_path / "logs" / "tree.log"
        settings = LoggingSettings(file_path=str(log_file), enable_console=False)
        logger = configure_logging(settings, name=logger_name)
        logger.info("树形查询完成")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 1
        assert "树形查询完成" in log_file.read_text(encoding="utf-8")

    def test_no_handlers(self, logger_name):
        settings = LoggingSettings(level="WARNING", enable_console=False)
        logger = configure_logging(settings, name=logger_name)

        assert logger.level == logging.WARNING
        assert logger.handlers == []

    def test_invalid_level_falls_back_to_info(self, logger_name):
        logger = configure_logging(LoggingSettings(level="verbose"), name=logger_name)
        assert logger.level == logging.INFO

    def test_child_loggers_inherit_level(self, logger_name):
        configure_logging(LoggingSettings(level="ERROR", enable_console=False), name=logger_name)
        assert logging.getLogger(f"{logger_name}.child").getEffectiveLevel() == logging.ERROR
