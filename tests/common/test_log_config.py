"""Tests for src/common/log_config.py"""

import logging
import sys

from src.common.log_config import setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger("src")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)

    def test_default_level_is_info(self):
        setup_logging()
        logger = logging.getLogger("src")
        assert logger.level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        logger = logging.getLogger("src")
        assert logger.level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        logger = logging.getLogger("src")
        assert logger.level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger("src")
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stderr

    def test_format_includes_thread_name(self):
        setup_logging()
        handler = logging.getLogger("src").handlers[0]
        assert "%(threadName)s" in handler.formatter._fmt

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("src").handlers) == 1

    def test_log_file_handler(self, tmp_path):
        log_file = tmp_path / "migration.log"
        setup_logging(log_file=str(log_file))

        logging.getLogger("src.migration").info("product created")
        for handler in logging.getLogger("src").handlers:
            handler.flush()

        assert "product created" in log_file.read_text(encoding="utf-8")
