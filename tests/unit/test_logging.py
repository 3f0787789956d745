"""Tests for convorec.logging.

Covers:
- Only the ``convorec`` logger tree is configured, never the root logger
- Component loggers live under ``convorec.<component>``
"""

from __future__ import annotations

import logging

import structlog

from convorec.logging import LOGGER_NAME, configure_logging, get_logger


class TestConfigureLogging:
    def test_package_logger_has_structlog_handler(self) -> None:
        configure_logging()
        package_logger = logging.getLogger(LOGGER_NAME)
        assert package_logger.propagate is False
        assert any(
            isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
            for h in package_logger.handlers
        )

    def test_root_logger_untouched(self) -> None:
        configure_logging()
        assert not any(
            isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
            for h in logging.getLogger().handlers
        )

    def test_repeated_calls_keep_single_handler(self) -> None:
        configure_logging()
        configure_logging(log_format="json", level="DEBUG")
        assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


class TestGetLogger:
    def test_component_logger_is_namespaced(self) -> None:
        log = get_logger("session.recorder")
        assert log.name == f"{LOGGER_NAME}.session.recorder"

    def test_default_is_package_logger(self) -> None:
        assert get_logger().name == LOGGER_NAME
