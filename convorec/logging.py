"""Structured logging for convorec.

Only the ``convorec`` logger tree is configured; the root logger belongs to
the host application. Every component logs through ``convorec.<component>``
and events are rendered by structlog as:

- console: human-readable for development (default)
- json: one object per line, for log shippers

Format and level come from ``CONVOREC_LOG_FORMAT`` / ``CONVOREC_LOG_LEVEL``
unless passed explicitly.
"""

from __future__ import annotations

import logging
import os

import structlog

LOGGER_NAME = "convorec"

_configured = False


def configure_logging(
    log_format: str | None = None,
    level: str | None = None,
) -> None:
    """Attach a structlog handler to the ``convorec`` logger.

    Only the first call has any effect.

    Args:
        log_format: "json" or "console". Falls back to CONVOREC_LOG_FORMAT, then "console".
        level: DEBUG, INFO, WARNING or ERROR. Falls back to CONVOREC_LOG_LEVEL, then "INFO".
    """
    global _configured
    if _configured:
        return

    resolved_format = (log_format or os.environ.get("CONVOREC_LOG_FORMAT", "console")).lower()
    resolved_level = (level or os.environ.get("CONVOREC_LOG_LEVEL", "INFO")).upper()

    if resolved_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, resolved_level, logging.INFO))
    package_logger.propagate = False

    _configured = True


def get_logger(component: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a logger under the ``convorec`` tree.

    Args:
        component: Dotted component name such as "session.recorder". The
            stdlib logger is ``convorec.<component>`` and the name is also
            bound as the ``component`` field. None yields the package logger.
    """
    configure_logging()
    if component is None:
        return structlog.get_logger(LOGGER_NAME)  # type: ignore[no-any-return]
    return structlog.get_logger(f"{LOGGER_NAME}.{component}").bind(  # type: ignore[no-any-return]
        component=component
    )
