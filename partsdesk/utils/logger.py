"""structlog loggers for the desk; output is set up once by create_app."""

from __future__ import annotations

import logging
from typing import Any

import structlog

BoundLogger = structlog.stdlib.BoundLogger

# SQL echo and multipart parsing are noisy at INFO
QUIET_LOGGERS = ("sqlalchemy", "multipart", "httpx")


def configure_logging(level_name: str = "INFO") -> None:
    """Route structlog events through stdlib logging at the given level."""
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.INFO

    # basicConfig leaves handlers installed by the host (uvicorn, pytest) alone
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "partsdesk", **bindings: Any) -> BoundLogger:
    """Lazy logger proxy; picks up whatever configuration is active when it logs."""
    logger = structlog.get_logger(name)
    if bindings:
        logger = logger.bind(**bindings)
    return logger
