"""
Structured Logging

Every module logs through structlog bound loggers that render JSON
lines via the stdlib logging machinery. Level filtering is left to the
stdlib root logger so host applications stay in control of verbosity.

Library modules never attach handlers. Entrypoints call
configure_logging() once at startup.
"""

import logging
import sys
from typing import Optional

import structlog


structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

_CONFIGURED = False


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a stdout handler to the root logger and set its level.

    Args:
        level: Level name. Defaults to AppSettings.log_level.
    """
    global _CONFIGURED

    if level is None:
        from reimbursements.config import get_settings
        level = get_settings().app.log_level

    root = logging.getLogger()
    root.setLevel(level.upper())

    if not _CONFIGURED:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the given stdlib logger name."""
    return structlog.get_logger(name)
