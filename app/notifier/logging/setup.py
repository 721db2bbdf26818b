"""Structlog configuration for the notifier.

Events are key/value records with snake_case names. Development output is
rendered for the console, production output as one JSON object per line.
Under pytest nothing is emitted.

Usage:
    from notifier.logging import configure_logging, get_module_logger

    configure_logging()
    logger = get_module_logger()
    logger.info("email_relayed", alert_key="cpu.high{host=web01}")
"""

import inspect
import logging
import sys
from typing import Any, Callable, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from notifier import __version__
from notifier.configuration import get_settings
from notifier.logging.formatters import (
    add_service_info,
    mask_sensitive_data,
    truncate_large_values,
)


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def _silence() -> BoundLogger:
    # Keep structlog usable in tests while the root logger drops everything
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
    return structlog.stdlib.get_logger()


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    extra_processors: Optional[List[Callable[..., Any]]] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Overrides ``LOG_LEVEL``.
        is_production: Overrides ``Settings.is_production``; selects JSON
            instead of console rendering.
        extra_processors: Run after the built-in processors, before
            rendering.

    Returns:
        A logger bound to no context.
    """
    if _running_under_pytest():
        return _silence()

    settings = get_settings()
    production = settings.is_production if is_production is None else is_production
    environment = "production" if production else (settings.PREFIX.rstrip("-_") or "development")

    processors: List[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        add_service_info("notifier", __version__, environment),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        mask_sensitive_data(),
        truncate_large_values(),
        *(extra_processors or []),
        structlog.processors.JSONRenderer() if production else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Binds ``component`` (last dotted part) and ``module_path`` (full module
    name), e.g. ``smtp`` and ``notifier.notifications.smtp``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module_name = caller.f_globals.get("__name__") if caller is not None else None
    if not module_name:
        return logger.bind(component="unknown")
    return logger.bind(component=module_name.rpartition(".")[2], module_path=module_name)
