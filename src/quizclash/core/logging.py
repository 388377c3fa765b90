"""Structured logging configuration for the QuizClash engine.

structlog events are routed through the standard library so console and
file output share one pipeline. The console stream is stderr because
stdout belongs to the game screen.

Encounter context (``encounter_id``, ``opponent_id``) lives in contextvars.
Regeneration ticks run on their own thread and do not inherit it, so every
entry also carries the emitting thread's name.

Example:
    >>> from quizclash.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Encounter started", opponent="lars", round=1)
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from quizclash.core.config import Settings

APP_NAME = "quizclash"


def add_game_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp entries with the application and the emitting thread.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with ``app`` and ``thread`` set.
    """
    event_dict.setdefault("app", APP_NAME)
    event_dict.setdefault("thread", threading.current_thread().name)
    return event_dict


def _renderer(json_format: bool, *, colors: bool) -> Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=colors,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure application-wide logging.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render entries as JSON lines instead of console text.
        log_file: Optional path that receives the same entries, uncolored.

    Example:
        >>> configure_logging(level="DEBUG", json_format=True)
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_game_context,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_format, colors=sys.stderr.isatty()),
            ],
        )
    )
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=pre_chain,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.format_exc_info,
                    _renderer(json_format, colors=False),
                ],
            )
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(numeric_level)


def configure_logging_from_settings(settings: Settings, *, log_file: str | None = None) -> None:
    """Configure logging from the application settings.

    Debug mode forces the DEBUG level regardless of ``log_level``.
    """
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.json_logs,
        log_file=log_file,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger for a module.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        A structlog logger bound to the stdlib logger of that name.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-value pairs to every entry logged from this context.

    The combat engine binds the encounter and opponent identifiers here
    for the duration of an encounter.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Drop keys previously bound with :func:`bind_context`."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
]
