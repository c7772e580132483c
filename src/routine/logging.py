"""Structured logging for the routine editor, built on structlog.

Events are snake_case with keyword context, e.g.
``log.info("date_added", dates=3)``. A run that works on one routine wraps
its work in ``routine_context()`` so every event carries the routine title
and grid size without each call site repeating them.

Log lines always go to stderr; stdout is reserved for exported content
such as the clipboard table printed by the export CLI.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from src.routine.models import ScheduleData

# Libraries whose INFO chatter drowns out routine events
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog for the routine editor.

    Args:
        json_output: Render events as JSON lines instead of console text.
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(sys.stderr)]
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


@contextmanager
def routine_context(title: str, snapshot: ScheduleData | None = None) -> Iterator[None]:
    """Bind the routine being worked on to every event logged inside the block.

    Args:
        title: Routine title, logged as ``routine``.
        snapshot: When given, its class and date counts are bound too.
    """
    context: dict[str, object] = {"routine": title}
    if snapshot is not None:
        context["classes"] = len(snapshot.classes)
        context["dates"] = len(snapshot.dates)
    with structlog.contextvars.bound_contextvars(**context):
        yield


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger for a module of the routine editor (pass ``__name__``)."""
    return structlog.get_logger(name)
