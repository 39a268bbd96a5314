"""Structured logging setup shared by every module of the package.

Modules obtain a logger with ``get_logger(__name__)`` and log a short event
sentence plus key/value context::

    logger.info("Xenocrysts detected", sample="x", count=2)

``configure_logging`` is called once by the application entry point; library
callers that never call it get structlog's default console output.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Install the structlog processor chain.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ...).
        json_logs: Render JSON lines instead of coloured console output.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    renderer: structlog.typing.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Return a lazily configured structlog logger tagged with the module name.

    Resolution is deferred to the first log call, so loggers created at import
    time pick up a later configure_logging().

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A bound logger accepting key/value context on every call.
    """
    return structlog.get_logger(logger_name=name)
