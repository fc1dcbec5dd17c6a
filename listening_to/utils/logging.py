"""structlog configuration for listening-to.

Two renderers share one processor chain: a console renderer while
developing and JSON lines in CI (``APP_ENV=production`` or
``json_output=True``).  Records from the standard library (httpx logs
through it) are passed through the same chain.

Everything is written to stderr.  The CLI prints its result on stdout and
build hosts frequently capture stdout, so log lines must never land there.
"""

import logging
import os
import sys

import structlog

# Third-party loggers that are chatty at INFO (one line per request).
_NOISY_LOGGERS = ("httpx", "httpcore")


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Set up structlog and route stdlib logging through it.

    Args:
        log_level: Minimum level name, e.g. ``"DEBUG"`` or ``"WARNING"``.
        json_output: Emit JSON lines.  Also enabled by ``APP_ENV=production``.

    Returns:
        The root structlog logger.
    """
    level = log_level.upper()
    as_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    if as_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_processors(),
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [stderr_handler]
    root.setLevel(level)

    if level != "DEBUG":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
