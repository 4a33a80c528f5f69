"""
structlog wiring for Django's LOGGING dict.

stdlib records (Django, httpx) and structlog events share one processor chain
and one renderer: coloured console output in development, JSON lines
everywhere else.
"""

import logging
import os

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import StackInfoRenderer, TimeStamper, format_exc_info
from structlog.stdlib import add_log_level, add_logger_name

IS_DEV = os.getenv("DJANGO_ENV", "dev") == "dev"
LOG_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO").upper()

shared_processors = [
    merge_contextvars,
    add_log_level,
    add_logger_name,
    TimeStamper(fmt="iso", utc=True),
    StackInfoRenderer(),
    format_exc_info,
]

RENDERER = (
    structlog.dev.ConsoleRenderer(colors=True, pad_event=0, pad_level=False)
    if IS_DEV
    else structlog.processors.JSONRenderer()
)


MIN_LEVEL = logging.DEBUG if IS_DEV else getattr(logging, LOG_LEVEL, logging.INFO)


def _logger(level: str) -> dict:
    return {"handlers": ["console"], "level": level, "propagate": False}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structlog": {
            "()": "structlog.stdlib.ProcessorFormatter",
            "processor": RENDERER,
            "foreign_pre_chain": shared_processors,
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "structlog"},
    },
    "loggers": {
        "": _logger(LOG_LEVEL),
        "django": _logger("INFO"),
        "apps": _logger("DEBUG" if IS_DEV else LOG_LEVEL),
        # one line per upstream call at INFO is too chatty
        "httpx": _logger("WARNING"),
    },
}

structlog.configure(
    processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
    wrapper_class=structlog.make_filtering_bound_logger(MIN_LEVEL),
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
