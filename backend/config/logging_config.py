"""
Structured logging configuration.

Every entry carries an ISO timestamp, level, logger name and the bound
request context. User-typed health text and emails are masked outside
development so that symptom descriptions never reach log aggregation.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from config.config import Settings, get_settings

# Event keys that may hold free text typed by a user or personal data
SENSITIVE_KEYS = frozenset({"message_preview", "raw_text", "email"})

# Chatty third-party loggers kept at WARNING
QUIET_LOGGERS = ("uvicorn.access", "urllib3", "httpx")


def mask_sensitive_fields(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace user-supplied free text and emails with their length."""
    for key in SENSITIVE_KEYS & event_dict.keys():
        value = event_dict[key]
        if isinstance(value, str):
            event_dict[key] = f"<masked {len(value)} chars>"
    return event_dict


def _shared_processors(settings: Settings) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.environment != "development":
        processors.append(mask_sensitive_fields)
    if settings.log_format == "json":
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """
    Route structlog and stdlib logging through one stdout handler.

    JSON output for log aggregation, console output for local work;
    selected by `Settings.log_format`.
    """
    settings = settings or get_settings()
    shared = _shared_processors(settings)

    if settings.log_format == "json":
        # Hindi and Gujarati text stays readable in the output
        renderer: Processor = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=not settings.is_production)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logging.basicConfig(handlers=[handler], level=settings.log_level.upper(), force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_request_context(request_id: str, method: str, path: str, **fields) -> None:
    """Start a fresh per-request log context; every later entry in the request carries it."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path, **fields)
