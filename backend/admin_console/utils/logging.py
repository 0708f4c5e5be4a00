"""Structured logging for the admin console.

Each staff action (one CLI command) opens its own log context with
``begin_action``: a fresh request ID, the command path and, when known,
the acting account are bound through structlog's contextvars, so every
entry emitted while fetching, validating and submitting carries them.

Credentials never reach a sink: ``token``/``password``/``authorization``
values are masked before rendering. Logs go to stderr; stdout belongs to
command output.
"""

from __future__ import annotations

import logging
import sys
import uuid

import structlog

REDACTED = "***"

_SECRET_KEYS = frozenset({"token", "password", "authorization"})

# Per-request INFO lines from the HTTP stack; only useful when debugging
_HTTP_LOGGERS = ("httpx", "httpcore")


def begin_action(command: str, actor: str = "") -> str:
    """Reset the log context for a new staff action.

    Returns the request ID bound for the action.
    """
    request_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, command=command)
    if actor:
        structlog.contextvars.bind_contextvars(actor=actor)
    return request_id


def current_request_id() -> str:
    """Request ID of the action in progress, or "" outside an action."""
    return str(structlog.contextvars.get_contextvars().get("request_id", ""))


def _redact_secrets(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key in _SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str = "INFO", log_format: str = "console") -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" for log shipping, "console" for a terminal.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _redact_secrets,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[structlog.stdlib.add_log_level],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    http_level = logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
