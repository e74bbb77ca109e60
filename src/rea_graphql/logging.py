"""
Structured logging for the gateway using structlog

Request-scoped values (request id, GraphQL operation) live in structlog's
context variables, so every event logged while a request is being served,
including remote call logs from the binder, carries them.
"""

import logging
import sys
import uuid

import structlog

REQUEST_ID_HEADER = "x-request-id"


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        debug: Render human-readable console output instead of JSON lines
        level: Log level name; defaults to DEBUG in debug mode, INFO otherwise
    """
    if level is None:
        level = "DEBUG" if debug else "INFO"
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    renderer = structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None = None, operation: str | None = None) -> str:
    """Bind the request id, generating one if the caller sent none, and the operation.

    Returns:
        The request id in effect
    """
    request_id = request_id or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    if operation:
        structlog.contextvars.bind_contextvars(graphql_operation=operation)
    return request_id


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()

