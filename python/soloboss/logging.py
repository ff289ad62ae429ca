"""structlog setup plus the per-request context stamped onto every entry.

Request-scoped fields (request_id, user_id, path, method) live in
ContextVars so they follow the request across awaits and threadpool hops.
Only non-empty values are written; a field passed explicitly to the log call
wins over the context value.

Configure once at startup, then log events as snake_case names:

    configure_logging()
    logger = get_logger(__name__)
    logger.info("task_created", task_id=str(task.id))
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)
path_var: ContextVar[str | None] = ContextVar("path", default=None)
method_var: ContextVar[str | None] = ContextVar("method", default=None)

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "request_id": request_id_var,
    "user_id": user_id_var,
    "path": path_var,
    "method": method_var,
}

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "uvicorn.access", "sqlalchemy.engine")


def add_request_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    """structlog processor copying the request context into event_dict."""
    for key, var in _CONTEXT_VARS.items():
        value = var.get()
        if value:
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(json_format: bool = True, level: int = logging.INFO) -> None:
    """Send structlog and stdlib logging through one stdout handler.

    json_format=False renders for a terminal instead of as JSON lines.
    Safe to call again; the root handler is replaced rather than added to.
    """
    pre_chain: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_request_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_request_context(
    request_id: str | None,
    user_id: str | None = None,
    path: str | None = None,
    method: str | None = None,
) -> None:
    """Bind request_id, and any of the other fields that are given, to this context."""
    request_id_var.set(request_id)
    for var, value in ((user_id_var, user_id), (path_var, path), (method_var, method)):
        if value is not None:
            var.set(value)


def clear_request_context() -> None:
    for var in _CONTEXT_VARS.values():
        var.set(None)


def get_request_id() -> str | None:
    return request_id_var.get()
