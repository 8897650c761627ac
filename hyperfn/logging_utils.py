"""Structured logging with trace_id and tool dispatch events.

Loggers are structlog wrappers around stdlib loggers, so nothing is emitted
until the application configures logging (configure_logging or its own setup).
"""
import logging
import reprlib
import sys
from contextvars import ContextVar
from typing import Any

import structlog

from hyperfn import config

# Context variable for trace_id so every dispatch in one model turn can be correlated
trace_id_ctx: ContextVar[str | None] = ContextVar("trace_id", default=None)

_result_repr = reprlib.Repr()
_result_repr.maxstring = 200
_result_repr.maxother = 200


def get_trace_id() -> str | None:
    return trace_id_ctx.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_ctx.set(trace_id)


def clear_trace_id() -> None:
    trace_id_ctx.set(None)


def add_trace_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every event."""
    tid = get_trace_id()
    if tid:
        event_dict["trace_id"] = tid
    return event_dict


def configure_logging(log_level: str | None = None) -> None:
    """Configure structlog and stdlib logging. Call once at application startup.
    log_level defaults to the LOG_LEVEL setting.
    """
    log_level = (log_level or config.LOG_LEVEL).upper()
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger().setLevel(level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            add_trace_id,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def _summarize(value: Any) -> str:
    if isinstance(value, str):
        return value[:200] + "..." if len(value) > 200 else value
    return _result_repr.repr(value)


def log_tool_call_start(
    logger: structlog.stdlib.BoundLogger,
    tool_name: str,
    arguments: Any,
) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("tool_call_start", tool_name=tool_name, arguments=arguments)


def log_tool_call_rejected(
    logger: structlog.stdlib.BoundLogger,
    tool_name: str,
    error_count: int,
) -> None:
    logger.info("tool_call_rejected", tool_name=tool_name, error_count=error_count)


def log_tool_call_end(
    logger: structlog.stdlib.BoundLogger,
    tool_name: str,
    success: bool,
    result: Any = None,
    error: BaseException | None = None,
) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        "tool_call_end",
        tool_name=tool_name,
        success=success,
        result_summary=_summarize(result) if success else None,
        error=f"{type(error).__name__}: {error!s}" if error is not None else None,
    )
