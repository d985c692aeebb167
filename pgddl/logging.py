# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Statement/table/column aware log records for serializers and generator
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Log records carry the statement being rendered (kind, table, column, index)
so a rejected statement can be traced without threading names through every
call.

Usage:
    from pgddl.logging import get_logger, log_context

    logger = get_logger(__name__, ComponentType.MODEL)

    with log_context(statement="create_table", table="users"):
        logger.debug("rendering", extra={"columns": 5})
"""

import json
import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple, Union


class ComponentType(str, Enum):
    """Which layer emitted a record."""
    MODEL = "model"
    GENERATOR = "generator"


@dataclass(frozen=True)
class LogContext:
    """Fields attached to every record emitted inside a log_context block."""
    statement: Optional[str] = None
    table: Optional[str] = None
    column: Optional[str] = None
    index: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def merged(self, **overrides: Any) -> "LogContext":
        """Child context: overrides win, extra dicts are combined."""
        extra = {**self.extra, **overrides.pop("extra", {})}
        return replace(self, extra=extra, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not None
        }
        data.update(self.extra)
        return data


_EMPTY = LogContext()
_local = threading.local()


def _stack() -> list:
    stack = getattr(_local, "contexts", None)
    if stack is None:
        stack = _local.contexts = []
    return stack


def get_current_context() -> LogContext:
    """Innermost active context for this thread."""
    stack = _stack()
    return stack[-1] if stack else _EMPTY


@contextmanager
def log_context(**kwargs: Any) -> Iterator[LogContext]:
    """
    Push context fields for the duration of a block.

    Nested blocks inherit the enclosing fields.

    Example:
        with log_context(table="users", column="email"):
            logger.debug("rendering column")
    """
    context = get_current_context().merged(**kwargs)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


def _record_data(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra", None) or {}


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record.

    Keys: timestamp, level, logger, message, context, data, exception, source.
    Names listed in `omit` are left out.
    """

    def __init__(self, omit: Tuple[str, ...] = ()):
        super().__init__()
        self.omit = frozenset(omit)

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "context": get_current_context().to_dict(),
            "data": _record_data(record),
            "exception": self.formatException(record.exc_info) if record.exc_info else None,
            "source": {"file": record.filename, "line": record.lineno, "function": record.funcName},
        }
        payload = {k: v for k, v in payload.items() if v and k not in self.omit}
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line output with the active context in brackets."""

    LABELS = (("statement", "stmt"), ("table", "table"), ("column", "column"), ("index", "index"))

    def format(self, record: logging.LogRecord) -> str:
        context = get_current_context()
        tags = [f"{label}={getattr(context, attr)}" for attr, label in self.LABELS if getattr(context, attr)]

        line = "{} {:<8} {}{}: {}".format(
            datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            record.levelname,
            record.name,
            f" [{', '.join(tags)}]" if tags else "",
            record.getMessage(),
        )
        data = _record_data(record)
        if data:
            line = f"{line} {data}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that folds the active context and component into record.extra.
    """

    def process(self, msg, kwargs):
        data = {**kwargs.get("extra", {}), **get_current_context().to_dict()}
        component = (self.extra or {}).get("component")
        if component:
            data.setdefault("component", component)
        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger for a module."""
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component is not None else None},
    )


def configure_logging(
    level: Union[str, int, None] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Log level name or number; defaults to LOG_LEVEL
        json_output: JSON records instead of text; defaults to LOG_FORMAT=json
    """
    from pgddl.config import get_defaults

    settings = get_defaults().logging
    level = settings.level if level is None else level
    json_output = settings.json_output if json_output is None else json_output

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if json_output else HumanFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
