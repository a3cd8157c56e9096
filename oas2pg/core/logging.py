# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent logging across loader, builders, services and CLI
# CREATED: 19 OCT 2026
# ============================================================================
"""
Structured Logging

Human-readable (default) or JSON log lines. The context follows the unit of
work being transformed (document -> entity -> field), so a failing column
can be traced back to where it came from without threading names through
every call.

Usage:
    from oas2pg.core.logging import ComponentType, get_logger, log_context

    logger = get_logger(__name__, ComponentType.BUILDER)

    with log_context(entity="Pet"):
        with log_context(field="tag"):
            logger.debug("Resolving reference", extra={"target": "Tag"})
"""

import dataclasses
import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    LOADER = "loader"
    BUILDER = "builder"
    VALIDATOR = "validator"
    SERVICE = "service"
    CLI = "cli"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclasses.dataclass(frozen=True)
class LogContext:
    """Position in the transformation a log line was emitted from."""
    document: Optional[str] = None
    entity: Optional[str] = None
    field: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = dataclasses.field(default_factory=dict)

    NAMED = ("document", "entity", "field", "component", "operation")

    def merged(self, **changes: Any) -> "LogContext":
        """Copy with the given fields replaced; extra mappings are combined."""
        extra = {**self.extra, **changes.pop("extra", {})}
        return dataclasses.replace(self, extra=extra, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only, extra flattened in."""
        data = {name: getattr(self, name) for name in self.NAMED if getattr(self, name) is not None}
        data.update(self.extra)
        return data


_local = threading.local()


def _stack() -> List[LogContext]:
    stack = getattr(_local, "stack", None)
    if stack is None:
        stack = _local.stack = []
    return stack


def get_current_context() -> LogContext:
    """Innermost context of the calling thread (empty outside any block)."""
    stack = _stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(**kwargs: Any) -> Iterator[LogContext]:
    """
    Push context fields for the duration of a block.

    Nested blocks inherit every field they do not override.

    Example:
        with log_context(document="petstore.yaml"):
            with log_context(entity="Pet"):
                ...
    """
    context = get_current_context().merged(**kwargs)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


# ============================================================================
# FORMATTERS
# ============================================================================

class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation."""

    def __init__(self, include_source: bool = True):
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            payload["context"] = context

        data = getattr(record, "data", None)
        if data:
            payload["data"] = data

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        if self.include_source:
            payload["source"] = f"{record.filename}:{record.lineno}"

        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """
    Terminal formatter:

        2026-10-19 10:00:00 INFO     oas2pg.services.ddl_service [doc=Petstore, entity=Pet]: ...
    """

    LABELS = (("document", "doc"), ("entity", "entity"), ("field", "field"))

    def format(self, record: logging.LogRecord) -> str:
        context = get_current_context()
        parts = [
            f"{label}={getattr(context, name)}"
            for name, label in self.LABELS
            if getattr(context, name)
        ]
        where = f" [{', '.join(parts)}]" if parts else ""

        line = (
            f"{self.formatTime(record, '%Y-%m-%d %H:%M:%S')} {record.levelname:<8} "
            f"{record.name}{where}: {record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ============================================================================
# LOGGERS
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that moves caller extra fields and the component onto
    record.data, where both formatters look for them.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.pop("extra", None) or {})
        component = self.extra.get("component")
        if component is not None:
            data.setdefault("component", component.value)
        kwargs["extra"] = {"data": data}
        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "oas2pg.core.schema.table_builder")
        component: Optional component type for categorization
    """
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    stream=None,
) -> None:
    """
    Install a single root handler.

    Logs go to stderr by default so generated SQL on stdout stays clean.
    LOG_FORMAT=json switches to StructuredFormatter.

    Args:
        level: Log level name or number
        json_output: Force JSON output
        stream: Stream override (defaults to sys.stderr)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


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
