# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Session-aware logging
# PURPOSE: Attach session/table/operation context to every tablewright log line
# CREATED: 18 OCT 2026
# EXPORTS: get_logger, log_context, configure_logging, log_checkpoint
# ============================================================================
"""
Structured Logging

Every record logged through get_logger() carries the fields of the
innermost log_context() block, so a failing registration or apply can be
traced back to its session and table:

    logger = get_logger(__name__, ComponentType.REGISTRY)

    with log_context(session_id="a1b2", table="book"):
        logger.debug("Registered table")

Output is human-readable by default; configure_logging(json_output=True)
or LOG_FORMAT=json switches to one JSON object per line.
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union


class ComponentType(str, Enum):
    """Pipeline stage a logger belongs to."""
    RESOLVER = "resolver"
    REGISTRY = "registry"
    COMPILER = "compiler"
    EXPORTER = "exporter"
    GATEWAY = "gateway"
    SESSION = "session"


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class LogContext:
    """Fields describing where in a session a log line was emitted."""
    session_id: Optional[str] = None
    table: Optional[str] = None
    column: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def child(self, **overrides: Any) -> "LogContext":
        """Copy with overrides applied; extra dicts are merged."""
        extra = {**self.extra, **overrides.pop("extra", {})}
        return replace(self, extra=extra, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only, with extra flattened in."""
        result = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not None
        }
        result.update(self.extra)
        return result


_EMPTY_CONTEXT = LogContext()
_local = threading.local()


def _stack() -> List[LogContext]:
    stack = getattr(_local, "stack", None)
    if stack is None:
        stack = _local.stack = []
    return stack


def get_current_context() -> LogContext:
    stack = _stack()
    return stack[-1] if stack else _EMPTY_CONTEXT


@contextmanager
def log_context(**fields_: Any) -> Iterator[LogContext]:
    """
    Push context fields for the duration of the block.

    Nested blocks inherit the enclosing fields and override the ones they set.
    """
    context = get_current_context().child(**fields_)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


# ============================================================================
# FORMATTERS
# ============================================================================

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _record_data(record: logging.LogRecord) -> Optional[Dict[str, Any]]:
    return getattr(record, "extra", None) or None


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, include_context: bool = True):
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            context = get_current_context().to_dict()
            if context:
                entry["context"] = context

        data = _record_data(record)
        if data:
            entry["data"] = data

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry["source"] = f"{record.filename}:{record.lineno}"
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """
    Single-line format for terminals:

        2026-10-18 09:12:44 DEBUG    tablewright.schema.registry [session=a1b2, table=book]: ...
    """

    CONTEXT_FIELDS = ("session_id", "table", "column")

    def format(self, record: logging.LogRecord) -> str:
        context = get_current_context()
        tags = [
            f"{name.replace('_id', '')}={getattr(context, name)}"
            for name in self.CONTEXT_FIELDS
            if getattr(context, name)
        ]
        where = f" [{', '.join(tags)}]" if tags else ""

        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{stamp} {record.levelname:<8} {record.name}{where}: {record.getMessage()}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ============================================================================
# LOGGERS
# ============================================================================

class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that snapshots the current log context onto each record.

    The merged fields land on record.extra, which both formatters read.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.get("extra") or {})
        data.update(get_current_context().to_dict())

        component = self.extra.get("component")
        if component is not None:
            data.setdefault("component", component.value)

        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger for a tablewright module."""
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Level name or number
        json_output: JSON lines instead of the human format
                     (LOG_FORMAT=json has the same effect)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    # stdout is reserved for rendered scripts
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


# ============================================================================
# CHECKPOINTS
# ============================================================================

CHECKPOINT_LOGGER = "tablewright.checkpoint"


def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named session milestone ("schema_compiled", "schema_applied").

    Checkpoints go to the tablewright.checkpoint logger at INFO unless a
    logger is given.
    """
    context = get_current_context()
    payload: Dict[str, Any] = {"checkpoint": name, "timestamp": _timestamp()}
    for key in ("session_id", "table"):
        value = getattr(context, key)
        if value:
            payload[key] = value
    if data:
        payload["data"] = data

    (logger or logging.getLogger(CHECKPOINT_LOGGER)).info(
        f"CHECKPOINT: {name}", extra={"extra": payload}
    )


__all__ = [
    "ComponentType",
    "LogContext",
    "log_context",
    "get_current_context",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_checkpoint",
]
