"""Log records describing filesystem activity of the recorder."""

from __future__ import annotations

import contextlib
import logging
import os
import time
from typing import Any, Dict, Iterator, Optional, Union


EVENT_LOGGER = logging.getLogger("echo_recorder.events")

_MAX_VALUE_LENGTH = 200

EventValue = Union[str, int, float, bool]


def describe_value(value: Any) -> Optional[EventValue]:
    """Return a short loggable form of *value*, or ``None`` when there is nothing to show."""

    if value is None:
        return None
    if isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, BaseException):
        text = f"{value.__class__.__name__}: {value}"
    elif isinstance(value, os.PathLike):
        text = os.fspath(value)
    else:
        text = str(value)
    text = text.strip()
    if not text:
        return None
    if len(text) > _MAX_VALUE_LENGTH:
        return text[:_MAX_VALUE_LENGTH] + "…"
    return text


def format_event_details(payload: Optional[Dict[str, Any]]) -> Dict[str, EventValue]:
    details: Dict[str, EventValue] = {}
    for key, value in (payload or {}).items():
        described = describe_value(value)
        if described is None:
            continue
        details[str(key)] = described
    return details


def emit_event(
    kind: str,
    message: str,
    *,
    payload: Optional[Dict[str, Any]] = None,
    duration_ms: Optional[float] = None,
    level: int = logging.DEBUG,
    logger: logging.Logger = EVENT_LOGGER,
) -> None:
    """Log ``[kind] message (key=value, ...)`` and attach the details as record extras."""

    details = format_event_details(payload)
    text = f"[{kind}] {message}"
    if duration_ms is not None:
        text += f" in {duration_ms:.1f}ms"
    if details:
        text += " (" + ", ".join(f"{key}={value}" for key, value in details.items()) + ")"
    logger.log(
        level,
        text,
        extra={
            "event_kind": kind,
            "event_details": details,
            "event_duration_ms": duration_ms,
        },
    )


def emit_file_event(
    operation: str,
    *,
    payload: Optional[Dict[str, Any]] = None,
    duration_ms: Optional[float] = None,
    level: int = logging.DEBUG,
    logger: logging.Logger = EVENT_LOGGER,
) -> None:
    emit_event(
        "FILE_OP",
        operation,
        payload=payload,
        duration_ms=duration_ms,
        level=level,
        logger=logger,
    )


@contextlib.contextmanager
def file_operation(operation: str, **payload: Any) -> Iterator[Dict[str, Any]]:
    """Time the enclosed filesystem call and emit one ``FILE_OP`` event for it.

    The yielded dict may be extended with further details. A failure is
    logged at ERROR and re-raised unchanged.
    """

    start = time.perf_counter()
    details: Dict[str, Any] = dict(payload)
    level = logging.DEBUG
    try:
        yield details
    except Exception as error:
        details["status"] = "error"
        details["error"] = error
        level = logging.ERROR
        raise
    else:
        details.setdefault("status", "ok")
    finally:
        emit_file_event(
            operation,
            payload=details,
            duration_ms=(time.perf_counter() - start) * 1000.0,
            level=level,
        )


__all__ = [
    "EVENT_LOGGER",
    "describe_value",
    "emit_event",
    "emit_file_event",
    "file_operation",
    "format_event_details",
]
