"""Structured logging helpers shared by the menu modules."""

from __future__ import annotations

import json
import logging
import math
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

__all__ = ["trace", "log_event", "safe_json"]


def safe_json(value: Any) -> Any:
    """Return ``value`` converted into a JSON-serialisable structure."""

    if value is None or isinstance(value, (str, int, float, bool)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return repr(value)
        return value

    if isinstance(value, (list, tuple, set)):
        return [safe_json(item) for item in value]

    if isinstance(value, dict):
        return {str(key): safe_json(val) for key, val in value.items()}

    if hasattr(value, "to_dict") and callable(getattr(value, "to_dict")):
        return safe_json(value.to_dict())

    return repr(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | tuple[Any, Any, Any] | None = None,
    **fields: Any,
) -> None:
    """Emit a structured log line encoded as JSON."""

    if not logger.isEnabledFor(level):
        return

    payload: Dict[str, Any] = {"event": event}
    if fields:
        payload.update({key: safe_json(value) for key, value in fields.items() if value is not None})

    message = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    logger.log(level, message, exc_info=exc_info)


@contextmanager
def trace(
    name: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    **fields: Any,
) -> Iterator[None]:
    """Log start/end events around a block, with duration and failures."""

    logger = logger or logging.getLogger("webmenu.trace")
    start_time = time.perf_counter()
    base_fields = {"trace": name}
    base_fields.update(fields)
    log_event(logger, level, "trace.start", **base_fields)
    try:
        yield
    except Exception as exc:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log_event(
            logger,
            logging.ERROR,
            "trace.error",
            duration_ms=duration_ms,
            error=repr(exc),
            **base_fields,
        )
        raise
    else:
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log_event(logger, level, "trace.end", duration_ms=duration_ms, **base_fields)
