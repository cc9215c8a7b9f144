"""Centralized logging helpers.

Provides a single place to configure the root logger from the environment and
small helpers for structured DEBUG traces. Call sites guard expensive debug
payloads with ``is_debug_enabled`` and attach fields through
``extra_context`` so the formatter can pick them up.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "target", "outcome")


class _ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = getattr(record, "fx_context", None)
        if not context:
            return base
        parts = [f"{k}={context[k]}" for k in _CONTEXT_FIELDS if k in context]
        parts.extend(
            f"{k}={v}" for k, v in sorted(context.items()) if k not in _CONTEXT_FIELDS
        )
        return f"{base} [{' '.join(parts)}]"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once.

    The level comes from ``level`` when given, otherwise from the
    FXRESOLVE_LOG_LEVEL environment variable, defaulting to INFO.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    managed = [h for h in root.handlers if getattr(h, "_fx_managed", False)]
    if managed:
        # stderr may have been replaced since the first call
        managed[0].stream = sys.stderr
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
        handler._fx_managed = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level_value)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log call.

    None values are dropped so traces stay compact.
    """
    return {"fx_context": {k: v for k, v in fields.items() if v is not None}}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True if DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds so far (or total, once the block exited)."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
