"""Centralized logging helpers.

Provides a single place to configure the root logger plus small utilities
used by the HTTP and registry layers: structured ``extra`` payloads, URL
redaction, and a monotonic timer for request durations.
"""
from __future__ import annotations

import logging
import os
import re
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from constants import Constants

REDACTED = "[REDACTED]"

# Keys reserved by logging.LogRecord; they cannot be passed through ``extra``.
_RESERVED_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}

_TOKEN_PATTERN = re.compile(
    r"(?i)(token|password|secret|authorization|api[_-]?key)(\s*[=:]\s*)([^\s&,;]+)"
)


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL)
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger for CLI use.

    Args:
        level: Level name; falls back to LATESTPIN_LOG_LEVEL, then WARNING.
        log_file: Optional path; records are also appended there.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    formatter = logging.Formatter(Constants.LOG_FORMAT)

    # Replace handlers installed by a previous call so repeated runs do not duplicate output.
    for handler in list(root.handlers):
        if getattr(handler, "_latestpin", False):
            root.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler._latestpin = True  # type: ignore[attr-defined]
    root.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler._latestpin = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped. Keys that collide with LogRecord attributes
    are prefixed with ``ctx_``.
    """
    ctx: Dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key in _RESERVED_KEYS:
            key = f"ctx_{key}"
        ctx[key] = value
    return ctx


def redact(text: str) -> str:
    """Mask credential-looking ``key=value`` pairs in free text."""
    if not text:
        return text
    return _TOKEN_PATTERN.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text)


def safe_url(url: str) -> str:
    """Return ``url`` with user info and query values redacted for logging."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED}@{netloc.rsplit('@', 1)[1]}"
    query = parts.query
    if query:
        query = urlencode([(k, REDACTED) for k, _ in parse_qsl(query, keep_blank_values=True)])
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds; measured up to now while still running."""
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
