from __future__ import annotations

"""Diagnostics logging for packshim.

All records go through the 'packshim' logger to stderr, as plain
``LEVEL: message`` lines or as JSON objects. stdout carries only the bundle.
"""

import logging
import os
from typing import Optional, TextIO

_HANDLER_NAME = "packshim"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record: ``ts`` (UTC, ms), ``level``, ``module``,
    ``msg`` and ``version``, plus ``ctx`` when the record carries a
    ``context`` dict.
    """

    def __init__(self) -> None:
        super().__init__()
        # Imported here; the package imports this module while initializing.
        from packshim import __version__
        self._version = __version__

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")

        payload = {
            "ts": ts_str,
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }

        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx

        return json.dumps(payload, ensure_ascii=False)


def _make_formatter(json_logs: bool) -> logging.Formatter:
    if json_logs:
        return JsonLogFormatter()
    return logging.Formatter("%(levelname)s: %(message)s")


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the base 'packshim' logger and return it.

    The handler is created once; later calls only update the level and swap
    the formatter when *json_logs* changes.
    """
    base = logging.getLogger("packshim")
    base.setLevel(level)
    if base.handlers:
        for handler in base.handlers:
            if handler.get_name() != _HANDLER_NAME:
                continue
            if isinstance(handler.formatter, JsonLogFormatter) != bool(json_logs):
                handler.setFormatter(_make_formatter(json_logs))
        return base

    import sys as _sys

    base.propagate = False
    handler = logging.StreamHandler(stream or _sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_make_formatter(json_logs))
    base.addHandler(handler)

    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'packshim'."""
    if not name or name == "packshim":
        return logging.getLogger("packshim")
    if name.startswith("packshim"):
        return logging.getLogger(name)
    return logging.getLogger(f"packshim.{name}")


def is_trace_io_enabled() -> bool:
    return os.getenv("PACKSHIM_TRACE_IO") == "1"


def trace_io(logger: logging.Logger, message: str, **ctx) -> None:
    """Log a DEBUG file-access trace when PACKSHIM_TRACE_IO=1."""
    if not is_trace_io_enabled():
        return
    if ctx:
        logger.debug("%s | ctx=%r", message, ctx)
    else:
        logger.debug("%s", message)
