"""Logging setup for invoice-ledger.

Loggers live under the ``invoice_ledger`` namespace. Structured fields are
passed with ``extra={...}`` and rendered as ``key=value`` pairs after the
message.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any

__all__ = [
    "KeyValueFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

_LOGGER_PREFIX = "invoice_ledger"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


class KeyValueFormatter(logging.Formatter):
    """Standard line format followed by any extra fields as key=value."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: val for key, val in vars(record).items() if key not in _STDLIB_KEYS
        }
        if not extras:
            return line
        fields = " ".join(f"{key}={val}" for key, val in sorted(extras.items()))
        return f"{line} {fields}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the invoice_ledger namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Configure the invoice_ledger logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return

        root_logger = logging.getLogger(_LOGGER_PREFIX)
        root_logger.setLevel(level)
        root_logger.propagate = False

        if handler is not None:
            h = handler
        else:
            h = logging.StreamHandler(stream if stream is not None else sys.stderr)

        h.setFormatter(KeyValueFormatter())
        root_logger.addHandler(h)
        _configured = True


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
        logger = logging.getLogger(_LOGGER_PREFIX)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
