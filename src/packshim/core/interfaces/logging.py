from __future__ import annotations
import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Factory for loggers under the ``packshim`` namespace."""

    def get_logger(self, name: str) -> logging.Logger:
        ...
