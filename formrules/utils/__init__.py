"""
formrules Utils Package
=======================

Nested data access and logging.
"""

from __future__ import annotations

from formrules.utils import arrays
from formrules.utils.logger import LogLevel, Logger, configure_logging, get_logger

__all__ = [
    "arrays",
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
]
