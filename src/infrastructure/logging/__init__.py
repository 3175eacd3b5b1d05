"""
Logging Infrastructure

Structured logging setup and helpers.
"""

from .logging_config import (
    JsonLogFormatter,
    PerformanceLogger,
    ProductionLogger,
    get_structured_logger,
)

__all__ = [
    "JsonLogFormatter",
    "PerformanceLogger",
    "ProductionLogger",
    "get_structured_logger",
]
