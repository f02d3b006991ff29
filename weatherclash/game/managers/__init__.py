"""Manager systems for coordinating engine output.

This package contains manager classes that consume events published by the
engine:
- log_manager.py: Categorized, filterable log buffer with file export
"""

from .log_manager import LogCategory, LogLevel, LogManager, LogRecord

__all__ = [
    "LogCategory",
    "LogLevel",
    "LogManager",
    "LogRecord",
]
