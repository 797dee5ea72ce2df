"""Game managers.

This package contains managers that observe the event bus:
- log_manager.py: Categorized, level-filtered diagnostic log
"""

from .log_manager import LogCategory, LogEntry, LogLevel, LogManager

__all__ = [
    "LogCategory",
    "LogEntry",
    "LogLevel",
    "LogManager",
]
