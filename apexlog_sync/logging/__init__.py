"""
Logging Module - Progress-Aware Logging System

Console logging goes to stderr and is held back while the sync progress
bar is shown; file logging always records everything at DEBUG level.

Usage:
    from apexlog_sync.logging import LoggingManager

    manager = LoggingManager.get_instance()
    manager.setup(log_file, console_level)

    with manager.progress_mode():
        # Console logging suppressed, file logging preserved
        pass
"""

from apexlog_sync.logging.manager import LoggingManager
from apexlog_sync.logging.handlers import ProgressAwareConsoleHandler

__all__ = [
    'LoggingManager',
    'ProgressAwareConsoleHandler',
]
