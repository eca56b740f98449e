"""
Progress-Aware Console Handler

Stream handler for stderr that stays quiet while the download progress
bar owns the terminal.
"""

import logging
import sys
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from apexlog_sync.logging.manager import LoggingManager


class ProgressAwareConsoleHandler(logging.StreamHandler):
    """
    Console handler routed through the LoggingManager during a sync.

    While the progress bar is shown, errors go to the manager's panel
    display, warnings are handed to the manager for later and anything
    below WARNING is dropped from the console. The log file is unaffected.
    """

    def __init__(self, stream=None, logging_manager: Optional['LoggingManager'] = None) -> None:
        super().__init__(stream or sys.stderr)
        self._logging_manager = logging_manager
        self._progress_mode = False

    def set_progress_mode(self, enabled: bool) -> None:
        self._progress_mode = enabled

    def emit(self, record: logging.LogRecord) -> None:
        if not self._progress_mode or self._logging_manager is None:
            super().emit(record)
            return

        try:
            if record.levelno >= logging.ERROR:
                self._logging_manager.display_critical_error(record)
            elif record.levelno >= logging.WARNING:
                self._logging_manager.buffer_warning(record)
        except Exception:
            self.handleError(record)
