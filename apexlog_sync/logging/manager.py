"""
Logging Manager - Core Handler Management

Main LoggingManager class that provides dynamic console handler control,
message buffering, and progress mode coordination.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import List, Optional, Iterator, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from apexlog_sync.logging.handlers import ProgressAwareConsoleHandler

logger = logging.getLogger(__name__)


class LoggingManager:
    """
    Logging manager with dynamic console handler control.

    Console output goes to stderr by default so that stdout stays free for
    JSON payloads and protocol frames. While the progress bar is shown,
    console output is held back and file logging continues unchanged.
    """

    _global_lock = RLock()
    _instance: Optional['LoggingManager'] = None

    def __init__(self) -> None:
        """Initialize logging manager state."""
        self._lock = RLock()
        self._console_handler: Optional[ProgressAwareConsoleHandler] = None
        self._file_handler: Optional[logging.FileHandler] = None
        self._original_handlers: List[logging.Handler] = []

        self._buffered_warnings: List[str] = []
        self._max_buffered_messages = 50

        self._rich_console: Optional[Console] = None

    @classmethod
    def get_instance(cls) -> 'LoggingManager':
        """Get or create singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._global_lock:
                if cls._instance is None:
                    cls._instance = LoggingManager()
        return cls._instance

    def setup(
        self,
        log_file: Optional[Path],
        console_level: int = logging.WARNING,
        stream: Optional[TextIO] = None
    ) -> None:
        """
        Configure logging to file and console with different log levels.

        Args:
            log_file: Path to the log file (None disables file logging)
            console_level: Logging level for console output (default: WARNING)
                          - WARNING: Only errors and warnings (minimal output)
                          - INFO: Main workflow steps (--verbose)
                          - DEBUG: All technical details (--debug)
            stream: Console stream (default: sys.stderr)
        """
        with self._lock:
            console_formatter = logging.Formatter(
                '%(levelname)s - %(message)s' if console_level >= logging.INFO
                else '%(message)s'
            )

            self._console_handler = ProgressAwareConsoleHandler(
                stream=stream or sys.stderr,
                logging_manager=self
            )
            self._console_handler.setLevel(console_level)
            self._console_handler.setFormatter(console_formatter)

            root_logger = logging.getLogger()
            root_logger.setLevel(logging.DEBUG)

            self._original_handlers = root_logger.handlers.copy()
            root_logger.handlers.clear()
            root_logger.addHandler(self._console_handler)

            if log_file is not None:
                log_file.parent.mkdir(parents=True, exist_ok=True)

                # File handler is always DEBUG level for full logs
                self._file_handler = logging.FileHandler(log_file, encoding='utf-8')
                self._file_handler.setLevel(logging.DEBUG)
                self._file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))
                root_logger.addHandler(self._file_handler)

            logger.debug("Logging manager setup complete")

    @contextmanager
    def progress_mode(self) -> Iterator[None]:
        """
        Context manager for progress mode with guaranteed cleanup.

        Usage:
            with logging_manager.progress_mode():
                # Console logging suppressed
                pass
            # Console logging restored, buffered warnings printed
        """
        with self._lock:
            self._buffered_warnings.clear()
            if self._console_handler:
                self._console_handler.set_progress_mode(True)
        try:
            yield
        finally:
            with self._lock:
                if self._console_handler:
                    self._console_handler.set_progress_mode(False)
                self._display_buffered_warnings()

    def buffer_warning(self, record: logging.LogRecord) -> None:
        """
        Buffer a warning message for display after progress ends.

        Args:
            record: LogRecord to buffer
        """
        with self._lock:
            if len(self._buffered_warnings) >= self._max_buffered_messages:
                self._buffered_warnings.pop(0)

            formatted = self._console_handler.format(record) if self._console_handler else record.getMessage()
            self._buffered_warnings.append(formatted)

    def display_critical_error(self, record: logging.LogRecord) -> None:
        """
        Display an error immediately while the progress bar is shown.

        Args:
            record: LogRecord to display
        """
        if self._rich_console is None:
            self._rich_console = Console(stderr=True)

        error_text = Text()
        error_text.append("ERROR", style="bold red")
        if record.name:
            error_text.append(f" ({record.name})", style="dim red")
        error_text.append(f": {record.getMessage()}", style="red")

        self._rich_console.print(Panel(
            error_text,
            title="Critical Error",
            border_style="red",
            padding=(0, 1),
            expand=False,
        ))

    def _display_buffered_warnings(self) -> None:
        """Write buffered warnings to the console stream."""
        if not self._buffered_warnings:
            return

        stream = self._console_handler.stream if self._console_handler else sys.stderr
        stream.write(f"\n{len(self._buffered_warnings)} warning(s) occurred during processing:\n")
        stream.write("-" * 60 + "\n")
        for message in self._buffered_warnings:
            stream.write(f"{message}\n")
        stream.write("-" * 60 + "\n")
        stream.flush()

        self._buffered_warnings.clear()

    def cleanup(self) -> None:
        """
        Restore the original root handlers and close the log file.
        """
        with self._lock:
            self._display_buffered_warnings()

            root_logger = logging.getLogger()
            root_logger.handlers.clear()
            root_logger.handlers.extend(self._original_handlers)

            if self._file_handler:
                self._file_handler.close()
                self._file_handler = None

            self._console_handler = None
