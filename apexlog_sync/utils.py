"""
Shared Helpers

Small helpers used by several modules. Imports nothing from the package.
"""

import logging

logger = logging.getLogger(__name__)


def log_section_header(title: str, width: int = 70) -> None:
    """
    Log ``title`` between two separator lines at INFO level.

    Only visible on the console with --verbose; always written to the log file.
    """
    separator = "=" * width
    for line in (separator, title, separator):
        logger.info(line)
