"""
SFDX Project Lookup

Locates the enclosing SFDX project and reads its declared API version.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from apexlog_sync.exceptions import (
    ProjectNotFoundError,
    InvalidProjectError,
    MissingApiVersionError,
)

logger = logging.getLogger(__name__)

PROJECT_FILE = 'sfdx-project.json'

API_VERSION_PATTERN = re.compile(r'[0-9]+\.[0-9]+')


def find_project_root(start: Path) -> Optional[Path]:
    """
    Find the nearest directory at or above ``start`` holding sfdx-project.json.

    Args:
        start: Directory (or file) to search from

    Returns:
        Project root directory, or None when no ancestor has the file
    """
    current = start.parent if start.is_file() else start

    for directory in (current, *current.parents):
        if (directory / PROJECT_FILE).is_file():
            logger.debug(f"Project root: {directory}")
            return directory

    return None


def is_valid_api_version(value: str) -> bool:
    """Check a version string is shaped ``<digits>.<digits>``."""
    return API_VERSION_PATTERN.fullmatch(value) is not None


def read_source_api_version(project_root: Path) -> str:
    """
    Read ``sourceApiVersion`` from the project's sfdx-project.json.

    Raises:
        ProjectNotFoundError: If the file cannot be read
        InvalidProjectError: If the file is not JSON or the version is malformed
        MissingApiVersionError: If no string sourceApiVersion is declared
    """
    path = project_root / PROJECT_FILE

    try:
        content = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read {path}: {e}")
        raise ProjectNotFoundError()

    try:
        config = json.loads(content)
    except ValueError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise InvalidProjectError()

    version = config.get('sourceApiVersion') if isinstance(config, dict) else None
    if not isinstance(version, str):
        raise MissingApiVersionError()

    if not is_valid_api_version(version):
        logger.error(f"Malformed sourceApiVersion: {version!r}")
        raise InvalidProjectError()

    return version
