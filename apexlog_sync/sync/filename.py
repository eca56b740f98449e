"""
Filename Utilities

Builds deterministic, filesystem-safe names for downloaded log files.
"""

import re

# Default value for orgs without a username
DEFAULT_USERNAME = 'default'

UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9_.@-]')


def sanitize_username(username: str) -> str:
    """
    Make a username safe for use in a filename.

    Every character outside ``[A-Za-z0-9_.@-]`` becomes ``_``. A blank
    username becomes ``default``.
    """
    base = username.strip() or DEFAULT_USERNAME
    return UNSAFE_CHARS.sub('_', base)


def make_log_filename(username: str, log_id: str) -> str:
    """
    Build the file name for one log.

    Example:
        >>> make_log_filename("User Name/Team", "07L001")
        'User_Name_Team_07L001.log'
    """
    return f"{sanitize_username(username)}_{log_id}.log"
