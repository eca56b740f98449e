"""
Salesforce CLI Authentication Utilities

This module extracts authentication credentials from an active Salesforce
CLI session for reuse in Tooling API calls. The current ``sf`` CLI is tried
first; the legacy ``sfdx`` CLI is the fallback.
"""

import json
import subprocess
import logging
from typing import Any, Callable, List, Optional, Sequence

from apexlog_sync.exceptions import (
    SFAuthError,
    AuthCommandError,
    AuthInvalidJsonError,
    AuthMissingFieldsError,
)
from apexlog_sync.models import OrgAuth

logger = logging.getLogger(__name__)

# Accepted key names, new naming first
ACCESS_TOKEN_KEYS = ('accessToken', 'access_token')
INSTANCE_URL_KEYS = ('instanceUrl', 'instance_url', 'loginUrl')

CommandRunner = Callable[[str, List[str]], str]


def _read_string(payload: dict, keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str):
            return value
    return None


def parse_auth_json(output: str) -> OrgAuth:
    """
    Parse ``org display --json`` output into an OrgAuth.

    Args:
        output: Raw stdout of the CLI

    Returns:
        OrgAuth with access token, instance URL and optional username

    Raises:
        AuthInvalidJsonError: If output is not JSON or its payload is not an object
        AuthMissingFieldsError: If the access token or instance URL is missing

    Example:
        >>> parse_auth_json('{"result": {"accessToken": "T", "instanceUrl": "https://x"}}')
        OrgAuth(access_token='T', instance_url='https://x', username=None)
    """
    try:
        response: Any = json.loads(output)
    except (TypeError, ValueError):
        raise AuthInvalidJsonError()

    payload = response
    if isinstance(response, dict) and 'result' in response:
        payload = response['result']

    if not isinstance(payload, dict):
        raise AuthInvalidJsonError()

    access_token = _read_string(payload, ACCESS_TOKEN_KEYS)
    instance_url = _read_string(payload, INSTANCE_URL_KEYS)
    if access_token is None or instance_url is None:
        raise AuthMissingFieldsError()

    return OrgAuth(
        access_token=access_token,
        instance_url=instance_url,
        username=_read_string(payload, ('username',)),
    )


def build_sf_args(target: Optional[str] = None) -> List[str]:
    """Arguments for ``sf org display``."""
    args = ['org', 'display', '--json', '--verbose']
    if target:
        args.extend(['-o', target])
    return args


def build_sfdx_args(target: Optional[str] = None) -> List[str]:
    """Arguments for the legacy ``sfdx force:org:display``."""
    args = ['force:org:display', '--json']
    if target:
        args.extend(['-u', target])
    return args


def run_command(program: str, args: List[str]) -> str:
    """
    Run a CLI program once and return its stdout.

    Raises:
        AuthCommandError: If the program cannot be started or exits non-zero
    """
    logger.debug(f"Executing: {program} {' '.join(args)}")

    try:
        result = subprocess.run(
            [program, *args],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise AuthCommandError(f"{program}: {e}")

    if result.returncode != 0:
        raise AuthCommandError(f"{program} exited {result.returncode}: {result.stderr}")

    return result.stdout


def get_org_auth(
    target: Optional[str] = None,
    runner: CommandRunner = run_command
) -> OrgAuth:
    """
    Extract access token and instance URL from the Salesforce CLI.

    Tries ``sf`` first. If it cannot run or its output does not parse,
    ``sfdx`` is tried with the same target. When both fail, the ``sf``
    error is reported since it is the earliest failure.

    Args:
        target: Optional org alias/username. If None, uses the default org.
        runner: Callable executing a program and returning its stdout

    Returns:
        OrgAuth for the org

    Raises:
        SFAuthError: If neither CLI yields usable credentials
    """
    logger.info(f"Retrieving auth info for org: {target or 'default'}")

    sf_error: Optional[SFAuthError] = None
    try:
        auth = parse_auth_json(runner('sf', build_sf_args(target)))
        logger.info(f"Successfully retrieved auth for: {auth.username}")
        return auth
    except SFAuthError as e:
        logger.warning(f"sf CLI auth failed, trying sfdx: {e}")
        sf_error = e

    try:
        auth = parse_auth_json(runner('sfdx', build_sfdx_args(target)))
    except SFAuthError as e:
        logger.error(f"sfdx CLI auth failed: {e}")
        raise (sf_error or e) from e

    logger.info(f"Successfully retrieved auth for: {auth.username}")
    logger.debug(f"Instance URL: {auth.instance_url}")
    return auth
