"""
Log Sync Orchestrator

Main orchestration module: resolves the project and org, queries recent
ApexLog records and saves each body under the output directory.

Only precondition failures abort a sync. Each log is fetched and written
independently, so a single unreachable or unwritable log is recorded and
the batch continues.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from apexlog_sync.api.sf_auth import get_org_auth
from apexlog_sync.api.sf_client import ToolingClient
from apexlog_sync.exceptions import (
    SFAuthError,
    SFAPIError,
    SyncFailedError,
    ProjectNotFoundError,
    InvalidProjectError,
    MissingApiVersionError,
)
from apexlog_sync.models import (
    ErrorResult,
    LogError,
    OrgAuth,
    SavedLog,
    SkippedLog,
    SyncResult,
)
from apexlog_sync.project.sfdx import find_project_root, read_source_api_version
from apexlog_sync.query.soql import DEFAULT_LIMIT, clamp_limit
from apexlog_sync.utils import log_section_header

from .filename import DEFAULT_USERNAME, make_log_filename

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = 'apexlogs'

# Error codes
NO_SFDX_PROJECT = 'NO_SFDX_PROJECT'
INVALID_SFDX_PROJECT = 'INVALID_SFDX_PROJECT'
MISSING_API_VERSION = 'MISSING_API_VERSION'
AUTH_FAILED = 'AUTH_FAILED'
LOGS_QUERY_FAILED = 'LOGS_QUERY_FAILED'
IO_ERROR = 'IO_ERROR'
CWD_FAILED = 'CWD_FAILED'

NO_PROJECT_MESSAGE = 'sfdx-project.json not found. Run inside a valid SFDX project.'

AuthResolver = Callable[[Optional[str]], OrgAuth]
ClientFactory = Callable[[OrgAuth, str], ToolingClient]
ProgressCallback = Callable[[int, int, str], None]


def _current_dir(cwd: Optional[Path]) -> Path:
    if cwd is not None:
        return cwd
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise SyncFailedError(CWD_FAILED, 'Failed to resolve current directory.', str(e))


def _resolve_api_version(cwd: Path) -> str:
    project_root = find_project_root(cwd)
    if project_root is None:
        raise SyncFailedError(NO_SFDX_PROJECT, NO_PROJECT_MESSAGE)

    try:
        return read_source_api_version(project_root)
    except ProjectNotFoundError:
        raise SyncFailedError(NO_SFDX_PROJECT, NO_PROJECT_MESSAGE)
    except InvalidProjectError:
        raise SyncFailedError(INVALID_SFDX_PROJECT, 'Invalid sfdx-project.json.')
    except MissingApiVersionError:
        raise SyncFailedError(MISSING_API_VERSION, 'sfdx-project.json is missing sourceApiVersion.')


def _ensure_output_dir(cwd: Path, output_dir: str) -> Path:
    directory = cwd / output_dir
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SyncFailedError(IO_ERROR, 'Failed to write log file.', str(e))
    logger.debug(f"Directory ensured: {directory}")
    return directory


def sync_logs(
    limit: int = DEFAULT_LIMIT,
    target: Optional[str] = None,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    cwd: Optional[Path] = None,
    auth_resolver: AuthResolver = get_org_auth,
    client_factory: ClientFactory = ToolingClient.from_auth,
    on_progress: Optional[ProgressCallback] = None
) -> SyncResult:
    """
    Sync the most recent Apex logs of an org into a local directory.

    Workflow:
    1. Locate sfdx-project.json above the working directory
    2. Read its sourceApiVersion
    3. Resolve org auth through the sf/sfdx CLI
    4. Query up to ``limit`` (1-200) ApexLog records
    5. Ensure the output directory exists
    6. Fetch and write each log body; failures are recorded per log

    Args:
        limit: Requested number of logs (clamped to 1-200)
        target: Optional org alias/username (uses default org if None)
        output_dir: Directory, relative to the working directory, for log files
        cwd: Working directory override (default: process working directory)
        auth_resolver: Callable returning OrgAuth for a target
        client_factory: Callable building a Tooling client for auth + version
        on_progress: Optional callback ``(completed, total, log_id)`` per log

    Returns:
        SyncResult; logs that failed are listed in ``skipped`` or ``errors``

    Raises:
        SyncFailedError: If a precondition fails (project, auth, query, output dir)
    """
    log_section_header("APEX LOG SYNC")

    # Step 1-2: Project and API version
    workdir = _current_dir(cwd)
    api_version = _resolve_api_version(workdir)
    logger.info(f"API version: {api_version}")

    # Step 3: Auth
    try:
        auth = auth_resolver(target)
    except SFAuthError as e:
        logger.error(f"Authentication failed: {e}")
        raise SyncFailedError(AUTH_FAILED, 'Failed to retrieve Salesforce auth.', str(e))

    safe_limit = clamp_limit(limit)

    with client_factory(auth, api_version) as client:
        # Step 4: Query
        try:
            logs = client.query_apex_logs(safe_limit)
        except SFAPIError as e:
            logger.error(f"Log query failed: {e}")
            raise SyncFailedError(LOGS_QUERY_FAILED, 'Failed to query Apex logs.', str(e))

        # Step 5: Output directory
        directory = _ensure_output_dir(workdir, output_dir)

        result = SyncResult(
            username=auth.username,
            instance_url=auth.instance_url,
            api_version=api_version,
            limit=safe_limit,
            saved_dir=output_dir,
            logs=logs,
        )

        # Step 6: Bodies, one at a time in query order
        username = auth.username or DEFAULT_USERNAME
        total = len(logs)
        logger.info(f"Downloading {total} log(s)...")

        for index, log in enumerate(logs, start=1):
            filename = make_log_filename(username, log.id)

            try:
                body = client.fetch_log_body(log.id)
            except SFAPIError as e:
                logger.warning(f"  ⊙ Skipped {log.id}: {e}")
                result.skipped.append(SkippedLog(id=log.id, reason=str(e)))
            else:
                data = body.encode('utf-8')
                try:
                    (directory / filename).write_bytes(data)
                except OSError as e:
                    logger.error(f"  ✗ Write failed for {log.id}: {e}")
                    result.errors.append(LogError(id=log.id, message=str(e)))
                else:
                    logger.info(f"  ✓ Saved {filename} ({len(data)} bytes)")
                    result.saved.append(SavedLog(
                        id=log.id,
                        file=(Path(output_dir) / filename).as_posix(),
                        size=len(data),
                    ))

            if on_progress:
                try:
                    on_progress(index, total, log.id)
                except Exception as e:
                    logger.warning(f"Progress callback failed, disabling: {e}")
                    on_progress = None

    logger.info(
        f"Sync complete: {len(result.saved)} saved, "
        f"{len(result.skipped)} skipped, {len(result.errors)} failed"
    )
    return result


def run_sync(
    limit: int = DEFAULT_LIMIT,
    target: Optional[str] = None,
    **kwargs
) -> Union[SyncResult, ErrorResult]:
    """
    Run a sync and return its payload record instead of raising.

    Returns:
        SyncResult on success, ErrorResult for a fatal precondition failure
    """
    try:
        return sync_logs(limit=limit, target=target, **kwargs)
    except SyncFailedError as e:
        return ErrorResult.from_error(e)
