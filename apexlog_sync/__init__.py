"""Apex Log Sync Package"""

__version__ = "0.1.0"

# Expose key components at package level for convenience

# Exceptions (centralized)
from apexlog_sync.exceptions import (
    SalesforceError,
    SFAuthError,
    SFAPIError,
    SFProjectError,
    SyncFailedError,
)

# API
from apexlog_sync.api.sf_auth import get_org_auth
from apexlog_sync.api.sf_client import ToolingClient

# Sync
from apexlog_sync.models import OrgAuth, ApexLogSummary, SyncResult, ErrorResult
from apexlog_sync.sync.orchestrator import sync_logs, run_sync

# Tool server
from apexlog_sync.mcp.stdio import handle_line, serve

__all__ = [
    "__version__",
    # Exceptions
    "SalesforceError",
    "SFAuthError",
    "SFAPIError",
    "SFProjectError",
    "SyncFailedError",
    # API
    "get_org_auth",
    "ToolingClient",
    # Sync
    "OrgAuth",
    "ApexLogSummary",
    "SyncResult",
    "ErrorResult",
    "sync_logs",
    "run_sync",
    # Tool server
    "handle_line",
    "serve",
]
