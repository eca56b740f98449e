"""Salesforce CLI auth and Tooling API interactions"""
from apexlog_sync.api.sf_auth import get_org_auth, parse_auth_json
from apexlog_sync.api.sf_client import ToolingClient, query_apex_logs, fetch_log_body
from apexlog_sync.exceptions import SFAuthError, SFAPIError

__all__ = [
    "get_org_auth",
    "parse_auth_json",
    "SFAuthError",
    "ToolingClient",
    "query_apex_logs",
    "fetch_log_body",
    "SFAPIError",
]
