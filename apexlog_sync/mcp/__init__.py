"""JSON-RPC tool server"""
from apexlog_sync.mcp.handlers import LogsSyncProvider, CliLogsSync, handle_request
from apexlog_sync.mcp.stdio import handle_line, serve
from apexlog_sync.mcp.tools import APEX_LOGS_SYNC_TOOL, list_tools

__all__ = [
    "LogsSyncProvider",
    "CliLogsSync",
    "handle_request",
    "handle_line",
    "serve",
    "APEX_LOGS_SYNC_TOOL",
    "list_tools",
]
