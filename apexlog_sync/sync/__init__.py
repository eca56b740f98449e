"""Log sync orchestration"""
from apexlog_sync.sync.orchestrator import sync_logs, run_sync
from apexlog_sync.sync.filename import make_log_filename, sanitize_username, DEFAULT_USERNAME

__all__ = [
    "sync_logs",
    "run_sync",
    "make_log_filename",
    "sanitize_username",
    "DEFAULT_USERNAME",
]
