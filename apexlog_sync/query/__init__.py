"""SOQL query logic"""
from apexlog_sync.query.soql import (
    clamp_limit,
    build_logs_query,
    build_query_url,
    build_log_body_url,
)

__all__ = [
    "clamp_limit",
    "build_logs_query",
    "build_query_url",
    "build_log_body_url",
]
