"""
SOQL Query Building Module

Builds the bounded ApexLog query and the Tooling API URLs it is sent to.
"""

from urllib.parse import quote

MIN_LIMIT = 1
MAX_LIMIT = 200
DEFAULT_LIMIT = 100

# ApexLog fields to query
APEX_LOG_FIELDS = [
    'Id',
    'StartTime',
    'Operation',
    'Application',
    'DurationMilliseconds',
    'Status',
    'Request',
    'LogLength',
    'LogUser.Name'
]


def clamp_limit(limit: int) -> int:
    """Clamp a requested log count to the inclusive range [1, 200]."""
    return max(MIN_LIMIT, min(MAX_LIMIT, int(limit)))


def build_logs_query(limit: int) -> str:
    """
    Build SOQL query for the most recent ApexLog records.

    Args:
        limit: Requested number of logs (clamped to 1-200)

    Returns:
        Complete SOQL query string

    Example:
        >>> build_logs_query(500)
        'SELECT Id, StartTime, ... FROM ApexLog ORDER BY StartTime DESC, Id DESC LIMIT 200'
    """
    fields = ', '.join(APEX_LOG_FIELDS)
    return (
        f"SELECT {fields} FROM ApexLog "
        f"ORDER BY StartTime DESC, Id DESC LIMIT {clamp_limit(limit)}"
    )


def _base_url(instance_url: str, api_version: str) -> str:
    return f"{instance_url.rstrip('/')}/services/data/v{api_version}/tooling"


def build_query_url(instance_url: str, api_version: str, soql: str) -> str:
    """
    Build the Tooling API query URL with a percent-encoded SOQL string.

    Trailing slashes on the instance URL are ignored.
    """
    return f"{_base_url(instance_url, api_version)}/query?q={quote(soql, safe='')}"


def build_log_body_url(instance_url: str, api_version: str, log_id: str) -> str:
    """Build the Tooling API URL returning the raw body of one ApexLog."""
    return f"{_base_url(instance_url, api_version)}/sobjects/ApexLog/{log_id}/Body"
