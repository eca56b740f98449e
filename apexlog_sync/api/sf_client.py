"""
Salesforce Tooling API Client

Provides a simple client for querying ApexLog records and downloading
their bodies using authentication credentials from the sf CLI.
"""

import logging
import requests
from typing import List, Optional

from apexlog_sync.exceptions import SFRequestError, SFNetworkError, SFDecodeError
from apexlog_sync.query.soql import build_logs_query, build_query_url, build_log_body_url
from apexlog_sync.models import ApexLogSummary, OrgAuth

logger = logging.getLogger(__name__)


class ToolingClient:
    """
    Simple Salesforce Tooling API client.

    Every call is a single authenticated GET. There is no retry and no
    pagination beyond the first bounded page.
    """

    def __init__(
        self,
        access_token: str,
        instance_url: str,
        api_version: str,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize Tooling API client.

        Args:
            access_token: OAuth access token from sf CLI
            instance_url: Salesforce instance URL (e.g., https://x.my.salesforce.com)
            api_version: API version declared by the project (e.g., 64.0)
            session: Optional requests session to reuse
        """
        self.access_token = access_token
        self.instance_url = instance_url.rstrip('/')
        self.api_version = api_version
        self.session = session or requests.Session()

        self.session.headers.update({
            'Authorization': f'Bearer {access_token}',
        })

        logger.info(f"Initialized Tooling client for: {self.instance_url}")

    @classmethod
    def from_auth(cls, auth: OrgAuth, api_version: str) -> 'ToolingClient':
        return cls(auth.access_token, auth.instance_url, api_version)

    def _get(self, url: str) -> requests.Response:
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise SFNetworkError(str(e))

        if not 200 <= response.status_code < 300:
            detail = f"{response.status_code} {response.reason or ''}".strip()
            logger.error(f"HTTP error: {detail}")
            raise SFRequestError(detail, status_code=response.status_code)

        return response

    def query_apex_logs(self, limit: int) -> List[ApexLogSummary]:
        """
        Query the most recent ApexLog records.

        Args:
            limit: Requested number of logs (clamped to 1-200)

        Returns:
            Log summaries in query order (newest first)

        Raises:
            SFRequestError: If the request fails or returns a non-2xx status
            SFDecodeError: If the response body is not a query result
        """
        soql = build_logs_query(limit)
        logger.debug(f"Query: {soql}")
        response = self._get(build_query_url(self.instance_url, self.api_version, soql))

        try:
            payload = response.json()
        except ValueError:
            raise SFDecodeError()

        records = payload.get('records') if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise SFDecodeError()

        logs = [ApexLogSummary.from_record(record) for record in records]
        logger.info(f"✓ Query successful: {len(logs)} log(s)")
        return logs

    def fetch_log_body(self, log_id: str) -> str:
        """
        Download the raw body of one ApexLog.

        The body is plain log text, returned verbatim.

        Raises:
            SFRequestError: If the request fails or returns a non-2xx status
        """
        logger.info(f"Downloading log: {log_id}")
        response = self._get(build_log_body_url(self.instance_url, self.api_version, log_id))
        return response.text

    def close(self):
        """Close the session"""
        self.session.close()
        logger.debug("Closed Tooling client session")

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure session is closed"""
        self.close()
        return False


def query_apex_logs(auth: OrgAuth, api_version: str, limit: int) -> List[ApexLogSummary]:
    """Query ApexLog records with a one-shot client."""
    with ToolingClient.from_auth(auth, api_version) as client:
        return client.query_apex_logs(limit)


def fetch_log_body(auth: OrgAuth, api_version: str, log_id: str) -> str:
    """Fetch one ApexLog body with a one-shot client."""
    with ToolingClient.from_auth(auth, api_version) as client:
        return client.fetch_log_body(log_id)
