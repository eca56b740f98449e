"""Shared fixtures for the apexlog_sync test suite."""

import json

import pytest

from apexlog_sync.exceptions import SFRequestError
from apexlog_sync.models import ApexLogSummary, OrgAuth


def make_record(log_id, user="User Name"):
    return {
        "Id": log_id,
        "StartTime": "2025-01-01T00:00:00.000+0000",
        "Operation": "EXECUTION",
        "Application": "Apex",
        "DurationMilliseconds": 42,
        "Status": "Success",
        "Request": "API",
        "LogLength": 1234,
        "LogUser": {"Name": user},
    }


class FakeToolingClient:
    """In-memory stand-in for ToolingClient."""

    def __init__(self, logs=None, bodies=None, query_error=None):
        self.logs = logs or []
        self.bodies = bodies or {}
        self.query_error = query_error
        self.queried_limits = []
        self.fetched = []
        self.closed = False

    def query_apex_logs(self, limit):
        self.queried_limits.append(limit)
        if self.query_error:
            raise self.query_error
        return list(self.logs)

    def fetch_log_body(self, log_id):
        self.fetched.append(log_id)
        body = self.bodies.get(log_id)
        if isinstance(body, Exception):
            raise body
        if body is None:
            raise SFRequestError("404 Not Found", status_code=404)
        return body

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True
        return False


@pytest.fixture
def org_auth():
    return OrgAuth(
        access_token="00Dxx0000000001!AAA",
        instance_url="https://example.my.salesforce.com",
        username="user@example.com",
    )


@pytest.fixture
def sfdx_project(tmp_path):
    """A project directory declaring sourceApiVersion 64.0."""
    (tmp_path / "sfdx-project.json").write_text(json.dumps({"sourceApiVersion": "64.0"}))
    return tmp_path


@pytest.fixture
def sample_logs():
    return [
        ApexLogSummary.from_record(make_record("07Lxx0000000001")),
        ApexLogSummary.from_record(make_record("07Lxx0000000002")),
        ApexLogSummary.from_record(make_record("07Lxx0000000003")),
    ]


@pytest.fixture
def make_client():
    """Factory returning a FakeToolingClient and a client_factory using it."""
    def _make(**kwargs):
        client = FakeToolingClient(**kwargs)
        calls = []

        def factory(auth, api_version):
            calls.append((auth, api_version))
            return client

        factory.calls = calls
        return client, factory

    return _make


@pytest.fixture(name="make_record")
def make_record_fixture():
    return make_record
