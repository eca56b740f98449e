"""
Apex Log Sync - Exceptions

Centralized exception hierarchy for all Salesforce-related errors.
"""

from typing import Optional


class SalesforceError(Exception):
    """Base exception for all Salesforce operations."""
    pass


class SFAuthError(SalesforceError):
    """Exception for Salesforce authentication errors.

    Raised when:
    - Neither sf nor sfdx CLI could provide credentials
    - CLI output is not usable JSON
    - Access token or instance URL is missing
    """
    pass


class AuthInvalidJsonError(SFAuthError):
    """CLI output is not JSON, or its payload is not an object."""

    def __init__(self) -> None:
        super().__init__("invalid auth json")


class AuthMissingFieldsError(SFAuthError):
    """CLI output lacks an access token or instance URL."""

    def __init__(self) -> None:
        super().__init__("missing auth fields")


class AuthCommandError(SFAuthError):
    """CLI program could not be started or exited non-zero."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"command failed: {detail}")


class SFAPIError(SalesforceError):
    """Exception for Salesforce API errors.

    Raised when:
    - Tooling API request fails
    - Resource not found (404)
    - Response body cannot be decoded
    """
    pass


class SFRequestError(SFAPIError):
    """Request failed or returned a non-2xx status."""

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"request failed: {detail}")


class SFNetworkError(SFRequestError):
    """Exception for network failures before any HTTP status was received."""
    pass


class SFDecodeError(SFAPIError):
    """Query response body is not the expected JSON shape."""

    def __init__(self) -> None:
        super().__init__("response decode failed")


class SFProjectError(SalesforceError):
    """Exception for local SFDX project lookup errors."""
    pass


class ProjectNotFoundError(SFProjectError):
    """No readable sfdx-project.json in the directory or its parents."""

    def __init__(self) -> None:
        super().__init__("sfdx-project.json not found")


class InvalidProjectError(SFProjectError):
    """sfdx-project.json is malformed or declares a malformed version."""

    def __init__(self) -> None:
        super().__init__("invalid sfdx-project.json")


class MissingApiVersionError(SFProjectError):
    """sfdx-project.json has no string sourceApiVersion."""

    def __init__(self) -> None:
        super().__init__("missing sourceApiVersion")


class SyncFailedError(SalesforceError):
    """Fatal sync precondition failure.

    Carries a stable machine-readable code, a human message and optional
    free-text details. Per-log failures never raise this.
    """

    def __init__(self, code: str, message: str, details: Optional[str] = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"{code}: {message}" + (f" ({details})" if details else ""))
