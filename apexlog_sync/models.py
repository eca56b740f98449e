"""
Sync Result Models

Data classes for the records produced by a log sync and their JSON shape.
"""

import math
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from apexlog_sync.exceptions import SFDecodeError, SyncFailedError


@dataclass(frozen=True)
class OrgAuth:
    """Credentials for one sync call, read from the sf/sfdx CLI."""
    access_token: str
    instance_url: str
    username: Optional[str] = None


@dataclass(frozen=True)
class ApexLogSummary:
    """One ApexLog row from the Tooling API query."""
    id: str
    start_time: str = ''
    operation: str = ''
    application: str = ''
    duration_ms: int = 0
    status: str = ''
    request: str = ''
    log_length: int = 0
    log_user_name: Optional[str] = None
    has_log_user: bool = False

    @classmethod
    def from_record(cls, record: Any) -> 'ApexLogSummary':
        """
        Build a summary from a Tooling API query record.

        Args:
            record: One entry of the query response's ``records`` list

        Returns:
            ApexLogSummary for the record

        Raises:
            SFDecodeError: If the record is not an object, has no string Id,
                or carries a non-integral number in an integer field
        """
        if not isinstance(record, dict) or not isinstance(record.get('Id'), str):
            raise SFDecodeError()

        log_user = record.get('LogUser')
        user_name = log_user.get('Name') if isinstance(log_user, dict) else None

        return cls(
            id=record['Id'],
            start_time=_as_str(record.get('StartTime')),
            operation=_as_str(record.get('Operation')),
            application=_as_str(record.get('Application')),
            duration_ms=_as_int(record.get('DurationMilliseconds')),
            status=_as_str(record.get('Status')),
            request=_as_str(record.get('Request')),
            log_length=_as_int(record.get('LogLength')),
            log_user_name=user_name if isinstance(user_name, str) else None,
            has_log_user=isinstance(log_user, dict),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the Salesforce field names."""
        return {
            'Id': self.id,
            'StartTime': self.start_time,
            'Operation': self.operation,
            'Application': self.application,
            'DurationMilliseconds': self.duration_ms,
            'Status': self.status,
            'Request': self.request,
            'LogLength': self.log_length,
            'LogUser': {'Name': self.log_user_name} if self.has_log_user else None,
        }


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ''


def _as_int(value: Any) -> int:
    # bool is an int subclass; Salesforce never sends one here
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise SFDecodeError()
        return int(value)
    return 0


@dataclass(frozen=True)
class SavedLog:
    """A log body written to disk."""
    id: str
    file: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'file': self.file, 'size': self.size}


@dataclass(frozen=True)
class SkippedLog:
    """A log whose body could not be fetched."""
    id: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'reason': self.reason}


@dataclass(frozen=True)
class LogError:
    """A log whose body was fetched but could not be written."""
    message: str
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'message': self.message}


@dataclass
class SyncResult:
    """Outcome of a successful sync. Per-log failures live in skipped/errors."""
    username: Optional[str]
    instance_url: str
    api_version: str
    limit: int
    saved_dir: str
    logs: List[ApexLogSummary] = field(default_factory=list)
    saved: List[SavedLog] = field(default_factory=list)
    skipped: List[SkippedLog] = field(default_factory=list)
    errors: List[LogError] = field(default_factory=list)

    ok = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase payload shape."""
        return {
            'ok': True,
            'org': {
                'username': self.username,
                'instanceUrl': self.instance_url,
            },
            'apiVersion': self.api_version,
            'limit': self.limit,
            'savedDir': self.saved_dir,
            'logs': [log.to_dict() for log in self.logs],
            'saved': [item.to_dict() for item in self.saved],
            'skipped': [item.to_dict() for item in self.skipped],
            'errors': [item.to_dict() for item in self.errors],
        }


@dataclass(frozen=True)
class ErrorResult:
    """Terminal failure payload, mutually exclusive with SyncResult."""
    error_code: str
    message: str
    details: Optional[str] = None

    ok = False

    @classmethod
    def from_error(cls, error: SyncFailedError) -> 'ErrorResult':
        return cls(error_code=error.code, message=error.message, details=error.details)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': False,
            'errorCode': self.error_code,
            'message': self.message,
            'details': self.details,
        }
