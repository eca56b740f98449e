"""
JSON-RPC 2.0 Envelopes

Request and response frames for the line-delimited tool server.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

JSONRPC_VERSION = '2.0'

# Error codes
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class InvalidRequestFrame(ValueError):
    """Decoded JSON is not a request object with a string method."""
    pass


@dataclass(frozen=True)
class RpcRequest:
    """Incoming request. ``id`` of None marks a notification."""
    method: str
    id: Any = None
    params: Any = None
    jsonrpc: Optional[str] = None

    @property
    def is_notification(self) -> bool:
        return self.id is None

    @classmethod
    def from_dict(cls, frame: Any) -> 'RpcRequest':
        """
        Build a request from a decoded JSON frame.

        Raises:
            InvalidRequestFrame: If the frame is not an object with a string method
        """
        if not isinstance(frame, dict):
            raise InvalidRequestFrame('request must be a JSON object')
        method = frame.get('method')
        if not isinstance(method, str):
            raise InvalidRequestFrame('missing field `method`')
        jsonrpc = frame.get('jsonrpc')
        return cls(
            method=method,
            id=frame.get('id'),
            params=frame.get('params'),
            jsonrpc=jsonrpc if isinstance(jsonrpc, str) else None,
        )


@dataclass(frozen=True)
class RpcResponse:
    """Outgoing response carrying either a result or an error."""
    id: Any
    result: Any = None
    error: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, request_id: Any, result: Any) -> 'RpcResponse':
        return cls(id=request_id, result=result)

    @classmethod
    def fail(cls, request_id: Any, code: int, message: str) -> 'RpcResponse':
        return cls(id=request_id, error={'code': code, 'message': message})

    def to_dict(self) -> Dict[str, Any]:
        frame: Dict[str, Any] = {'jsonrpc': JSONRPC_VERSION, 'id': self.id}
        if self.error is not None:
            frame['error'] = self.error
        else:
            frame['result'] = self.result
        return frame
