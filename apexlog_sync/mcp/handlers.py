"""
Request Dispatcher

Maps JSON-RPC methods to handlers and exposes the log sync as the single
``apex_logs_sync`` tool. The dispatcher is stateless across requests.

Sync failures are not protocol errors: they come back as a normal tool
result whose payload has ``ok: false`` and whose ``isError`` flag is set.
"""

import json
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Union

from apexlog_sync.query.soql import DEFAULT_LIMIT
from apexlog_sync.models import ErrorResult, SyncResult
from apexlog_sync.sync.orchestrator import run_sync

from .protocol import (
    RpcRequest,
    RpcResponse,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
)
from .tools import APEX_LOGS_SYNC_TOOL, list_tools

logger = logging.getLogger(__name__)

SERVER_NAME = 'apexlog-sync-mcp'
DEFAULT_PROTOCOL_VERSION = '2024-11-05'

SERIALIZE_FAILED_TEXT = (
    '{"ok":false,"errorCode":"SERIALIZE_FAILED","message":"Failed to serialize output."}'
)


class LogsSyncProvider(ABC):
    """Runs a log sync on behalf of the dispatcher."""

    @abstractmethod
    def logs_sync(
        self,
        limit: Optional[int],
        target: Optional[str]
    ) -> Union[SyncResult, ErrorResult]:
        """Run one sync and return its payload record."""
        pass


class CliLogsSync(LogsSyncProvider):
    """Provider backed by the real sync orchestrator."""

    def logs_sync(
        self,
        limit: Optional[int],
        target: Optional[str]
    ) -> Union[SyncResult, ErrorResult]:
        return run_sync(limit=DEFAULT_LIMIT if limit is None else limit, target=target)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _tool_result(request_id: Any, payload: Union[SyncResult, ErrorResult]) -> RpcResponse:
    try:
        text = json.dumps(payload.to_dict())
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize tool payload: {e}")
        text = SERIALIZE_FAILED_TEXT

    return RpcResponse.ok(request_id, {
        'content': [{'type': 'text', 'text': text}],
        'isError': not payload.ok,
    })


def _handle_initialize(request: RpcRequest, provider: LogsSyncProvider) -> RpcResponse:
    from apexlog_sync import __version__

    params = request.params if isinstance(request.params, dict) else {}
    protocol_version = params.get('protocolVersion')
    if not isinstance(protocol_version, str):
        protocol_version = DEFAULT_PROTOCOL_VERSION

    return RpcResponse.ok(request.id, {
        'protocolVersion': protocol_version,
        'capabilities': {'tools': {'listChanged': False}},
        'serverInfo': {'name': SERVER_NAME, 'version': __version__},
    })


def _handle_tools_list(request: RpcRequest, provider: LogsSyncProvider) -> RpcResponse:
    return RpcResponse.ok(request.id, list_tools())


def _call_apex_logs_sync(
    request_id: Any,
    arguments: Dict[str, Any],
    provider: LogsSyncProvider
) -> RpcResponse:
    limit = arguments.get('limit')
    if 'limit' in arguments and not _is_number(limit):
        return RpcResponse.fail(request_id, INVALID_PARAMS, 'limit must be a number')

    target = arguments.get('target')
    if 'target' in arguments and not isinstance(target, str):
        return RpcResponse.fail(request_id, INVALID_PARAMS, 'target must be a string')

    logger.info(f"Tool call: {APEX_LOGS_SYNC_TOOL} limit={limit} target={target}")
    payload = provider.logs_sync(None if limit is None else int(limit), target)
    return _tool_result(request_id, payload)


# Tool name -> handler
TOOLS: Dict[str, Callable[[Any, Dict[str, Any], LogsSyncProvider], RpcResponse]] = {
    APEX_LOGS_SYNC_TOOL: _call_apex_logs_sync,
}


def _handle_tools_call(request: RpcRequest, provider: LogsSyncProvider) -> RpcResponse:
    params = request.params
    if params is None:
        return RpcResponse.fail(request.id, INVALID_PARAMS, 'Missing params')
    if not isinstance(params, dict):
        return RpcResponse.fail(request.id, INVALID_PARAMS, 'params must be an object')

    name = params.get('name')
    if not isinstance(name, str):
        return RpcResponse.fail(request.id, INVALID_PARAMS, 'Missing tool name')

    handler = TOOLS.get(name)
    if handler is None:
        return RpcResponse.fail(request.id, METHOD_NOT_FOUND, 'Unknown tool')

    arguments = params.get('arguments')
    if not isinstance(arguments, dict):
        arguments = {}

    return handler(request.id, arguments, provider)


# Method name -> handler
METHODS: Dict[str, Callable[[RpcRequest, LogsSyncProvider], RpcResponse]] = {
    'initialize': _handle_initialize,
    'tools/list': _handle_tools_list,
    'tools/call': _handle_tools_call,
}


def handle_request(request: RpcRequest, provider: LogsSyncProvider) -> Optional[RpcResponse]:
    """
    Dispatch one request.

    Args:
        request: Parsed request frame
        provider: Provider running the log sync

    Returns:
        Response, or None for a notification (request without an id)
    """
    if request.is_notification:
        logger.debug(f"Notification ignored: {request.method}")
        return None

    handler = METHODS.get(request.method)
    if handler is None:
        logger.warning(f"Method not found: {request.method}")
        return RpcResponse.fail(request.id, METHOD_NOT_FOUND, 'Method not found')

    return handler(request, provider)
