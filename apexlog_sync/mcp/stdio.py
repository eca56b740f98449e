"""
Line-Delimited Server Loop

Reads one JSON-RPC request per line and writes one response per line.
Requests are handled strictly one at a time.
"""

import json
import logging
import sys
from typing import IO, Optional, TextIO, Union

from .handlers import CliLogsSync, LogsSyncProvider, handle_request
from .protocol import PARSE_ERROR, InvalidRequestFrame, RpcRequest, RpcResponse

logger = logging.getLogger(__name__)


def _parse_error(error: Exception) -> str:
    # No request id can be read, so the error goes to a null id
    logger.warning(f"Parse error: {error}")
    response = RpcResponse.fail(None, PARSE_ERROR, f"Parse error: {error}")
    return json.dumps(response.to_dict())


def handle_line(line: Union[str, bytes], provider: LogsSyncProvider) -> Optional[str]:
    """
    Handle one input line.

    Args:
        line: Raw line as read from the input stream, text or UTF-8 bytes
        provider: Provider running the log sync

    Returns:
        Serialized response, or None for blank lines and notifications
    """
    try:
        text = line.decode('utf-8') if isinstance(line, bytes) else line
    except UnicodeDecodeError as e:
        return _parse_error(e)

    trimmed = text.strip()
    if not trimmed:
        return None

    try:
        request = RpcRequest.from_dict(json.loads(trimmed))
    except (ValueError, InvalidRequestFrame) as e:
        return _parse_error(e)

    response = handle_request(request, provider)
    if response is None:
        return None
    return json.dumps(response.to_dict())


def serve(
    stdin: Optional[IO] = None,
    stdout: TextIO = sys.stdout,
    provider: Optional[LogsSyncProvider] = None
) -> None:
    """
    Serve requests until the input stream closes.

    Args:
        stdin: Stream of newline-delimited requests (default: raw stdin bytes)
        stdout: Stream receiving newline-delimited responses
        provider: Sync provider (default: CliLogsSync)
    """
    stdin = stdin if stdin is not None else sys.stdin.buffer
    provider = provider or CliLogsSync()
    logger.info("Tool server started")

    for line in stdin:
        response = handle_line(line, provider)
        if response is not None:
            stdout.write(response + '\n')
            stdout.flush()

    logger.info("Input closed - tool server stopping")
