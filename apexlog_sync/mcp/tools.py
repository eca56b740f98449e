"""
Tool Descriptors

Static description of the tools the server exposes. A new tool is added
here and in the dispatcher's tool table together.
"""

from typing import Any, Dict

from apexlog_sync.query.soql import MIN_LIMIT, MAX_LIMIT

APEX_LOGS_SYNC_TOOL = 'apex_logs_sync'


def list_tools() -> Dict[str, Any]:
    """Result payload for ``tools/list``."""
    return {
        'tools': [
            {
                'name': APEX_LOGS_SYNC_TOOL,
                'title': 'Sync Apex Logs',
                'description': 'Sync Apex logs to the local apexlogs directory.',
                'inputSchema': {
                    'type': 'object',
                    'properties': {
                        'limit': {
                            'type': 'number',
                            'description': f'Max logs to fetch ({MIN_LIMIT}-{MAX_LIMIT}).',
                            'minimum': MIN_LIMIT,
                            'maximum': MAX_LIMIT,
                        },
                        'target': {
                            'type': 'string',
                            'description': 'Org username or alias.',
                        },
                    },
                },
            }
        ],
        'nextCursor': None,
    }
