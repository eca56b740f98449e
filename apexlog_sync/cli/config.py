"""
CLI Configuration Module

Handles command-line argument parsing and environment configuration.
"""

import os
import argparse
import logging
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

from apexlog_sync.query.soql import DEFAULT_LIMIT
from apexlog_sync.sync.orchestrator import DEFAULT_OUTPUT_DIR

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = './logs/apexlog-sync.log'


def _env_limit() -> int:
    env_query_limit = os.getenv('QUERY_LIMIT', str(DEFAULT_LIMIT))
    try:
        return int(env_query_limit)
    except ValueError:
        logger.warning(f"Invalid QUERY_LIMIT value '{env_query_limit}', using default {DEFAULT_LIMIT}")
        return DEFAULT_LIMIT


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser, taking defaults from the environment.

    Environment (also read from a .env file):
        SF_ORG_ALIAS: Default org alias/username
        QUERY_LIMIT: Default number of logs to sync
        OUTPUT_DIR: Directory for log files
        LOG_FILE: Path of the debug log file
    """
    env_org_alias = os.getenv('SF_ORG_ALIAS')
    env_output_dir = os.getenv('OUTPUT_DIR', DEFAULT_OUTPUT_DIR)
    default_limit = _env_limit()

    parser = argparse.ArgumentParser(
        prog='apexlog-sync',
        description='Download Apex logs from a Salesforce org'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=Path(os.getenv('LOG_FILE', DEFAULT_LOG_FILE)),
        help='Path of the debug log file'
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--verbose',
        action='store_const',
        dest='console_log_level',
        const=logging.INFO,
        help='Show workflow progress messages'
    )
    verbosity.add_argument(
        '--debug',
        action='store_const',
        dest='console_log_level',
        const=logging.DEBUG,
        help='Show all technical details'
    )
    parser.set_defaults(console_log_level=logging.WARNING)

    commands = parser.add_subparsers(dest='command', required=True)

    logs_parser = commands.add_parser('logs', help='Apex log commands')
    logs_commands = logs_parser.add_subparsers(dest='logs_command', required=True)

    sync_parser = logs_commands.add_parser('sync', help='Sync recent Apex logs to disk')
    sync_parser.add_argument(
        '--limit',
        type=int,
        default=default_limit,
        help=f'Maximum number of logs to fetch, 1-200 (default: {default_limit})'
    )
    sync_parser.add_argument(
        '--target', '-o',
        type=str,
        default=env_org_alias,
        help=f'Salesforce org alias or username (default: {env_org_alias or "use default org"})'
    )
    sync_parser.add_argument(
        '--output-dir', '-d',
        type=str,
        default=env_output_dir,
        help=f'Directory for log files, relative to the working directory (default: {env_output_dir})'
    )
    sync_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )

    commands.add_parser('mcp', help='Serve the apex_logs_sync tool over JSON-RPC on stdin/stdout')

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and load environment configuration.

    Returns:
        argparse.Namespace with ``command`` ("logs" or "mcp"), ``log_file``
        and ``console_log_level``; ``logs sync`` adds ``limit``, ``target``,
        ``output_dir`` and ``json``.
    """
    # Load environment variables from .env file (if present)
    load_dotenv()

    return build_parser().parse_args(argv)
