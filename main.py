#!/usr/bin/env python3
"""
Apex Log Sync - Main Entry Point

Commands:
1. logs sync - query recent Apex logs and save their bodies under apexlogs/
2. mcp       - serve the apex_logs_sync tool over JSON-RPC on stdin/stdout
"""

import sys
import json
import logging

from apexlog_sync.cli.config import parse_arguments
from apexlog_sync.cli.output import render_summary, sync_progress
from apexlog_sync.exceptions import SyncFailedError
from apexlog_sync.logging import LoggingManager
from apexlog_sync.mcp.stdio import serve
from apexlog_sync.models import ErrorResult
from apexlog_sync.sync.orchestrator import sync_logs

logger = logging.getLogger(__name__)


def run_logs_sync(args, logging_manager: LoggingManager) -> int:
    """
    Run ``logs sync`` and print its result.

    Returns:
        Exit code: 0 for success, 2 for fatal errors
    """
    try:
        if args.json:
            result = sync_logs(limit=args.limit, target=args.target, output_dir=args.output_dir)
        else:
            with logging_manager.progress_mode(), sync_progress() as on_progress:
                result = sync_logs(
                    limit=args.limit,
                    target=args.target,
                    output_dir=args.output_dir,
                    on_progress=on_progress
                )
    except SyncFailedError as e:
        if args.json:
            print(json.dumps(ErrorResult.from_error(e).to_dict()))
        else:
            logger.error(f"{e.message}" + (f" {e.details}" if e.details else ""))
        return 2

    if args.json:
        try:
            print(json.dumps(result.to_dict()))
        except (TypeError, ValueError) as e:
            print(json.dumps(ErrorResult(
                'SERIALIZE_FAILED', 'Failed to serialize output.', str(e)
            ).to_dict()))
            return 2
    else:
        render_summary(result)

    return 0


def main():
    """
    Main entry point - parse config and execute the selected command.

    Returns:
        Exit code: 0 for success, 2 for fatal errors, 130 when interrupted
    """
    args = parse_arguments()

    # Console logging on stderr: stdout carries JSON and protocol frames
    logging_manager = LoggingManager.get_instance()
    logging_manager.setup(args.log_file, console_level=args.console_log_level)

    try:
        if args.command == 'mcp':
            serve()
            return 0

        return run_logs_sync(args, logging_manager)

    except PermissionError as e:
        logger.error(f"Permission denied: {e}")
        logger.debug("Full error details:", exc_info=True)
        return 2

    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.error(f"Unexpected error occurred: {e}")
        logger.error("Please check the log file for detailed error information")
        logger.debug("Full error details:", exc_info=True)
        return 2

    finally:
        logging_manager.cleanup()


if __name__ == '__main__':
    sys.exit(main())
