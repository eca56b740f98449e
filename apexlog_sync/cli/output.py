"""
CLI Output

Rich rendering of sync progress and results for the human-readable mode.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from rich.console import Console
from rich.progress import (
    Progress, BarColumn, TextColumn, TimeElapsedColumn, SpinnerColumn
)
from rich.table import Table

from apexlog_sync.models import SyncResult


@contextmanager
def sync_progress(console: Optional[Console] = None) -> Iterator:
    """
    Show a progress bar for log body downloads.

    Yields:
        Callback ``(completed, total, log_id)`` for the orchestrator
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console or Console(stderr=True),
        transient=True,
    )
    task_id = progress.add_task("Downloading Apex logs", total=None)

    def update(completed: int, total: int, log_id: str) -> None:
        progress.update(task_id, completed=completed, total=total, description=f"Downloaded {log_id}")

    with progress:
        yield update


def render_summary(result: SyncResult, console: Optional[Console] = None) -> None:
    """Print the synced logs as a table followed by outcome counts."""
    console = console or Console()
    saved_files: Dict[str, str] = {item.id: item.file for item in result.saved}

    table = Table(title=f"Apex logs ({result.username or result.instance_url})")
    for column in ('StartTime', 'User', 'LogId', 'Size', 'File'):
        table.add_column(column)

    for log in result.logs:
        table.add_row(
            log.start_time,
            log.log_user_name or '',
            log.id,
            str(log.log_length),
            saved_files.get(log.id, ''),
        )

    console.print(table)
    console.print(
        f"Saved: {len(result.saved)}, Skipped: {len(result.skipped)}, Errors: {len(result.errors)}"
    )
    for item in result.skipped:
        console.print(f"[yellow]Skipped {item.id}: {item.reason}[/yellow]")
    for item in result.errors:
        console.print(f"[red]Error {item.id}: {item.message}[/red]")
