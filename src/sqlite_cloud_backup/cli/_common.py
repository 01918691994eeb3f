"""Shared utilities for the CLI command modules.

Provides the Rich console, config loading with friendly errors,
and result rendering.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from ..backup import CloudBackup
from ..config import configure_logging, default_config_path, load_config
from ..errors import BackupError, ConfigError
from ..models import SyncDirection, SyncResult, TransportType

console = Console()

DEFAULT_CONFIG = str(default_config_path())


def direction_label(direction: SyncDirection) -> str:
    """Map a sync direction to a Rich-formatted label.

    Args:
        direction: Direction from a SyncResult.

    Returns:
        str: Rich markup string.
    """
    return {
        SyncDirection.PUSH: "[bold cyan]PUSH[/] local -> remote",
        SyncDirection.PULL: "[bold magenta]PULL[/] remote -> local",
        SyncDirection.BIDIRECTIONAL: "[bold green]IN SYNC[/] nothing to transfer",
    }.get(direction, "[dim]UNKNOWN[/]")


def open_backup(config_path: str) -> CloudBackup:
    """Load the config and build a CloudBackup, exiting on config errors."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/] {exc}")
        console.print("Run [cyan]sqlite-cloud-backup init DB_PATH[/cyan] first.")
        sys.exit(1)

    if config.transport.transport_type == TransportType.MEMORY:
        console.print(
            "[bold red]Config error:[/] the memory transport only lives inside one "
            "process; configure a local folder for the command line."
        )
        sys.exit(1)

    configure_logging(config.log_level)
    return CloudBackup(config, home=Path(config_path).expanduser().parent)


def run_operation(backup: CloudBackup, operation: str) -> SyncResult:
    """Run push, pull, or sync to completion, exiting with 1 on failure."""
    try:
        return asyncio.run(getattr(backup, operation)())
    except (BackupError, OSError) as exc:
        console.print(f"[bold red]{operation.capitalize()} failed:[/] {exc}")
        sys.exit(1)
    finally:
        backup.shutdown()


def render_result(result: SyncResult) -> Panel:
    """Build a Rich panel describing a SyncResult."""
    return Panel(
        f"Direction: {direction_label(result.direction)}\n"
        f"Bytes: [bold]{result.bytes_transferred}[/]\n"
        f"Local:  [dim]{result.local_fingerprint[:16] or 'none'}[/]\n"
        f"Remote: [dim]{result.remote_fingerprint[:16] or 'none'}[/]\n"
        f"Duration: {result.duration:.3f}s",
        title="Sync complete",
        border_style="green",
    )
