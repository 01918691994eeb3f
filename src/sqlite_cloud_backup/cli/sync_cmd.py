"""Sync commands: push, pull, sync, status, reset-remote."""

from __future__ import annotations

import asyncio
import sys

import click
from rich.panel import Panel

from ._common import DEFAULT_CONFIG, console, open_backup, render_result, run_operation
from ..errors import BackupError


def register_sync_commands(main: click.Group) -> None:
    """Register push/pull/sync/status/reset-remote on the main CLI group."""

    config_option = click.option(
        "--config", "config_path", default=DEFAULT_CONFIG, type=click.Path(),
        help="Config file.",
    )

    @main.command()
    @config_option
    def push(config_path: str):
        """Upload the local database, replacing the remote copy."""
        result = run_operation(open_backup(config_path), "push")
        console.print(render_result(result))

    @main.command()
    @config_option
    def pull(config_path: str):
        """Download the remote copy over the local database."""
        result = run_operation(open_backup(config_path), "pull")
        console.print(render_result(result))

    @main.command()
    @config_option
    def sync(config_path: str):
        """Push, pull, or do nothing, whichever is needed."""
        result = run_operation(open_backup(config_path), "sync")
        console.print(render_result(result))

    @main.command()
    @config_option
    def status(config_path: str):
        """Show local and remote sync state."""
        backup = open_backup(config_path)
        try:
            info = asyncio.run(backup.status())
        except (BackupError, OSError) as exc:
            console.print(f"[bold red]Status failed:[/] {exc}")
            sys.exit(1)
        finally:
            backup.shutdown()

        local = info["local"]
        remote = info["remote"]
        db_label = info["db_path"] if info["db_exists"] else f"{info['db_path']} [red](missing)[/]"
        remote_lines = (
            f"Remote sync: {remote['last_sync']} ({remote['last_sync_direction']})\n"
            f"Remote hash: [dim]{remote['fingerprint'][:16]}[/]"
            if remote
            else "Remote sync: [dim]never[/]"
        )
        console.print()
        console.print(
            Panel(
                f"Database: [cyan]{db_label}[/]\n"
                f"Transport: [cyan]{info['transport']}[/]\n"
                f"Remote copy: {'[green]present[/]' if info['remote_exists'] else '[yellow]none[/]'}\n"
                f"Local sync: {local['last_sync'] if local['fingerprint'] else '[dim]never[/]'}\n"
                f"Local hash: [dim]{local['fingerprint'][:16] or 'none'}[/]\n"
                f"{remote_lines}",
                title="sqlite-cloud-backup",
                border_style="bright_blue",
            )
        )

    @main.command("reset-remote")
    @config_option
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
    def reset_remote(config_path: str, yes: bool):
        """Delete the remote copy and its sync record."""
        if not yes and not click.confirm("Delete the remote copy?", default=False):
            console.print("[dim]Aborted.[/]")
            return

        backup = open_backup(config_path)
        try:
            asyncio.run(backup.delete_remote())
        except (BackupError, OSError) as exc:
            console.print(f"[bold red]Reset failed:[/] {exc}")
            sys.exit(1)
        finally:
            backup.shutdown()
        console.print("[green]Remote copy deleted.[/]")
