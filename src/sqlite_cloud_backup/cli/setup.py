"""Setup commands: init."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ._common import DEFAULT_CONFIG, console
from ..config import save_config
from ..models import BackupConfig, LogLevel, TransportConfig, TransportType


def register_setup_commands(main: click.Group) -> None:
    """Register the setup commands on the main CLI group."""

    @main.command()
    @click.argument("db_path", type=click.Path(dir_okay=False))
    @click.option("--config", "config_path", default=DEFAULT_CONFIG, type=click.Path(),
                  help="Config file to write.")
    @click.option("--remote", default=None, type=click.Path(file_okay=False),
                  help="Folder that holds the remote copy.")
    @click.option("--log-level", default=LogLevel.INFO.value,
                  type=click.Choice([lvl.value for lvl in LogLevel]))
    @click.option("--force", is_flag=True, help="Overwrite an existing config.")
    def init(db_path: str, config_path: str, remote: Optional[str], log_level: str, force: bool):
        """Create a config file for backing up DB_PATH."""
        target = Path(config_path).expanduser()
        if target.exists() and not force:
            console.print(f"[yellow]Config already exists:[/] {target}  (use --force)")
            raise SystemExit(1)

        config = BackupConfig(
            db_path=Path(db_path).expanduser().resolve(),
            transport=TransportConfig(
                transport_type=TransportType.LOCAL,
                local_path=Path(remote).expanduser().resolve() if remote else None,
            ),
            log_level=LogLevel(log_level),
        )
        written = save_config(config, target)

        console.print(f"\n  [green]Config written:[/] {written}")
        console.print(f"  Database: [cyan]{config.db_path}[/]")
        remote_label = config.transport.local_path or "[dim]default (backup home)[/]"
        console.print(f"  Remote:   [cyan]{remote_label}[/]\n")
