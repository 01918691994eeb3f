"""
sqlite-cloud-backup CLI.

The main Click group is defined here and the command groups are
registered from their own modules.

Entry point: sqlite_cloud_backup.cli:main
"""

from __future__ import annotations

import click

from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="sqlite-cloud-backup")
def main():
    """sqlite-cloud-backup: keep one database backed up to one remote copy."""


from .setup import register_setup_commands
from .sync_cmd import register_sync_commands

register_setup_commands(main)
register_sync_commands(main)
