"""
CloudBackup -- the one object an application needs.

Wires the local store, the configured transport, and the sync engine
together from a BackupConfig, and adds the housekeeping the engine
itself does not do (status, remote reset, shutdown).

    backup = CloudBackup.from_file("~/.sqlite-cloud-backup/config.yaml")
    result = await backup.sync()
    backup.shutdown()

Authentication is not handled here: the transport must arrive ready
to use.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import backup_home, load_config
from .engine import SyncEngine
from .local_store import LocalStore
from .models import BackupConfig, SyncResult
from .transports import StorageTransport, create_transport

logger = logging.getLogger("sqlite_cloud_backup.backup")


class CloudBackup:
    """Backup facade for a single database and its single remote copy."""

    def __init__(
        self,
        config: BackupConfig,
        transport: Optional[StorageTransport] = None,
        home: Optional[Union[str, Path]] = None,
    ):
        """Initialize from a configuration.

        Args:
            config: Backup configuration.
            transport: Ready-made transport. Overrides ``config.transport``.
            home: Backup home, used for default transport locations.
        """
        self.config = config
        self.home = backup_home(home)

        self.store = LocalStore(config.db_path)
        self.transport = transport or create_transport(
            config.transport, self.store.name, self.home
        )
        self.engine = SyncEngine(
            self.store,
            self.transport,
            blob_name=config.blob_name,
            record_name=config.record_name,
        )

    @classmethod
    def from_file(
        cls, path: Union[str, Path], home: Optional[Union[str, Path]] = None
    ) -> "CloudBackup":
        """Build a CloudBackup from a YAML config file."""
        return cls(load_config(path), home=home)

    async def push(self) -> SyncResult:
        """Push the local database to the remote store."""
        return await self.engine.push()

    async def pull(self) -> SyncResult:
        """Pull the remote copy over the local database."""
        return await self.engine.pull()

    async def sync(self) -> SyncResult:
        """Bidirectional sync."""
        return await self.engine.sync()

    async def status(self) -> dict[str, Any]:
        """Get the current sync status of both sides.

        Returns:
            Dict with the database path, local record, remote record,
            and whether the remote copy exists.
        """
        local = await self.store.get_local_record()
        remote = await self.transport.read_record(self.config.record_name)
        return {
            "db_path": str(self.store.db_path),
            "db_exists": self.store.db_path.is_file(),
            "transport": getattr(self.transport, "name", type(self.transport).__name__),
            "local": local.model_dump(mode="json"),
            "remote": remote.model_dump(mode="json") if remote else None,
            "remote_exists": await self.transport.exists(self.config.blob_name),
        }

    async def delete_remote(self) -> None:
        """Remove the remote copy and its sync record."""
        await self.transport.delete(self.config.blob_name)
        await self.transport.delete(self.config.record_name)
        logger.info("Remote copy of %s deleted", self.store.name)

    def shutdown(self) -> None:
        """Release the local database handle."""
        self.store.close()
        logger.info("CloudBackup shutdown complete")
