"""
Sync Engine -- decides the direction and moves the database.

    push  ->  read local -> upload -> write remote record -> update local record
    pull  ->  download -> verify against remote record -> replace local -> update local record
    sync  ->  pick push, pull, or nothing from the current observations

The engine keeps no state between calls. Every call looks at the local
file and the remote record afresh. Failures are logged and re-raised;
nothing is retried or rolled back.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from .errors import IntegrityError, NotFoundError
from .integrity import fingerprint_bytes
from .local_store import LocalStore
from .models import RemoteSyncRecord, SyncDirection, SyncResult
from .transports.base import StorageTransport

logger = logging.getLogger("sqlite_cloud_backup.engine")

BLOB_NAME = "current.db"
RECORD_NAME = "metadata.json"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncEngine:
    """Orchestrates push, pull, and bidirectional sync for one database."""

    def __init__(
        self,
        store: LocalStore,
        transport: StorageTransport,
        blob_name: str = BLOB_NAME,
        record_name: str = RECORD_NAME,
        db_name: Optional[str] = None,
    ):
        """Initialize the sync engine.

        Args:
            store: Owner of the local database file.
            transport: Remote store, already authenticated.
            blob_name: Remote name of the database copy.
            record_name: Remote name of the sync record.
            db_name: Logical database name written into the remote
                record. Defaults to the local file's stem.
        """
        self.store = store
        self.transport = transport
        self.blob_name = blob_name
        self.record_name = record_name
        self.db_name = db_name or store.name

    async def push(self) -> SyncResult:
        """Upload the local database and record it as the latest version.

        Returns:
            SyncResult with direction ``push``.
        """
        started = time.monotonic()
        try:
            buffer = await self.store.get_buffer()
            fingerprint = fingerprint_bytes(buffer)

            await self.transport.upload(self.blob_name, buffer)

            synced_at = _utcnow()
            record = RemoteSyncRecord(
                db_name=self.db_name,
                last_sync=synced_at,
                last_sync_direction=SyncDirection.PUSH,
                fingerprint=fingerprint,
            )
            await self.transport.write_record(self.record_name, record)

            await self.store.update_local_record(
                {"last_sync": synced_at, "fingerprint": fingerprint}
            )
        except Exception as exc:
            logger.error("Push failed: %s", exc)
            raise

        logger.info("Push successful: %d bytes", len(buffer))
        return SyncResult(
            success=True,
            direction=SyncDirection.PUSH,
            timestamp=_utcnow(),
            local_fingerprint=fingerprint,
            remote_fingerprint=fingerprint,
            bytes_transferred=len(buffer),
            duration=time.monotonic() - started,
        )

    async def pull(self) -> SyncResult:
        """Download the remote copy, verify it, and replace the local database.

        Returns:
            SyncResult with direction ``pull``.

        Raises:
            NotFoundError: If there is no remote copy.
            IntegrityError: If the download does not match the remote
                record. The local database is left as it was.
        """
        started = time.monotonic()
        try:
            if not await self.transport.exists(self.blob_name):
                raise NotFoundError("No remote version found")

            buffer = await self.transport.download(self.blob_name)
            fingerprint = fingerprint_bytes(buffer)

            record = await self.transport.read_record(self.record_name)
            if record is not None and record.fingerprint != fingerprint:
                raise IntegrityError(
                    "Checksum mismatch - data corruption detected "
                    f"(expected {record.fingerprint[:12]}, got {fingerprint[:12]})"
                )

            await self.store.replace(buffer)
            await self.store.update_local_record(
                {"last_sync": _utcnow(), "fingerprint": fingerprint}
            )
        except Exception as exc:
            logger.error("Pull failed: %s", exc)
            raise

        logger.info("Pull successful: %d bytes", len(buffer))
        return SyncResult(
            success=True,
            direction=SyncDirection.PULL,
            timestamp=_utcnow(),
            local_fingerprint=fingerprint,
            remote_fingerprint=fingerprint,
            bytes_transferred=len(buffer),
            duration=time.monotonic() - started,
        )

    async def sync(self) -> SyncResult:
        """Push, pull, or do nothing, whichever the observations call for.

        Order matters: a missing blob or a missing record means "never
        synced" and must not be mistaken for "in sync".

        Returns:
            SyncResult; direction ``bidirectional`` with zero bytes when
            both sides already match.
        """
        started = time.monotonic()
        try:
            if not await self.transport.exists(self.blob_name):
                logger.info("No remote version found, pushing local database")
                return await self.push()

            record = await self.transport.read_record(self.record_name)
            if record is None:
                logger.info("No remote sync record, pushing local database")
                return await self.push()

            local_fingerprint = await self.store.get_fingerprint()
            if local_fingerprint == record.fingerprint:
                logger.info("Already in sync")
                return SyncResult(
                    success=True,
                    direction=SyncDirection.BIDIRECTIONAL,
                    timestamp=_utcnow(),
                    local_fingerprint=local_fingerprint,
                    remote_fingerprint=record.fingerprint,
                    bytes_transferred=0,
                    duration=time.monotonic() - started,
                )

            # Equal timestamps pull: the remote copy wins the tie.
            local_modified = await self.store.get_modified_time()
            if local_modified > record.last_sync:
                logger.info("Local is newer, pushing")
                return await self.push()
            logger.info("Remote is newer, pulling")
            return await self.pull()
        except Exception as exc:
            logger.error("Sync failed: %s", exc)
            raise
