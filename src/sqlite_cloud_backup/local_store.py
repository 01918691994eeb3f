"""
Local store -- the database file on this machine and its sync record.

The store is the only component that touches the local database. It
closes its own connection before every read or replace so nothing is
served from a stale handle.

Layout beside the database::

    /data/app.db
    /data/.sqlite-cloud-backup/app/metadata.json   # LocalSyncRecord
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .errors import NotFoundError
from .fileops import atomic_write, ensure_dir
from .integrity import fingerprint_file
from .models import LocalSyncRecord, merge_record

logger = logging.getLogger("sqlite_cloud_backup.local_store")

STATE_DIR_NAME = ".sqlite-cloud-backup"
RECORD_FILE_NAME = "metadata.json"


class LocalStore:
    """Owns the local database file and its adjacent sync record."""

    def __init__(self, db_path: Union[str, Path]):
        """Initialize the store.

        Args:
            db_path: Path to the local database. It does not have to
                exist yet; ``open()`` and the readers check for it.
        """
        self.db_path = Path(db_path).expanduser()
        self.name = self.db_path.stem
        self.record_path = (
            self.db_path.parent / STATE_DIR_NAME / self.name / RECORD_FILE_NAME
        )
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> Optional[sqlite3.Connection]:
        """The open database connection, or None when closed."""
        return self._conn

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> sqlite3.Connection:
        """Open a connection to the database.

        Returns:
            The open connection (the existing one if already open).

        Raises:
            NotFoundError: If the database file does not exist.
        """
        if self._conn is not None:
            return self._conn
        self._require_db()
        self._conn = sqlite3.connect(str(self.db_path))
        logger.debug("Opened %s", self.db_path)
        return self._conn

    def close(self) -> None:
        """Close the connection. Safe to call when already closed."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed %s", self.db_path)

    def _require_db(self) -> None:
        if not self.db_path.is_file():
            raise NotFoundError(f"Database not found: {self.db_path}")

    async def _run(self, fn, *args):
        """Run blocking file work in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn, *args)

    async def get_buffer(self) -> bytes:
        """Read the whole database file into memory."""
        self.close()
        self._require_db()
        return await self._run(self.db_path.read_bytes)

    async def get_fingerprint(self) -> str:
        """Fingerprint the database as it is on disk right now."""
        self.close()
        self._require_db()
        return await self._run(fingerprint_file, self.db_path)

    async def replace(self, data: bytes) -> None:
        """Atomically overwrite the database with ``data``.

        This is the only way remote content is allowed onto the local
        database path.
        """
        self.close()
        await self._run(atomic_write, self.db_path, data)
        logger.info("Database replaced from remote copy: %s", self.db_path.name)

    async def get_modified_time(self) -> datetime:
        """Filesystem modification time of the database, in UTC."""
        self._require_db()
        stat = await self._run(self.db_path.stat)
        return datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

    def _read_record(self) -> LocalSyncRecord:
        if not self.record_path.exists():
            return LocalSyncRecord()
        try:
            return LocalSyncRecord.model_validate_json(
                self.record_path.read_text(encoding="utf-8")
            )
        except ValueError as exc:
            logger.warning("Failed to load local sync record: %s", exc)
            return LocalSyncRecord()

    def _write_record(self, record: LocalSyncRecord) -> None:
        ensure_dir(self.record_path.parent)
        atomic_write(
            self.record_path,
            record.model_dump_json(indent=2).encode("utf-8"),
        )

    async def get_local_record(self) -> LocalSyncRecord:
        """Return the persisted sync record, or the defaults if none yet."""
        return await self._run(self._read_record)

    async def update_local_record(
        self, partial: Mapping[str, Any]
    ) -> LocalSyncRecord:
        """Merge ``partial`` into the persisted record and save it.

        Args:
            partial: Only the fields to change; the rest are kept.

        Returns:
            The record as now persisted.
        """
        current = await self.get_local_record()
        updated = merge_record(current, partial)
        await self._run(self._write_record, updated)
        return updated
