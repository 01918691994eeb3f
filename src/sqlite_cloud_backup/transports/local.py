"""
Local folder transport -- the remote copy lives in a directory.

For USB drives, NAS mounts, or a folder some other tool already
mirrors to the cloud. Blobs and records are plain files::

    <root>/current.db
    <root>/metadata.json
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..errors import NotFoundError, TransportError
from ..fileops import atomic_write, ensure_dir
from ..models import RemoteSyncRecord

logger = logging.getLogger("sqlite_cloud_backup.transports.local")


class LocalFolderTransport:
    """Storage transport backed by a filesystem directory."""

    def __init__(self, root: Path):
        self.root = Path(root).expanduser()

    @property
    def name(self) -> str:
        return "local"

    def _path(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"Invalid blob name: {name!r}")
        return self.root / name

    async def _run(self, fn, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn, *args)

    def _write(self, name: str, data: bytes) -> None:
        try:
            ensure_dir(self.root)
            atomic_write(self._path(name), data)
        except OSError as exc:
            raise TransportError(f"Write of {name} failed: {exc}") from exc

    def _read(self, name: str) -> bytes:
        path = self._path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError(f"File not found: {name}") from exc
        except OSError as exc:
            raise TransportError(f"Read of {name} failed: {exc}") from exc

    async def exists(self, name: str) -> bool:
        return await self._run(self._path(name).is_file)

    async def upload(self, name: str, data: bytes) -> None:
        await self._run(self._write, name, data)
        logger.info("Uploaded %s to %s (%d bytes)", name, self.root, len(data))

    async def download(self, name: str) -> bytes:
        data = await self._run(self._read, name)
        logger.info("Downloaded %s from %s (%d bytes)", name, self.root, len(data))
        return data

    async def read_record(self, name: str) -> Optional[RemoteSyncRecord]:
        try:
            raw = await self._run(self._read, name)
        except NotFoundError:
            return None
        try:
            return RemoteSyncRecord.model_validate_json(raw)
        except ValidationError as exc:
            raise TransportError(f"Unreadable sync record {name}: {exc}") from exc

    async def write_record(self, name: str, record: RemoteSyncRecord) -> None:
        payload = record.model_dump_json(indent=2).encode("utf-8")
        await self._run(self._write, name, payload)
        logger.debug("Sync record written: %s", name)

    def _unlink(self, name: str) -> None:
        try:
            self._path(name).unlink(missing_ok=True)
        except OSError as exc:
            raise TransportError(f"Delete of {name} failed: {exc}") from exc

    async def delete(self, name: str) -> None:
        await self._run(self._unlink, name)
        logger.info("Deleted %s from %s", name, self.root)
