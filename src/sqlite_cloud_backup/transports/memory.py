"""
In-memory transport -- a dict standing in for the remote store.

Used by the test suite and for dry runs. Nothing survives the process.
"""

from __future__ import annotations

from typing import Optional

from ..errors import NotFoundError
from ..models import RemoteSyncRecord


class InMemoryTransport:
    """Storage transport that keeps blobs and records in dictionaries."""

    def __init__(self):
        self.blobs: dict[str, bytes] = {}
        self.records: dict[str, RemoteSyncRecord] = {}

    @property
    def name(self) -> str:
        return "memory"

    async def exists(self, name: str) -> bool:
        return name in self.blobs

    async def upload(self, name: str, data: bytes) -> None:
        self.blobs[name] = bytes(data)

    async def download(self, name: str) -> bytes:
        if name not in self.blobs:
            raise NotFoundError(f"File not found: {name}")
        return self.blobs[name]

    async def read_record(self, name: str) -> Optional[RemoteSyncRecord]:
        record = self.records.get(name)
        return record.model_copy() if record is not None else None

    async def write_record(self, name: str, record: RemoteSyncRecord) -> None:
        self.records[name] = record.model_copy()

    async def delete(self, name: str) -> None:
        self.blobs.pop(name, None)
        self.records.pop(name, None)
