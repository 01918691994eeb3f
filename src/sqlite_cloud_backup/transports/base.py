"""
Storage transport contract -- what the engine needs from a remote store.

Any backend (a Drive-style API, an S3 bucket, a mounted folder, a dict
in memory) that implements these six coroutines can carry the backup.
Backends are matched structurally; there is nothing to subclass.

Guarantee the engine relies on: after ``write_record`` returns, an
immediate ``read_record`` returns that same record.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..models import RemoteSyncRecord


@runtime_checkable
class StorageTransport(Protocol):
    async def exists(self, name: str) -> bool:
        ...

    async def upload(self, name: str, data: bytes) -> None:
        """Store ``data`` under ``name``, replacing any previous content."""
        ...

    async def download(self, name: str) -> bytes:
        """Fetch the blob; raise NotFoundError if it does not exist."""
        ...

    async def read_record(self, name: str) -> Optional[RemoteSyncRecord]:
        ...

    async def write_record(self, name: str, record: RemoteSyncRecord) -> None:
        ...

    async def delete(self, name: str) -> None:
        """Remove the blob. Removing a missing blob is not an error."""
        ...
