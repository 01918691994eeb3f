"""
Data models -- sync results, sync records, and configuration.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
RECORD_SCHEMA_VERSION = 1


def _assume_utc(value: datetime) -> datetime:
    """Read timestamps written without an offset as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SyncDirection(str, Enum):
    """Which way a sync operation moved data."""

    PUSH = "push"
    PULL = "pull"
    BIDIRECTIONAL = "bidirectional"


class SyncResult(BaseModel):
    """Outcome of one push, pull, or sync call. Never persisted."""

    model_config = ConfigDict(frozen=True)

    success: bool
    direction: SyncDirection
    timestamp: datetime
    local_fingerprint: str
    remote_fingerprint: str
    bytes_transferred: int = 0
    duration: float = 0.0
    error: Optional[str] = None


class RemoteSyncRecord(BaseModel):
    """Sync state stored next to the remote blob.

    Written after every successful push and read before every
    decision. ``fingerprint`` is what the blob is supposed to hash to.
    """

    db_name: str
    last_sync: datetime
    last_sync_direction: SyncDirection
    fingerprint: str
    schema_version: int = RECORD_SCHEMA_VERSION

    @field_validator("last_sync")
    @classmethod
    def last_sync_is_utc(cls, v: datetime) -> datetime:
        return _assume_utc(v)


class LocalSyncRecord(BaseModel):
    """Sync state stored beside the local database, never inside it."""

    model_config = ConfigDict(extra="forbid")

    last_sync: datetime = EPOCH
    fingerprint: str = ""

    @field_validator("last_sync")
    @classmethod
    def last_sync_is_utc(cls, v: datetime) -> datetime:
        return _assume_utc(v)


def merge_record(
    current: LocalSyncRecord, partial: Mapping[str, Any]
) -> LocalSyncRecord:
    """Overwrite only the fields present in ``partial``.

    Args:
        current: Record as it is persisted now.
        partial: Field values to change.

    Returns:
        A new record; ``current`` is left untouched.

    Raises:
        pydantic.ValidationError: On unknown fields or bad values.
    """
    return LocalSyncRecord.model_validate({**current.model_dump(), **partial})


class LogLevel(str, Enum):
    """Log verbosity accepted in the config file."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class TransportType(str, Enum):
    """Supported storage transports.

    ``memory`` keeps the remote copy in the running process only and is
    lost when it exits. It suits tests and embedding, not the CLI.
    """

    LOCAL = "local"
    MEMORY = "memory"


class TransportConfig(BaseModel):
    """Where the remote copy lives."""

    transport_type: TransportType = TransportType.LOCAL

    # Local folder (USB drive, NAS mount, synced directory)
    local_path: Optional[Path] = None


class BackupConfig(BaseModel):
    """Complete configuration for one backed-up database."""

    db_path: Path
    transport: TransportConfig = Field(default_factory=TransportConfig)
    log_level: LogLevel = LogLevel.INFO
    blob_name: str = "current.db"
    record_name: str = "metadata.json"
