"""
Storage transports -- where the remote copy lives.

The engine only talks to the StorageTransport contract. The config
picks which implementation backs it.

Local: plain directory. For USB drives, NAS, or a cloud-synced folder.
Memory: a dictionary. For tests and dry runs.
"""

from __future__ import annotations

from pathlib import Path

from ..models import TransportConfig, TransportType
from .base import StorageTransport
from .local import LocalFolderTransport
from .memory import InMemoryTransport


def create_transport(
    config: TransportConfig, db_name: str, home: Path
) -> StorageTransport:
    """Factory function to create the configured transport.

    Args:
        config: Transport configuration.
        db_name: Logical database name; each database gets its own
            remote folder.
        home: Backup home directory, used for the default local folder.

    Returns:
        Instantiated transport.

    Raises:
        ValueError: If the transport type is not supported.
    """
    if config.transport_type == TransportType.LOCAL:
        base = (
            config.local_path.expanduser()
            if config.local_path
            else Path(home).expanduser() / "remote"
        )
        return LocalFolderTransport(base / db_name)
    if config.transport_type == TransportType.MEMORY:
        return InMemoryTransport()
    raise ValueError(f"Unsupported transport: {config.transport_type}")


__all__ = [
    "InMemoryTransport",
    "LocalFolderTransport",
    "StorageTransport",
    "create_transport",
]
