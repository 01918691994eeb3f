"""
Error kinds raised by the backup core.

Local filesystem failures are not wrapped: they surface as the
built-in OSError so callers see the real errno and path.
"""

from __future__ import annotations


class BackupError(Exception):
    """Base class for every error raised by sqlite-cloud-backup."""


class NotFoundError(BackupError):
    """A local database or a remote blob does not exist."""


class IntegrityError(BackupError):
    """Downloaded content does not match its declared fingerprint."""


class TransportError(BackupError):
    """The storage transport failed (network, auth, quota, disk)."""


class ConfigError(BackupError):
    """The configuration file is missing or invalid."""
