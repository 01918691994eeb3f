"""
sqlite-cloud-backup: one database, one remote copy.

Keeps a single local database file in step with its backup in an
object store. Fingerprints decide whether anything moves; modification
times decide which way.

Single user, single device. Not a multi-writer replication system.
"""

import os

__version__ = "0.1.0"

BACKUP_HOME = os.environ.get("SQLITE_CLOUD_BACKUP_HOME", "~/.sqlite-cloud-backup")
