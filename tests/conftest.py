"""Shared test fixtures for sqlite-cloud-backup."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Provide a local database file containing ``v1``."""
    path = tmp_path / "data" / "app.db"
    path.parent.mkdir()
    path.write_bytes(b"v1")
    return path


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    """Provide a real SQLite database with one table and one row."""
    import sqlite3

    path = tmp_path / "real.db"
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, value TEXT)")
    conn.execute("INSERT INTO test (value) VALUES ('test data')")
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def store(db_path: Path):
    """Provide a LocalStore over the ``v1`` database."""
    from sqlite_cloud_backup.local_store import LocalStore

    local = LocalStore(db_path)
    yield local
    local.close()


@pytest.fixture
def transport():
    """Provide an empty in-memory transport."""
    from sqlite_cloud_backup.transports.memory import InMemoryTransport

    return InMemoryTransport()


@pytest.fixture
def engine(store, transport):
    """Provide a SyncEngine over the local store and in-memory transport."""
    from sqlite_cloud_backup.engine import SyncEngine

    return SyncEngine(store, transport)
