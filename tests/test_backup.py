"""Tests for the CloudBackup facade."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sqlite_cloud_backup.backup import CloudBackup
from sqlite_cloud_backup.config import save_config
from sqlite_cloud_backup.models import BackupConfig, LogLevel, SyncDirection, TransportConfig
from sqlite_cloud_backup.transports import InMemoryTransport, LocalFolderTransport


@pytest.fixture
def config(db_path: Path, tmp_path: Path) -> BackupConfig:
    return BackupConfig(
        db_path=db_path,
        transport=TransportConfig(local_path=tmp_path / "nas"),
    )


class TestCloudBackup:

    def test_builds_configured_transport(self, config: BackupConfig, tmp_path: Path):
        backup = CloudBackup(config, home=tmp_path)
        assert isinstance(backup.transport, LocalFolderTransport)
        assert backup.transport.root == tmp_path / "nas" / "app"

    def test_injected_transport_wins(self, config: BackupConfig, tmp_path: Path):
        transport = InMemoryTransport()
        backup = CloudBackup(config, transport=transport, home=tmp_path)
        assert backup.transport is transport

    @pytest.mark.asyncio
    async def test_sync_through_local_folder(self, config: BackupConfig, tmp_path: Path):
        backup = CloudBackup(config, home=tmp_path)

        first = await backup.sync()
        second = await backup.sync()

        assert first.direction == SyncDirection.PUSH
        assert second.direction == SyncDirection.BIDIRECTIONAL
        assert (tmp_path / "nas" / "app" / "current.db").read_bytes() == b"v1"

    @pytest.mark.asyncio
    async def test_push_and_pull(self, config: BackupConfig, tmp_path: Path, db_path: Path):
        backup = CloudBackup(config, home=tmp_path)
        await backup.push()
        db_path.write_bytes(b"local edit")

        result = await backup.pull()
        assert result.direction == SyncDirection.PULL
        assert db_path.read_bytes() == b"v1"

    @pytest.mark.asyncio
    async def test_status_before_and_after(self, config: BackupConfig, tmp_path: Path):
        backup = CloudBackup(config, home=tmp_path)

        before = await backup.status()
        assert before["remote"] is None
        assert before["remote_exists"] is False
        assert before["local"]["fingerprint"] == ""
        assert before["transport"] == "local"

        await backup.push()
        after = await backup.status()
        assert after["remote_exists"] is True
        assert after["remote"]["fingerprint"] == after["local"]["fingerprint"]

    @pytest.mark.asyncio
    async def test_delete_remote(self, config: BackupConfig, tmp_path: Path):
        backup = CloudBackup(config, home=tmp_path)
        await backup.push()

        await backup.delete_remote()

        status = await backup.status()
        assert status["remote_exists"] is False
        assert status["remote"] is None

    def test_from_file(self, config: BackupConfig, tmp_path: Path):
        path = save_config(config, tmp_path / "config.yaml")
        backup = CloudBackup.from_file(path, home=tmp_path)
        assert backup.store.db_path == config.db_path

    def test_shutdown_closes_handle(self, config: BackupConfig, tmp_path: Path):
        backup = CloudBackup(config, home=tmp_path)
        backup.store.open()
        backup.shutdown()
        assert backup.store.is_open is False

    def test_leaves_logging_alone(self, config: BackupConfig, tmp_path: Path):
        """Building a CloudBackup does not change the package log level."""
        logger = logging.getLogger("sqlite_cloud_backup")
        logger.setLevel(logging.ERROR)
        try:
            CloudBackup(config.model_copy(update={"log_level": LogLevel.DEBUG}), home=tmp_path)
            assert logger.level == logging.ERROR
        finally:
            logger.setLevel(logging.NOTSET)
