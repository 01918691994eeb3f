"""Tests for atomic writes and copies."""

from __future__ import annotations

from pathlib import Path

import pytest

from sqlite_cloud_backup.fileops import atomic_copy, atomic_write, ensure_dir


class TestEnsureDir:
    def test_creates_nested_directories(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        ensure_dir(target)
        assert target.is_dir()

    def test_existing_directory_ok(self, tmp_path: Path):
        ensure_dir(tmp_path)
        assert tmp_path.is_dir()


class TestAtomicWrite:
    """atomic_write replaces the destination in one step."""

    def test_writes_new_file(self, tmp_path: Path):
        dest = tmp_path / "out.db"
        atomic_write(dest, b"hello")
        assert dest.read_bytes() == b"hello"

    def test_overwrites_existing(self, tmp_path: Path):
        dest = tmp_path / "out.db"
        dest.write_bytes(b"old content")
        atomic_write(dest, b"new")
        assert dest.read_bytes() == b"new"

    def test_no_temp_file_left(self, tmp_path: Path):
        dest = tmp_path / "out.db"
        atomic_write(dest, b"data")
        assert not (tmp_path / "out.db.tmp").exists()

    def test_interrupted_before_rename_keeps_destination(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """A failure between temp write and rename leaves the old content."""
        dest = tmp_path / "out.db"
        dest.write_bytes(b"original")

        def boom(self, target):
            raise OSError("simulated crash before rename")

        monkeypatch.setattr(Path, "replace", boom)

        with pytest.raises(OSError, match="simulated crash"):
            atomic_write(dest, b"half-finished")

        assert dest.read_bytes() == b"original"
        assert (tmp_path / "out.db.tmp").read_bytes() == b"half-finished"

    def test_missing_parent_raises(self, tmp_path: Path):
        with pytest.raises(OSError):
            atomic_write(tmp_path / "missing" / "out.db", b"x")


class TestAtomicCopy:
    """atomic_copy never exposes a partial destination."""

    def test_copies_content_exactly(self, tmp_path: Path):
        src = tmp_path / "src.db"
        data = bytes(range(256)) * 4096
        src.write_bytes(data)
        dest = tmp_path / "dest.db"

        atomic_copy(src, dest)

        assert dest.read_bytes() == data
        assert not (tmp_path / "dest.db.tmp").exists()

    def test_overwrites_destination(self, tmp_path: Path):
        src = tmp_path / "src.db"
        src.write_bytes(b"fresh")
        dest = tmp_path / "dest.db"
        dest.write_bytes(b"stale and longer")

        atomic_copy(src, dest)
        assert dest.read_bytes() == b"fresh"

    def test_missing_source_leaves_destination(self, tmp_path: Path):
        dest = tmp_path / "dest.db"
        dest.write_bytes(b"keep me")

        with pytest.raises(OSError):
            atomic_copy(tmp_path / "nope.db", dest)
        assert dest.read_bytes() == b"keep me"
