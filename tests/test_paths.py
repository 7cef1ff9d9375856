# pkgtypes Path Utility Tests

import os
import stat
from pathlib import Path

import pytest

from pkgtypes.utils.paths import (
    atomic_write,
    expand_path,
    mkdir_if_missing,
    readlink_or_none,
    rmdir_if_exists,
    unlink_if_exists,
    write_if_changed,
)


class TestMkdirIfMissing:
    """Tests for mkdir_if_missing()."""

    def test_creates_directory(self, temp_dir: Path):
        target = temp_dir / "new"
        assert mkdir_if_missing(target) is True
        assert target.is_dir()

    def test_existing_directory_is_success(self, temp_dir: Path):
        target = temp_dir / "new"
        target.mkdir()
        assert mkdir_if_missing(target) is False
        assert target.is_dir()

    def test_parents(self, temp_dir: Path):
        target = temp_dir / "a" / "b" / "c"
        assert mkdir_if_missing(target, parents=True) is True
        assert target.is_dir()

    def test_missing_parent_raises(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            mkdir_if_missing(temp_dir / "a" / "b")


class TestUnlinkIfExists:
    """Tests for unlink_if_exists()."""

    def test_removes_link(self, temp_dir: Path):
        link = temp_dir / "link"
        os.symlink(str(temp_dir), str(link))
        assert unlink_if_exists(link) is True
        assert not link.is_symlink()
        assert temp_dir.exists()

    def test_removes_dangling_link(self, temp_dir: Path):
        link = temp_dir / "link"
        os.symlink(str(temp_dir / "missing"), str(link))
        assert unlink_if_exists(link) is True
        assert not link.is_symlink()

    def test_missing_is_success(self, temp_dir: Path):
        assert unlink_if_exists(temp_dir / "missing") is False


class TestRmdirIfExists:
    """Tests for rmdir_if_exists()."""

    def test_removes_empty_directory(self, temp_dir: Path):
        target = temp_dir / "empty"
        target.mkdir()
        assert rmdir_if_exists(target) is True
        assert not target.exists()

    def test_missing_is_success(self, temp_dir: Path):
        assert rmdir_if_exists(temp_dir / "missing") is False

    def test_non_empty_raises(self, temp_dir: Path):
        target = temp_dir / "full"
        target.mkdir()
        (target / "file.txt").write_text("x", encoding="utf-8")
        with pytest.raises(OSError):
            rmdir_if_exists(target)


class TestReadlinkOrNone:
    """Tests for readlink_or_none()."""

    def test_reads_target(self, temp_dir: Path):
        link = temp_dir / "link"
        os.symlink("/some/where", str(link))
        assert readlink_or_none(link) == "/some/where"

    def test_missing_returns_none(self, temp_dir: Path):
        assert readlink_or_none(temp_dir / "missing") is None

    def test_regular_file_raises(self, temp_dir: Path):
        regular = temp_dir / "file.txt"
        regular.write_text("not a link", encoding="utf-8")
        with pytest.raises(OSError):
            readlink_or_none(regular)


class TestAtomicWrite:
    """Tests for atomic_write() and write_if_changed()."""

    def test_writes_content(self, temp_dir: Path):
        target = temp_dir / "sub" / "file.txt"
        atomic_write(target, "hello")
        assert target.read_text(encoding="utf-8") == "hello"

    def test_replaces_content_without_leftovers(self, temp_dir: Path):
        target = temp_dir / "file.txt"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert [p.name for p in temp_dir.iterdir()] == ["file.txt"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_follows_umask(self, temp_dir: Path):
        target = temp_dir / "packages.d.ts"
        previous = os.umask(0o022)
        try:
            atomic_write(target, "content")
        finally:
            os.umask(previous)

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o644

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_write_if_changed_readable_by_others(self, temp_dir: Path):
        target = temp_dir / "package.json"
        previous = os.umask(0o022)
        try:
            write_if_changed(target, "{}")
        finally:
            os.umask(previous)

        mode = stat.S_IMODE(os.stat(target).st_mode)
        assert mode & (stat.S_IRGRP | stat.S_IROTH) == stat.S_IRGRP | stat.S_IROTH

    def test_write_if_changed(self, temp_dir: Path):
        target = temp_dir / "file.txt"
        assert write_if_changed(target, "content") is True
        assert write_if_changed(target, "content") is False
        assert write_if_changed(target, "other") is True
        assert target.read_text(encoding="utf-8") == "other"


class TestExpandPath:
    """Tests for expand_path()."""

    def test_expands_user(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert expand_path("~/app") == temp_dir / "app"

    def test_expands_variables(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APP_ROOT", str(temp_dir))
        assert expand_path("$APP_ROOT/app") == temp_dir / "app"
