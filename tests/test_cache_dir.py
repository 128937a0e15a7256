"""Tests for meteostat_bulk.cache_dir."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from meteostat_bulk.cache_dir import (
    CACHE_DIR_ENV,
    CACHE_DIR_NAME,
    async_ensure_cache_dir,
    atomic_write_bytes,
    default_cache_dir,
    ensure_cache_dir,
    temp_sibling,
)
from meteostat_bulk.exceptions import CacheDirCreationError, CacheDirResolutionError


class TestDefaultCacheDir:
    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(CACHE_DIR_ENV, str(tmp_path / "custom"))
        assert default_cache_dir() == tmp_path / "custom"

    def test_linux_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv(CACHE_DIR_ENV, raising=False)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
        with patch("meteostat_bulk.cache_dir.sys.platform", "linux"):
            assert default_cache_dir() == tmp_path / CACHE_DIR_NAME

    def test_linux_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv(CACHE_DIR_ENV, raising=False)
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        with (
            patch("meteostat_bulk.cache_dir.sys.platform", "linux"),
            patch("meteostat_bulk.cache_dir.Path.home", return_value=tmp_path),
        ):
            assert default_cache_dir() == tmp_path / ".cache" / CACHE_DIR_NAME

    def test_macos(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv(CACHE_DIR_ENV, raising=False)
        with (
            patch("meteostat_bulk.cache_dir.sys.platform", "darwin"),
            patch("meteostat_bulk.cache_dir.Path.home", return_value=tmp_path),
        ):
            assert default_cache_dir() == tmp_path / "Library" / "Caches" / CACHE_DIR_NAME

    def test_windows(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv(CACHE_DIR_ENV, raising=False)
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
        with patch("meteostat_bulk.cache_dir.sys.platform", "win32"):
            assert default_cache_dir() == tmp_path / CACHE_DIR_NAME

    def test_home_unresolvable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CACHE_DIR_ENV, raising=False)
        with (
            patch("meteostat_bulk.cache_dir.Path.home", side_effect=RuntimeError("no home")),
            pytest.raises(CacheDirResolutionError, match="no home"),
        ):
            default_cache_dir()


class TestEnsureCacheDir:
    def test_creates_nested(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        assert ensure_cache_dir(target) == target
        assert target.is_dir()

    def test_existing_dir(self, tmp_path: Path) -> None:
        assert ensure_cache_dir(tmp_path) == tmp_path

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        target = tmp_path / "cache"
        target.write_text("not a dir")
        with pytest.raises(CacheDirCreationError) as exc_info:
            ensure_cache_dir(target)
        assert exc_info.value.path == target
        assert "not a directory" in str(exc_info.value)

    def test_mkdir_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "cache"
        with (
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(CacheDirCreationError, match="denied"),
        ):
            ensure_cache_dir(target)

    @pytest.mark.asyncio
    async def test_async_variant(self, tmp_path: Path) -> None:
        target = tmp_path / "async"
        assert await async_ensure_cache_dir(target) == target
        assert target.is_dir()


class TestAtomicWrite:
    def test_writes_and_replaces(self, tmp_path: Path) -> None:
        path = tmp_path / "data.bin"
        path.write_bytes(b"old")
        atomic_write_bytes(path, b"new")
        assert path.read_bytes() == b"new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["data.bin"]

    def test_failure_leaves_no_temp(self, tmp_path: Path) -> None:
        path = tmp_path / "data.bin"
        with patch("meteostat_bulk.cache_dir.os.replace", side_effect=OSError("boom")), pytest.raises(OSError):
            atomic_write_bytes(path, b"payload")
        assert list(tmp_path.iterdir()) == []

    def test_temp_sibling(self, tmp_path: Path) -> None:
        tmp = temp_sibling(tmp_path / "x.parquet")
        assert tmp.parent == tmp_path
        assert tmp.exists()
        assert tmp.name.startswith(".x.parquet.")
