"""Cache root resolution and on-disk write helpers."""

from __future__ import annotations

import contextlib
import os
import sys
import tempfile
from pathlib import Path

from ._threads import run_blocking
from .exceptions import CacheDirCreationError, CacheDirResolutionError

CACHE_DIR_NAME = "meteostat_rs_cache"
"""Fixed subdirectory under the platform cache directory."""

CACHE_DIR_ENV = "METEOSTAT_CACHE_DIR"
"""Environment variable that overrides the whole cache root."""


def default_cache_dir() -> Path:
    """Return the platform-appropriate cache directory for Meteostat data.

    ``$METEOSTAT_CACHE_DIR`` wins when set.  Otherwise the per-user cache
    directory of the platform is joined with :data:`CACHE_DIR_NAME`.

    Raises:
        CacheDirResolutionError: If the home directory cannot be determined.
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override)

    try:
        home = Path.home()
    except (KeyError, RuntimeError) as exc:
        raise CacheDirResolutionError(str(exc)) from exc

    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", home / "AppData" / "Local"))
    elif sys.platform == "darwin":
        base = home / "Library" / "Caches"
    else:
        # Linux / other POSIX
        xdg = os.environ.get("XDG_CACHE_HOME")
        base = Path(xdg) if xdg else home / ".cache"
    return base / CACHE_DIR_NAME


def ensure_cache_dir(path: Path) -> Path:
    """Make sure *path* exists and is a directory.

    Missing parents are created.  Returns *path* unchanged.

    Raises:
        CacheDirCreationError: If *path* is an existing file or cannot be
            created.
    """
    if path.is_dir():
        return path
    if path.exists():
        raise CacheDirCreationError(path, "path exists but is not a directory")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CacheDirCreationError(path, str(exc)) from exc
    return path


async def async_ensure_cache_dir(path: Path) -> Path:
    """Async variant of :func:`ensure_cache_dir`, run on a worker thread."""
    return await run_blocking("create cache directory", ensure_cache_dir, path)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write *data* to *path* so that readers never see a partial file.

    The bytes land in a temporary sibling first and are moved into place
    with :func:`os.replace`.  The temporary file is removed on any failure.

    Raises:
        OSError: If writing or renaming fails.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise


def temp_sibling(path: Path) -> Path:
    """Reserve an empty temporary file next to *path* and return its path."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    os.close(fd)
    return Path(tmp_name)
