# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Blob cache used to persist the tflint plugin directory between runs."""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol
from urllib.parse import quote, unquote

from ..constants import BLOB_CACHE_ENV
from ..errors import PluginCacheError, ReserveCacheError

LOGGER = logging.getLogger(__name__)

ARCHIVE_SUFFIX: Final[str] = ".tar.gz"


class BlobCache(Protocol):
    """Key-addressed storage for directory snapshots."""

    def restore(self, paths: Sequence[Path], primary_key: str, restore_keys: Sequence[str] = ()) -> str | None:
        """Restore ``paths`` and return the matched key, or ``None`` on a miss.

        ``primary_key`` is tried exactly; each of ``restore_keys`` is then
        treated as a prefix, newest entry first.
        """

    def save(self, paths: Sequence[Path], key: str) -> int:
        """Store ``paths`` under ``key`` and return the cache id (``-1`` on failure).

        Raises:
            ReserveCacheError: If ``key`` already exists.
        """


def default_blob_cache_root() -> Path:
    """Return the blob cache root honouring ``SETUP_TFLINT_BLOB_CACHE``."""

    override = os.environ.get(BLOB_CACHE_ENV)
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / "setup-tflint" / "blob-cache"


class DirectoryBlobCache:
    """Store each key as one gzipped tarball inside a local directory.

    Member ``<n>/...`` of an archive holds the contents of ``paths[n]``, so
    restore must be called with the same path list that was saved.
    """

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else default_blob_cache_root()

    @property
    def root(self) -> Path:
        return self._root

    def archive_path(self, key: str) -> Path:
        return self._root / f"{quote(key, safe='')}{ARCHIVE_SUFFIX}"

    def keys(self) -> list[str]:
        """Return the stored keys, newest first."""

        if not self._root.is_dir():
            return []
        entries = sorted(
            (entry for entry in self._root.glob(f"*{ARCHIVE_SUFFIX}") if not entry.name.startswith(".")),
            key=lambda entry: entry.stat().st_mtime_ns,
            reverse=True,
        )
        return [unquote(entry.name[: -len(ARCHIVE_SUFFIX)]) for entry in entries]

    def restore(self, paths: Sequence[Path], primary_key: str, restore_keys: Sequence[str] = ()) -> str | None:
        matched = self._match(primary_key, restore_keys)
        if matched is None:
            return None
        archive = self.archive_path(matched)
        LOGGER.debug("Restoring %s from %s", [str(path) for path in paths], archive)
        with tempfile.TemporaryDirectory(prefix="setup-tflint-restore-") as scratch:
            staging = Path(scratch)
            try:
                with tarfile.open(archive, "r:gz") as bundle:
                    bundle.extractall(staging, filter="data")
            except (OSError, tarfile.TarError) as exc:
                raise PluginCacheError(f"Unable to read cache entry {matched}: {exc}") from exc
            for index, path in enumerate(paths):
                member = staging / str(index)
                if member.is_dir():
                    path.mkdir(parents=True, exist_ok=True)
                    shutil.copytree(member, path, dirs_exist_ok=True)
        return matched

    def save(self, paths: Sequence[Path], key: str) -> int:
        archive = self.archive_path(key)
        if archive.exists():
            raise ReserveCacheError(
                f"Unable to reserve cache with key {key}, another job may be creating this cache.",
            )
        existing = [path for path in paths if path.exists()]
        if not existing:
            raise PluginCacheError(
                "Path Validation Error: Path(s) specified in the action for caching do(es) not exist, "
                "hence no cache is being saved.",
            )

        self._root.mkdir(parents=True, exist_ok=True)
        handle, staging_name = tempfile.mkstemp(prefix=".partial-", suffix=ARCHIVE_SUFFIX, dir=self._root)
        os.close(handle)
        staging = Path(staging_name)
        try:
            with tarfile.open(staging, "w:gz") as bundle:
                for index, path in enumerate(paths):
                    if path.exists():
                        bundle.add(path, arcname=str(index))
            os.replace(staging, archive)
        except (OSError, tarfile.TarError) as exc:
            staging.unlink(missing_ok=True)
            raise PluginCacheError(f"Unable to write cache entry {key}: {exc}") from exc
        LOGGER.debug("Saved %s to %s", [str(path) for path in existing], archive)
        return len(self.keys())

    def _match(self, primary_key: str, restore_keys: Sequence[str]) -> str | None:
        if self.archive_path(primary_key).is_file():
            return primary_key
        stored = self.keys()
        for prefix in restore_keys:
            for candidate in stored:
                if candidate.startswith(prefix):
                    return candidate
        return None


__all__ = ["ARCHIVE_SUFFIX", "BlobCache", "DirectoryBlobCache", "default_blob_cache_root"]
