# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Download and unpack release archives."""

from __future__ import annotations

import logging
import shutil
import stat
import tempfile
import urllib.error
import urllib.request
import zipfile
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from typing import IO

from . import constants
from .constants import USER_AGENT
from .errors import ExtractionError

LOGGER = logging.getLogger(__name__)

Opener = Callable[..., IO[bytes]]
Downloader = Callable[[str, Path], Path]
Extractor = Callable[[Path, Path], Path]


def download_file(url: str, destination_dir: Path, *, opener: Opener | None = None) -> Path:
    """Stream ``url`` into ``destination_dir`` and return the written file.

    Raises:
        ExtractionError: If the request fails or nothing was written.
    """

    open_url = opener or urllib.request.urlopen
    name = PurePosixPath(url.split("?", 1)[0]).name or "download"
    target = destination_dir / name
    destination_dir.mkdir(parents=True, exist_ok=True)
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    LOGGER.debug("Downloading %s to %s", url, target)
    try:
        with open_url(request) as response, target.open("wb") as handle:  # nosec B310 - https release URL
            shutil.copyfileobj(response, handle)
    except urllib.error.HTTPError as exc:
        raise ExtractionError(f"Unable to download tflint from {url}: HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise ExtractionError(f"Unable to download tflint from {url}: {exc}") from exc
    return target


def extract_zip(archive_path: Path, target_dir: Path) -> Path:
    """Extract ``archive_path`` into ``target_dir`` and return ``target_dir``.

    Raises:
        ExtractionError: If the archive is unreadable or contains unsafe entries.
    """

    LOGGER.debug("Extracting %s into %s", archive_path, target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(archive_path) as archive:
            extract_zip_safely(archive, target_dir)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ExtractionError(f"Failed to extract {archive_path}: {exc}") from exc
    return target_dir


def extract_zip_safely(archive: zipfile.ZipFile, target_dir: Path) -> None:
    """Extract ``archive`` rejecting traversal, oversized or bomb-like members.

    Unix permission bits recorded in the archive are restored so the binary
    stays executable.
    """

    root = target_dir.resolve()
    total_bytes = 0
    entries = 0
    for member in archive.infolist():
        if not member.filename:
            continue
        entries += 1
        if entries > constants.MAX_ARCHIVE_ENTRIES:
            raise ExtractionError("Archive contained too many entries")
        relative = Path(member.filename)
        if relative.is_absolute():
            raise ExtractionError(f"Archive entry {member.filename} is an absolute path")
        destination = (root / relative).resolve()
        try:
            destination.relative_to(root)
        except ValueError as exc:
            raise ExtractionError(f"Archive entry {member.filename} escapes the target directory") from exc
        if member.is_dir():
            destination.mkdir(parents=True, exist_ok=True)
            continue
        if member.compress_size > 0 and member.file_size > member.compress_size * constants.MAX_COMPRESSION_RATIO:
            raise ExtractionError(f"Archive entry {member.filename} exceeded the safe compression ratio")
        total_bytes += member.file_size
        if total_bytes > constants.MAX_ARCHIVE_TOTAL_BYTES:
            raise ExtractionError("Archive expanded beyond safe limits")
        destination.parent.mkdir(parents=True, exist_ok=True)
        with archive.open(member) as source, destination.open("wb") as target:
            shutil.copyfileobj(source, target)
        mode = (member.external_attr >> 16) & 0o777
        if mode:
            destination.chmod(mode)
    LOGGER.debug("Extracted %s entries totalling %s bytes", entries, total_bytes)


def ensure_executable(path: Path) -> None:
    """Add execute bits to ``path``."""

    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def make_temp_dir(prefix: str) -> Path:
    return Path(tempfile.mkdtemp(prefix=prefix))


__all__ = [
    "Downloader",
    "Extractor",
    "download_file",
    "ensure_executable",
    "extract_zip",
    "extract_zip_safely",
    "make_temp_dir",
]
