# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Acquire a tflint release: cache lookup, download, verification, extraction."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

from .archive import Downloader, Extractor, download_file, ensure_executable, extract_zip, make_temp_dir
from .constants import DOWNLOAD_BASE_URL, TOOL_NAME
from .digest import verify_digest
from .errors import ExtractionError
from .platform import PlatformKey
from .tool_cache import CacheKey, ToolCache
from .versions import normalize_version

LOGGER = logging.getLogger(__name__)


def build_download_url(base_url: str, version: str, platform: PlatformKey) -> str:
    """Return the release asset URL for ``version`` on ``platform``."""

    return f"{base_url.rstrip('/')}/{version}/{TOOL_NAME}_{platform.os}_{platform.arch}.zip"


def binary_filename(platform: PlatformKey) -> str:
    """Return the file name of the tflint executable inside a release archive."""

    return f"{TOOL_NAME}.exe" if platform.os == "windows" else TOOL_NAME


class ToolAcquirer:
    """Provide an extracted, verified tflint directory, reusing the tool cache.

    The cache only ever receives content that passed verification, so a cache
    hit is returned without downloading or re-verifying anything.
    """

    def __init__(
        self,
        cache: ToolCache,
        *,
        base_url: str = DOWNLOAD_BASE_URL,
        downloader: Downloader = download_file,
        extractor: Extractor = extract_zip,
    ) -> None:
        self._cache = cache
        self._base_url = base_url
        self._downloader = downloader
        self._extractor = extractor

    @staticmethod
    def cache_key(version: str, platform: PlatformKey) -> CacheKey:
        return CacheKey(tool=TOOL_NAME, version=normalize_version(version), arch=platform.arch)

    def acquire(self, version: str, platform: PlatformKey, digests: Sequence[str] = ()) -> Path:
        """Return the cached directory holding tflint ``version`` for ``platform``.

        Args:
            version: Concrete release tag such as ``v0.50.0``.
            platform: Normalised host platform.
            digests: Accepted SHA-256 digests of the archive; empty skips verification.

        Returns:
            Path: Tool cache directory containing the ``tflint`` executable.

        Raises:
            ChecksumMismatch: If the archive matches none of ``digests``.
            ExtractionError: If download or extraction yields no usable path.
        """

        key = self.cache_key(version, platform)
        cached = self._cache.find(key)
        if cached is not None:
            LOGGER.debug("Using cached tflint from %s", cached)
            return cached

        url = build_download_url(self._base_url, version, platform)
        LOGGER.debug("Getting download URL for tflint version %s: %s", version, url)
        download_dir = make_temp_dir("setup-tflint-download-")
        extract_dir: Path | None = None
        try:
            archive = self._downloader(url, download_dir)
            if not archive or not archive.is_file():
                raise ExtractionError(f"Unable to download tflint from {url}")

            verify_digest(archive, digests)

            extract_dir = make_temp_dir("setup-tflint-extract-")
            extracted = self._extractor(archive, extract_dir)
            if not extracted or not extracted.is_dir() or not any(extracted.iterdir()):
                raise ExtractionError(f"Unable to extract tflint downloaded from {url}")

            binary = extracted / binary_filename(platform)
            if not binary.is_file():
                raise ExtractionError(f"Archive from {url} does not contain {binary.name}")
            try:
                ensure_executable(binary)
                return self._cache.add(extracted, key)
            except OSError as exc:
                raise ExtractionError(f"Unable to cache tflint downloaded from {url}: {exc}") from exc
        finally:
            shutil.rmtree(download_dir, ignore_errors=True)
            if extract_dir is not None:
                shutil.rmtree(extract_dir, ignore_errors=True)


__all__ = ["ToolAcquirer", "binary_filename", "build_download_url"]
