# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Local tool cache keyed by tool name, version and architecture.

Layout mirrors the hosted runner tool cache::

    <root>/<tool>/<version>/<arch>/           extracted tool
    <root>/<tool>/<version>/<arch>.complete   marker written last

An entry without its marker is treated as absent, so an interrupted copy is
never served.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .constants import TOOL_CACHE_ENV

LOGGER = logging.getLogger(__name__)

COMPLETE_SUFFIX: Final[str] = ".complete"


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Identity of a cached tool directory."""

    tool: str
    version: str
    arch: str


def default_cache_root() -> Path:
    """Return the tool cache root honouring ``RUNNER_TOOL_CACHE``."""

    override = os.environ.get(TOOL_CACHE_ENV)
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / "setup-tflint" / "tool-cache"


class ToolCache:
    """Find and populate cached tool directories."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else default_cache_root()

    @property
    def root(self) -> Path:
        return self._root

    def entry_dir(self, key: CacheKey) -> Path:
        return self._root / key.tool / key.version / key.arch

    def marker_path(self, key: CacheKey) -> Path:
        return self._root / key.tool / key.version / f"{key.arch}{COMPLETE_SUFFIX}"

    def find(self, key: CacheKey) -> Path | None:
        """Return the cached directory for ``key`` or ``None`` when absent."""

        entry = self.entry_dir(key)
        if entry.is_dir() and self.marker_path(key).is_file():
            LOGGER.debug("Found %s %s (%s) in the tool cache at %s", key.tool, key.version, key.arch, entry)
            return entry
        LOGGER.debug("%s %s (%s) is not in the tool cache", key.tool, key.version, key.arch)
        return None

    def add(self, source: Path, key: CacheKey) -> Path:
        """Copy ``source`` into the cache under ``key`` and return the entry."""

        entry = self.entry_dir(key)
        marker = self.marker_path(key)
        marker.unlink(missing_ok=True)
        if entry.exists():
            shutil.rmtree(entry)
        entry.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, entry)
        marker.write_text("", encoding="utf-8")
        LOGGER.debug("Cached %s into %s", source, entry)
        return entry


__all__ = ["COMPLETE_SUFFIX", "CacheKey", "ToolCache", "default_cache_root"]
