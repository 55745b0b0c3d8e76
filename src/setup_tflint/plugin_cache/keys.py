# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cache keys derived from the tflint configuration files."""

from __future__ import annotations

import glob
import hashlib
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..constants import CACHE_KEY_PREFIX
from ..digest import calculate_sha256


def split_patterns(patterns: str) -> list[str]:
    """Return the non-blank, non-comment lines of a multi-line pattern input."""

    return [line.strip() for line in patterns.splitlines() if line.strip() and not line.strip().startswith("#")]


def resolve_config_files(patterns: str | Sequence[str], root: Path | None = None) -> list[Path]:
    """Return the sorted regular files matching ``patterns`` relative to ``root``.

    ``patterns`` accepts one glob per line; ``**`` matches across directories.
    """

    base = root if root is not None else Path.cwd()
    lines = split_patterns(patterns) if isinstance(patterns, str) else list(patterns)
    matches: set[Path] = set()
    for pattern in lines:
        for match in glob.glob(pattern, root_dir=base, recursive=True):
            candidate = Path(match) if Path(match).is_absolute() else base / match
            if candidate.is_file():
                matches.add(candidate.resolve())
    return sorted(matches)


def hash_files(files: Iterable[Path]) -> str:
    """Return a SHA-256 over the SHA-256 digests of ``files`` in path order.

    Returns an empty string when ``files`` is empty.
    """

    ordered = sorted(files)
    if not ordered:
        return ""
    combined = hashlib.sha256()
    for path in ordered:
        combined.update(bytes.fromhex(calculate_sha256(path)))
    return combined.hexdigest()


def key_prefix(runner_os: str) -> str:
    return f"{CACHE_KEY_PREFIX}-{runner_os}"


def primary_key(runner_os: str, file_hash: str) -> str:
    return f"{key_prefix(runner_os)}-{file_hash}"


__all__ = ["hash_files", "key_prefix", "primary_key", "resolve_config_files", "split_patterns"]
