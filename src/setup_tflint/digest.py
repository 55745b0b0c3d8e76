# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Streaming SHA-256 verification of downloaded archives."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from .constants import HASH_CHUNK_SIZE
from .errors import ChecksumMismatch

LOGGER = logging.getLogger(__name__)

_ALGORITHM_PREFIX = "sha256:"


def calculate_sha256(path: Path) -> str:
    """Return the hex SHA-256 digest of ``path`` read in bounded chunks."""

    digest = hashlib.sha256()
    with path.open("rb") as source:
        for chunk in iter(lambda: source.read(HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def normalize_digest(value: str) -> str:
    """Return ``value`` lower-cased without whitespace or a ``sha256:`` prefix."""

    cleaned = value.strip().lower()
    if cleaned.startswith(_ALGORITHM_PREFIX):
        cleaned = cleaned[len(_ALGORITHM_PREFIX) :].strip()
    return cleaned


def normalize_digests(values: Iterable[str]) -> tuple[str, ...]:
    """Return the non-empty normalised digests of ``values`` in input order."""

    return tuple(digest for digest in (normalize_digest(value) for value in values) if digest)


def verify_digest(path: Path, expected: Sequence[str]) -> None:
    """Check that ``path`` hashes to one of ``expected``.

    An empty ``expected`` skips verification without touching the file.

    Raises:
        ChecksumMismatch: If the computed digest is not in ``expected``.
    """

    allowed = normalize_digests(expected)
    if not allowed:
        LOGGER.debug("No checksums supplied; skipping verification of %s", path)
        return

    computed = calculate_sha256(path)
    if computed in allowed:
        LOGGER.debug("Checksum %s of %s matched", computed, path)
        return
    raise ChecksumMismatch(computed, allowed)


__all__ = ["calculate_sha256", "normalize_digest", "normalize_digests", "verify_digest"]
