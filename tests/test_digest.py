# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for archive digest verification."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from setup_tflint.digest import calculate_sha256, normalize_digest, verify_digest
from setup_tflint.errors import ChecksumMismatch


def _write(tmp_path: Path, payload: bytes) -> tuple[Path, str]:
    target = tmp_path / "tflint.zip"
    target.write_bytes(payload)
    return target, hashlib.sha256(payload).hexdigest()


def test_calculate_sha256_spans_multiple_chunks(tmp_path: Path) -> None:
    path, expected = _write(tmp_path, b"x" * (200 * 1024 + 7))
    assert calculate_sha256(path) == expected


def test_empty_digest_set_never_opens_the_file(tmp_path: Path) -> None:
    verify_digest(tmp_path / "missing.zip", [])
    verify_digest(tmp_path / "missing.zip", ["", "  "])


def test_any_expected_digest_matches(tmp_path: Path) -> None:
    path, digest = _write(tmp_path, b"release")
    verify_digest(path, ["0" * 64, f"SHA256:{digest.upper()}"])


def test_mismatch_reports_computed_and_expected(tmp_path: Path) -> None:
    path, digest = _write(tmp_path, b"tampered")
    with pytest.raises(ChecksumMismatch) as excinfo:
        verify_digest(path, ["a" * 64, "b" * 64])
    assert excinfo.value.computed == digest
    assert excinfo.value.expected == ("a" * 64, "b" * 64)
    assert digest in str(excinfo.value)


def test_normalize_digest() -> None:
    assert normalize_digest("  sha256:ABCD \n") == "abcd"
