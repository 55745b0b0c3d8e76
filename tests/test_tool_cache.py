# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the local tool cache."""

from __future__ import annotations

from pathlib import Path

import pytest

from setup_tflint.tool_cache import CacheKey, ToolCache, default_cache_root

KEY = CacheKey(tool="tflint", version="0.50.0", arch="amd64")


def _source(tmp_path: Path) -> Path:
    source = tmp_path / "extracted"
    source.mkdir()
    (source / "tflint").write_text("binary", encoding="utf-8")
    return source


def test_add_then_find(tmp_path: Path) -> None:
    cache = ToolCache(tmp_path / "cache")
    assert cache.find(KEY) is None

    entry = cache.add(_source(tmp_path), KEY)

    assert entry == tmp_path / "cache" / "tflint" / "0.50.0" / "amd64"
    assert cache.find(KEY) == entry
    assert (entry / "tflint").read_text(encoding="utf-8") == "binary"


def test_entry_without_marker_is_ignored(tmp_path: Path) -> None:
    cache = ToolCache(tmp_path / "cache")
    cache.entry_dir(KEY).mkdir(parents=True)
    assert cache.find(KEY) is None


def test_add_replaces_partial_entry(tmp_path: Path) -> None:
    cache = ToolCache(tmp_path / "cache")
    stale = cache.entry_dir(KEY)
    stale.mkdir(parents=True)
    (stale / "leftover").write_text("x", encoding="utf-8")

    entry = cache.add(_source(tmp_path), KEY)

    assert not (entry / "leftover").exists()


def test_default_root_honours_runner_tool_cache(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RUNNER_TOOL_CACHE", str(tmp_path / "hosted"))
    assert default_cache_root() == tmp_path / "hosted"


def test_default_root_falls_back_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("RUNNER_TOOL_CACHE", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    assert default_cache_root() == tmp_path / "setup-tflint" / "tool-cache"
