# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console status lines and debug logging."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from setup_tflint.logging import enable_debug_logging, fail, info, supports_color


def test_status_lines_without_emoji_or_colour(capsys: pytest.CaptureFixture[str]) -> None:
    info("tflint v0.50.0 is available", use_emoji=False, use_color=False)
    fail("Checksum mismatch", use_emoji=False, use_color=False)

    assert capsys.readouterr().out.splitlines() == ["tflint v0.50.0 is available", "Checksum mismatch"]


def test_supports_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert supports_color() is True
    monkeypatch.setenv("NO_COLOR", "1")
    assert supports_color() is False


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("setup_tflint")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
    if hasattr(logger, "_setup_tflint_debug"):
        delattr(logger, "_setup_tflint_debug")


def test_debug_logging_follows_runner_debug(package_logger: logging.Logger) -> None:
    assert enable_debug_logging({}) is False
    assert enable_debug_logging({"RUNNER_DEBUG": "1"}) is True
    assert package_logger.level == logging.DEBUG
    handlers = len(package_logger.handlers)
    enable_debug_logging({"RUNNER_DEBUG": "1"})
    assert len(package_logger.handlers) == handlers
