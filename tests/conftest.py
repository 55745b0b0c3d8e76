# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from .support import RecordingRuntime, parse_file_command


@pytest.fixture
def runner_env(tmp_path: Path) -> dict[str, str]:
    """Return an environment with file commands pointing into ``tmp_path``."""

    commands = tmp_path / "runner"
    commands.mkdir()
    env = {"PATH": "/usr/bin:/bin", "RUNNER_OS": "Linux", "RUNNER_TEMP": str(tmp_path / "runner-temp")}
    for name in ("GITHUB_OUTPUT", "GITHUB_ENV", "GITHUB_PATH", "GITHUB_STATE"):
        target = commands / name.lower()
        target.touch()
        env[name] = str(target)
    return env


@pytest.fixture
def runtime(runner_env: dict[str, str]) -> RecordingRuntime:
    return RecordingRuntime(runner_env, io.StringIO())


@pytest.fixture
def bare_runtime() -> RecordingRuntime:
    """Runtime without file commands, exercising the stdout fallbacks."""

    return RecordingRuntime({"PATH": "/usr/bin"}, io.StringIO())


FAKE_TFLINT = "#!/bin/sh\necho 'TFLint version 0.50.0'\n"


@pytest.fixture
def release_zip() -> Callable[..., bytes]:
    """Return a factory building in-memory tflint release archives."""

    def _build(members: dict[str, str] | None = None, *, mode: int = 0o755) -> bytes:
        payload = io.BytesIO()
        with zipfile.ZipFile(payload, "w", zipfile.ZIP_DEFLATED) as archive:
            for name, content in (members or {"tflint": FAKE_TFLINT}).items():
                info = zipfile.ZipInfo(name)
                info.external_attr = (0o100000 | mode) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(info, content)
        return payload.getvalue()

    return _build


@pytest.fixture
def command_values(runtime: RecordingRuntime) -> Callable[[str], dict[str, str]]:
    """Return a reader decoding the named file command of ``runtime``."""

    def _read(env_name: str) -> dict[str, str]:
        return parse_file_command(runtime.file_command(env_name))

    return _read


pytest_plugins = ["tests.wrapper.steps.wrapper_steps"]
