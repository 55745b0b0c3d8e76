# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for wrapper installation."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from setup_tflint.errors import InstallError, RelocationError
from setup_tflint.wrapper import install_wrapper, render_shim
from setup_tflint.wrapper import installer as installer_module

from .support import RecordingRuntime


def _cli_dir(tmp_path: Path) -> Path:
    cli_dir = tmp_path / "bin"
    cli_dir.mkdir()
    binary = cli_dir / "tflint"
    binary.write_text("#!/bin/sh\necho real\n", encoding="utf-8")
    binary.chmod(0o755)
    return cli_dir


def test_render_shim_binds_interpreter() -> None:
    script = render_shim("/opt/python/bin/python3")

    assert script.startswith("#!/opt/python/bin/python3\n")
    assert "from setup_tflint.wrapper.shim import main" in script
    assert "$TFLINT_CLI_PATH" in script


def test_render_shim_defaults_to_running_interpreter() -> None:
    assert render_shim().splitlines()[0] == f"#!{sys.executable}"


def test_install_relocates_binary_and_exports_pointer(
    tmp_path: Path,
    runtime: RecordingRuntime,
    command_values: Callable[[str], dict[str, str]],
) -> None:
    cli_dir = _cli_dir(tmp_path)

    state = install_wrapper(cli_dir, runtime)

    assert state.real_binary == cli_dir / "tflint-bin"
    assert state.real_binary.read_text(encoding="utf-8") == "#!/bin/sh\necho real\n"
    assert "setup_tflint.wrapper.shim" in state.shim.read_text(encoding="utf-8")
    assert os.access(state.shim, os.X_OK)
    assert runtime.environ["TFLINT_CLI_PATH"] == str(cli_dir)
    assert command_values("GITHUB_ENV") == {"TFLINT_CLI_PATH": str(cli_dir)}


def test_missing_binary_is_a_relocation_error(tmp_path: Path, runtime: RecordingRuntime) -> None:
    with pytest.raises(RelocationError):
        install_wrapper(tmp_path, runtime)
    assert "TFLINT_CLI_PATH" not in runtime.environ


def test_shim_write_failure_restores_binary(
    tmp_path: Path,
    runtime: RecordingRuntime,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    cli_dir = _cli_dir(tmp_path)

    def broken_render(python: str | None = None) -> str:
        raise PermissionError("read-only file system")

    monkeypatch.setattr(installer_module, "render_shim", broken_render)

    with pytest.raises(InstallError):
        install_wrapper(cli_dir, runtime)

    assert (cli_dir / "tflint").read_text(encoding="utf-8") == "#!/bin/sh\necho real\n"
    assert not (cli_dir / "tflint-bin").exists()
    assert "TFLINT_CLI_PATH" not in runtime.environ
