# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for settings loading."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from setup_tflint.config import SetupSettings, load_settings
from setup_tflint.errors import ConfigError

from .support import RecordingRuntime


def test_defaults(runtime: RecordingRuntime) -> None:
    settings = load_settings(runtime)

    assert settings.version == "latest"
    assert settings.checksums == ()
    assert settings.wrapper is False
    assert settings.cache is False
    assert settings.token is None
    assert settings.config_path == ".tflint.hcl"


def test_inputs_are_read_from_environment(runner_env: dict[str, str]) -> None:
    runner_env.update(
        {
            "INPUT_TFLINT_VERSION": "v0.50.0",
            "INPUT_CHECKSUMS": "SHA256:AAAA\nbbbb, cccc\n",
            "INPUT_TFLINT_WRAPPER": "true",
            "INPUT_GITHUB_TOKEN": "ghs_token",
            "INPUT_CACHE": "TRUE",
            "INPUT_TFLINT_CONFIG_PATH": "**/.tflint.hcl",
        },
    )
    settings = load_settings(RecordingRuntime(runner_env, io.StringIO()))

    assert settings.version == "v0.50.0"
    assert settings.checksums == ("aaaa", "bbbb", "cccc")
    assert settings.wrapper is True
    assert settings.cache is True
    assert settings.token == "ghs_token"
    assert "ghs_token" not in repr(settings)
    assert settings.config_path == "**/.tflint.hcl"


def test_overrides_win_over_inputs(runtime: RecordingRuntime) -> None:
    runtime.export_variable("INPUT_TFLINT_VERSION", "v0.49.0")
    settings = load_settings(runtime, version="v0.50.0", wrapper=True, cache=None)

    assert settings.version == "v0.50.0"
    assert settings.wrapper is True
    assert settings.cache is False


def test_invalid_boolean_input_is_a_config_error(runtime: RecordingRuntime) -> None:
    runtime.export_variable("INPUT_TFLINT_WRAPPER", "sure")
    with pytest.raises(ConfigError):
        load_settings(runtime)


def test_plugin_directory_resolution(tmp_path: Path) -> None:
    assert SetupSettings(plugin_dir=str(tmp_path)).plugin_directory({}) == tmp_path
    assert SetupSettings().plugin_directory({"TFLINT_PLUGIN_DIR": str(tmp_path / "env")}) == tmp_path / "env"
    assert SetupSettings().plugin_directory({}) == Path("~/.tflint.d/plugins").expanduser()
