# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings for a setup run, read from action inputs and CLI overrides."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from .actions import ActionsRuntime
from .constants import DEFAULT_CONFIG_PATH, DEFAULT_PLUGIN_DIR, LATEST_VERSION, PLUGIN_DIR_ENV
from .digest import normalize_digests
from .errors import ConfigError

_CHECKSUM_SPLIT = re.compile(r"[\s,]+")


class SetupSettings(BaseModel):
    """Validated inputs of the ``setup`` command."""

    model_config = ConfigDict(frozen=True)

    version: str = LATEST_VERSION
    checksums: tuple[str, ...] = Field(default_factory=tuple)
    wrapper: bool = False
    github_token: SecretStr | None = None
    cache: bool = False
    config_path: str = DEFAULT_CONFIG_PATH
    plugin_dir: str | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return LATEST_VERSION
        return value.strip() if isinstance(value, str) else value

    @field_validator("checksums", mode="before")
    @classmethod
    def _split_checksums(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return normalize_digests(_CHECKSUM_SPLIT.split(value))
        return normalize_digests(str(item) for item in value)

    @field_validator("github_token", mode="before")
    @classmethod
    def _blank_token(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("config_path", mode="before")
    @classmethod
    def _default_config_path(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CONFIG_PATH
        return value

    @property
    def token(self) -> str | None:
        return self.github_token.get_secret_value() if self.github_token else None

    def plugin_directory(self, environ: Mapping[str, str] | None = None) -> Path:
        """Return the plugin directory: input, then ``TFLINT_PLUGIN_DIR``, then the default."""

        env = os.environ if environ is None else environ
        raw = self.plugin_dir or env.get(PLUGIN_DIR_ENV) or DEFAULT_PLUGIN_DIR
        return Path(raw).expanduser()


def load_settings(runtime: ActionsRuntime, **overrides: Any) -> SetupSettings:
    """Return settings from the runner inputs with non-``None`` ``overrides`` applied.

    Raises:
        ConfigError: If an input is malformed.
    """

    try:
        payload: dict[str, Any] = {
            "version": runtime.get_input("tflint_version"),
            "checksums": runtime.get_input("checksums"),
            "wrapper": runtime.get_boolean_input("tflint_wrapper"),
            "github_token": runtime.get_input("github_token"),
            "cache": runtime.get_boolean_input("cache"),
            "config_path": runtime.get_input("tflint_config_path"),
            "plugin_dir": runtime.get_input("plugin_dir") or None,
        }
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return SetupSettings(**payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid setup-tflint settings: {exc}") from exc


__all__ = ["SetupSettings", "load_settings"]
