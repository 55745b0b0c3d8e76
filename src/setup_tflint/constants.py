# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Constants shared across the setup-tflint modules."""

from __future__ import annotations

from typing import Final

TOOL_NAME: Final[str] = "tflint"
WRAPPED_BINARY_NAME: Final[str] = "tflint-bin"

GITHUB_OWNER: Final[str] = "terraform-linters"
GITHUB_REPO: Final[str] = "tflint"
GITHUB_API_URL: Final[str] = "https://api.github.com"
DOWNLOAD_BASE_URL: Final[str] = f"https://github.com/{GITHUB_OWNER}/{GITHUB_REPO}/releases/download"
LATEST_VERSION: Final[str] = "latest"
USER_AGENT: Final[str] = "setup-tflint"

CLI_PATH_ENV: Final[str] = "TFLINT_CLI_PATH"
FINDINGS_EXIT_CODES_ENV: Final[str] = "TFLINT_WRAPPER_FINDINGS_EXIT_CODES"
# tflint: 0 clean, 1 execution error, 2 issues at or above --minimum-failure-severity.
DEFAULT_FINDINGS_EXIT_CODES: Final[frozenset[int]] = frozenset({2})

TOOL_CACHE_ENV: Final[str] = "RUNNER_TOOL_CACHE"
BLOB_CACHE_ENV: Final[str] = "SETUP_TFLINT_BLOB_CACHE"
PLUGIN_DIR_ENV: Final[str] = "TFLINT_PLUGIN_DIR"
DEFAULT_PLUGIN_DIR: Final[str] = "~/.tflint.d/plugins"
DEFAULT_CONFIG_PATH: Final[str] = ".tflint.hcl"
RUNNER_OS_ENV: Final[str] = "RUNNER_OS"
CACHE_KEY_PREFIX: Final[str] = "tflint-plugins"

STATE_CACHE_PRIMARY_KEY: Final[str] = "TFLINT_CACHE_KEY"
STATE_CACHE_MATCHED_KEY: Final[str] = "TFLINT_CACHE_MATCHED_KEY"
STATE_CACHE_PATHS: Final[str] = "TFLINT_CACHE_PATHS"

HASH_CHUNK_SIZE: Final[int] = 64 * 1024

MAX_ARCHIVE_TOTAL_BYTES: Final[int] = 500 * 1024 * 1024
MAX_ARCHIVE_ENTRIES: Final[int] = 2000
MAX_COMPRESSION_RATIO: Final[int] = 100

__all__ = [
    "BLOB_CACHE_ENV",
    "CACHE_KEY_PREFIX",
    "CLI_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_FINDINGS_EXIT_CODES",
    "DEFAULT_PLUGIN_DIR",
    "DOWNLOAD_BASE_URL",
    "FINDINGS_EXIT_CODES_ENV",
    "GITHUB_API_URL",
    "GITHUB_OWNER",
    "GITHUB_REPO",
    "HASH_CHUNK_SIZE",
    "LATEST_VERSION",
    "MAX_ARCHIVE_ENTRIES",
    "MAX_ARCHIVE_TOTAL_BYTES",
    "MAX_COMPRESSION_RATIO",
    "PLUGIN_DIR_ENV",
    "RUNNER_OS_ENV",
    "STATE_CACHE_MATCHED_KEY",
    "STATE_CACHE_PATHS",
    "STATE_CACHE_PRIMARY_KEY",
    "TOOL_CACHE_ENV",
    "TOOL_NAME",
    "USER_AGENT",
    "WRAPPED_BINARY_NAME",
]
