# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised while provisioning and wrapping tflint."""

from __future__ import annotations

from collections.abc import Sequence


class SetupError(RuntimeError):
    """Base class for failures that abort a setup run."""


class ConfigError(SetupError):
    """Raised when configuration input is invalid."""


class UpstreamMetadataError(SetupError):
    """Raised when the release metadata service cannot supply a release tag."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ChecksumMismatch(SetupError):
    """Raised when a downloaded archive matches none of the expected digests."""

    def __init__(self, computed: str, expected: Sequence[str]) -> None:
        super().__init__(
            f"Checksum mismatch: computed {computed} but expected one of {', '.join(expected)}",
        )
        self.computed = computed
        self.expected = tuple(expected)


class ExtractionError(SetupError):
    """Raised when a download or extraction produced no usable path."""


class RelocationError(SetupError):
    """Raised when the real binary cannot be moved aside for the wrapper."""


class InstallError(SetupError):
    """Raised when the wrapper shim cannot be installed."""


class WrapperError(SetupError):
    """Raised by the shim when the real binary cannot be located."""


class PluginCacheError(SetupError):
    """Raised when the plugin blob cache cannot service a request."""


class ReserveCacheError(PluginCacheError):
    """Raised when a cache key is already reserved by another run."""


__all__ = [
    "ChecksumMismatch",
    "ConfigError",
    "ExtractionError",
    "InstallError",
    "PluginCacheError",
    "RelocationError",
    "ReserveCacheError",
    "SetupError",
    "UpstreamMetadataError",
    "WrapperError",
]
