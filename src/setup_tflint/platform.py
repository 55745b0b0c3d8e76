# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalise host platform identifiers into tflint release naming."""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass
from typing import Final

# Keys cover Node-style (``win32``, ``x64``) and Python ``platform`` identifiers.
# Values are never keys so mapping twice is a no-op.
OS_ALIASES: Final[dict[str, str]] = {
    "win32": "windows",
    "cygwin": "windows",
    "Windows": "windows",
    "Linux": "linux",
    "Darwin": "darwin",
    "FreeBSD": "freebsd",
    "OpenBSD": "openbsd",
    "NetBSD": "netbsd",
}

ARCH_ALIASES: Final[dict[str, str]] = {
    "x32": "386",
    "x64": "amd64",
    "x86_64": "amd64",
    "AMD64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "ARM64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
}


@dataclass(frozen=True, slots=True)
class PlatformKey:
    """Operating system and architecture in tflint's release naming."""

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}_{self.arch}"


def map_os(raw: str) -> str:
    """Return the release OS name for ``raw``; unknown values pass through."""

    return OS_ALIASES.get(raw, raw)


def map_arch(raw: str) -> str:
    """Return the release architecture name for ``raw``; unknown values pass through."""

    return ARCH_ALIASES.get(raw, raw)


def platform_key(raw_os: str, raw_arch: str) -> PlatformKey:
    return PlatformKey(os=map_os(raw_os), arch=map_arch(raw_arch))


def current_platform() -> PlatformKey:
    """Return the :class:`PlatformKey` of the running host."""

    return platform_key(_platform.system(), _platform.machine())


__all__ = [
    "ARCH_ALIASES",
    "OS_ALIASES",
    "PlatformKey",
    "current_platform",
    "map_arch",
    "map_os",
    "platform_key",
]
