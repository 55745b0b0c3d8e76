# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrate a complete setup run."""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Final

from .acquisition import ToolAcquirer, binary_filename
from .actions import ActionsRuntime
from .config import SetupSettings
from .errors import InstallError
from .logging import info, ok, warn
from .platform import PlatformKey, current_platform
from .plugin_cache import BlobCache, DirectoryBlobCache, restore_plugin_cache
from .process_utils import SubprocessExecutionError, run_command
from .tool_cache import ToolCache
from .versions import GitHubReleaseClient, ReleaseMetadataClient, resolve_version
from .wrapper import install_wrapper

LOGGER = logging.getLogger(__name__)

MATCHERS_FILE: Final[str] = "matchers.json"
VERSION_OUTPUT: Final[str] = "tflint-version"
VERSION_TIMEOUT_SECONDS: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class SetupResult:
    """Outcome of :func:`run_setup`."""

    version: str
    cli_dir: Path
    wrapped: bool
    reported_version: str | None = None


def matchers_path() -> Path:
    """Return the on-disk location of the packaged problem matcher."""

    return Path(str(resources.files("setup_tflint.resources").joinpath(MATCHERS_FILE)))


def detect_installed_version(binary: Path) -> str | None:
    """Return the first line of ``tflint --version`` or ``None`` if it cannot run."""

    try:
        completed = run_command([str(binary), "--version"], timeout=VERSION_TIMEOUT_SECONDS)
    except (OSError, SubprocessExecutionError) as exc:
        LOGGER.debug("Unable to query %s --version: %s", binary, exc)
        return None
    first_line = next((line.strip() for line in completed.stdout.splitlines() if line.strip()), "")
    return first_line or None


def stage_for_wrapping(cached_dir: Path, runtime: ActionsRuntime) -> Path:
    """Copy a cached tool tree into a per-run directory that may be modified."""

    parent = runtime.environ.get("RUNNER_TEMP") or None
    try:
        if parent:
            Path(parent).mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix="setup-tflint-", dir=parent))
        target = staging / "bin"
        shutil.copytree(cached_dir, target)
    except OSError as exc:
        raise InstallError(f"Unable to stage {cached_dir} for the wrapper: {exc}") from exc
    return target


def run_setup(
    settings: SetupSettings,
    runtime: ActionsRuntime,
    *,
    client: ReleaseMetadataClient | None = None,
    acquirer: ToolAcquirer | None = None,
    blob_cache: BlobCache | None = None,
    platform: PlatformKey | None = None,
    workspace: Path | None = None,
) -> SetupResult:
    """Install tflint and expose it on ``PATH``.

    Steps run in order: plugin cache restore, version resolution, acquisition
    through the tool cache, optional wrapper installation on a per-run copy,
    ``PATH`` registration, problem matcher registration and the
    ``tflint-version`` output.

    Raises:
        SetupError: Any fatal failure. No output is published in that case.
        InstallError: If the wrapper is requested on a Windows runner.
    """

    if settings.cache:
        restore_plugin_cache(settings, runtime, blob_cache or DirectoryBlobCache(), root=workspace)

    version = resolve_version(
        settings.version,
        client or GitHubReleaseClient(token=settings.token),
    )
    host = platform or current_platform()
    if settings.wrapper and host.os == "windows":
        raise InstallError("The tflint wrapper is not supported on Windows runners; set wrapper to false")
    runtime.debug(f"Getting download URL for tflint version {version}: {host.os} {host.arch}")

    acquirer = acquirer or ToolAcquirer(ToolCache())
    cli_dir = acquirer.acquire(version, host, settings.checksums)
    info(f"tflint {version} is available at {cli_dir}")

    reported = detect_installed_version(cli_dir / binary_filename(host))
    if reported:
        runtime.debug(f"Installed tflint reports: {reported}")
    else:
        warn(f"Unable to run {cli_dir / binary_filename(host)} --version")

    if settings.wrapper:
        cli_dir = stage_for_wrapping(cli_dir, runtime)
        install_wrapper(cli_dir, runtime)
        info(f"Installed the tflint wrapper in {cli_dir}")

    runtime.add_path(cli_dir)
    runtime.add_matcher(matchers_path())
    runtime.set_output(VERSION_OUTPUT, version)
    ok(f"tflint {version} is ready")
    return SetupResult(version=version, cli_dir=cli_dir, wrapped=settings.wrapper, reported_version=reported)


__all__ = [
    "SetupResult",
    "detect_installed_version",
    "matchers_path",
    "run_setup",
    "stage_for_wrapping",
]
