# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install the output-capturing wrapper in front of an extracted tflint."""

from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from string import Template
from typing import Final

from ..actions import ActionsRuntime
from ..archive import ensure_executable
from ..constants import CLI_PATH_ENV, TOOL_NAME, WRAPPED_BINARY_NAME
from ..errors import InstallError, RelocationError

LOGGER = logging.getLogger(__name__)

SHIM_TEMPLATE: Final[str] = "shim.py.tmpl"
SHIM_MODULE: Final[str] = "setup_tflint.wrapper.shim"


@dataclass(frozen=True, slots=True)
class WrapperState:
    """Paths left behind by a successful wrapper installation."""

    cli_dir: Path
    shim: Path
    real_binary: Path


def render_shim(python: str | None = None) -> str:
    """Return the launcher script executed as ``tflint``.

    Args:
        python: Interpreter for the shebang; defaults to the running one.
    """

    template = resources.files("setup_tflint.resources").joinpath(SHIM_TEMPLATE).read_text(encoding="utf-8")
    return Template(template).substitute(
        python=python or sys.executable,
        module=SHIM_MODULE,
        pointer_env=CLI_PATH_ENV,
    )


def install_wrapper(cli_dir: Path, runtime: ActionsRuntime, *, python: str | None = None) -> WrapperState:
    """Move ``tflint`` aside as ``tflint-bin`` and put the shim in its place.

    ``TFLINT_CLI_PATH`` is exported only after the shim is in place, so a
    failed installation never leaves the pointer behind.

    Raises:
        RelocationError: If the real binary cannot be moved.
        InstallError: If the shim cannot be written. The real binary is moved
            back first.
    """

    source = cli_dir / TOOL_NAME
    target = cli_dir / WRAPPED_BINARY_NAME
    LOGGER.debug("Moving %s to %s", source, target)
    try:
        shutil.move(source, target)
    except OSError as exc:
        raise RelocationError(f"Unable to move {source} to {target}: {exc}") from exc

    try:
        source.write_text(render_shim(python), encoding="utf-8")
        ensure_executable(source)
    except OSError as exc:
        _restore_binary(source, target)
        raise InstallError(f"Unable to install the tflint wrapper at {source}: {exc}") from exc

    runtime.export_variable(CLI_PATH_ENV, str(cli_dir))
    LOGGER.debug("Installed tflint wrapper in %s", cli_dir)
    return WrapperState(cli_dir=cli_dir, shim=source, real_binary=target)


def _restore_binary(shim: Path, real_binary: Path) -> None:
    shim.unlink(missing_ok=True)
    try:
        shutil.move(real_binary, shim)
    except OSError:
        LOGGER.exception("Unable to restore %s after a failed wrapper install", real_binary)


__all__ = ["SHIM_MODULE", "WrapperState", "install_wrapper", "render_shim"]
