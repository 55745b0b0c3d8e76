# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run short helper commands such as ``tflint --version``."""

from __future__ import annotations

import shutil

# Bandit: only argument vectors assembled by setup-tflint are executed and the
# shell is never involved.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final

TIMEOUT_EXIT_CODE: Final[int] = 124


class SubprocessExecutionError(RuntimeError):
    """A checked command finished with a non-zero status."""

    def __init__(self, result: subprocess.CompletedProcess[str]) -> None:
        program = Path(str(result.args[0])).name if result.args else "<unknown>"
        detail = (result.stderr or "").strip() or "<no stderr>"
        super().__init__(f"{program} exited with status {result.returncode}: {detail}")
        self.result = result

    @property
    def returncode(self) -> int:
        return self.result.returncode

    @property
    def stderr(self) -> str:
        return self.result.stderr or ""


def which_or_path(program: str) -> str:
    """Return ``program`` when absolute, otherwise its ``PATH`` location.

    Raises:
        FileNotFoundError: If a bare program name is not on ``PATH``.
    """

    if Path(program).is_absolute():
        return program
    located = shutil.which(program)
    if located is None:
        raise FileNotFoundError(f"Executable '{program}' was not found on PATH")
    return located


def run_command(
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run ``args`` with stdin closed and stdout/stderr captured as text.

    Hitting ``timeout`` yields a result with status ``124`` instead of raising.

    Raises:
        SubprocessExecutionError: If ``check`` is set and the status is non-zero.
        FileNotFoundError: If the program cannot be found.
    """

    if not args:
        raise ValueError("run_command needs a program to execute")
    command = [which_or_path(args[0]), *args[1:]]
    try:
        # Bandit: argument vector, no shell.
        result = subprocess.run(  # nosec B603
            command,
            env=None if env is None else dict(env),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        result = subprocess.CompletedProcess(
            command,
            TIMEOUT_EXIT_CODE,
            stdout="",
            stderr=f"timed out after {timeout}s",
        )
    if check and result.returncode != 0:
        raise SubprocessExecutionError(result)
    return result


__all__ = ["SubprocessExecutionError", "TIMEOUT_EXIT_CODE", "run_command", "which_or_path"]
