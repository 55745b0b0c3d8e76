# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Entry point of the installed ``tflint`` wrapper."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from ..actions import ActionsRuntime
from ..errors import ConfigError, WrapperError
from ..logging import enable_debug_logging
from .executor import ByteSink, ExitCodePolicy, execute, locate_real_binary


def main(
    argv: Sequence[str] | None = None,
    *,
    runtime: ActionsRuntime | None = None,
    stdout_sink: ByteSink | None = None,
    stderr_sink: ByteSink | None = None,
) -> int:
    """Run tflint with ``argv`` and publish ``stdout``, ``stderr`` and ``exitcode``.

    Returns:
        int: ``0`` when tflint succeeded or only reported findings, otherwise
        tflint's own exit code (``128 + N`` when it was killed by signal N and
        ``1`` when it could not be started).
    """

    runtime = runtime or ActionsRuntime()
    enable_debug_logging(runtime.environ)
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        binary = locate_real_binary(runtime.environ)
        policy = ExitCodePolicy.from_env(runtime.environ)
        runtime.debug(f"tflint: {binary}")
        runtime.debug(f"arguments: {' '.join(args)}")
        result = execute(
            binary,
            args,
            env=runtime.environ,
            stdout_sink=stdout_sink,
            stderr_sink=stderr_sink,
        )
    except (ConfigError, WrapperError) as exc:
        runtime.error(str(exc))
        return 1

    runtime.debug(f"stdout: {result.stdout_text}")
    runtime.debug(f"stderr: {result.stderr_text}")
    runtime.debug(f"exitcode: {result.exit_code}")

    runtime.set_output("stdout", result.stdout_text)
    runtime.set_output("stderr", result.stderr_text)
    runtime.set_output("exitcode", str(result.exit_code))

    if policy.is_success(result.exit_code):
        return 0
    runtime.error(f"TFLint exited with code {result.exit_code}.")
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
