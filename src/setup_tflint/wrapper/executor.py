# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the real tflint binary while teeing and capturing its output."""

from __future__ import annotations

import logging
import os

# Bandit: the wrapper executes the tflint binary recorded at install time with
# an argument list and never through a shell.
import subprocess  # nosec B404
import sys
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Protocol

from ..constants import CLI_PATH_ENV, DEFAULT_FINDINGS_EXIT_CODES, FINDINGS_EXIT_CODES_ENV, WRAPPED_BINARY_NAME
from ..errors import ConfigError, WrapperError
from .output import OutputListener

LOGGER = logging.getLogger(__name__)

READ_SIZE = 64 * 1024
# Shell convention for a child killed by signal N.
SIGNAL_EXIT_BASE = 128


class ByteSink(Protocol):
    """Writable binary stream receiving echoed output."""

    def write(self, chunk: bytes, /) -> object: ...

    def flush(self) -> object: ...


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Captured outcome of one tflint invocation."""

    exit_code: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class ExitCodePolicy:
    """Decide whether a tflint exit code fails the wrapping step.

    tflint exits ``0`` when clean, ``1`` on execution errors and ``2`` when it
    reports issues at or above ``--minimum-failure-severity``. Issues are
    surfaced through outputs and annotations, so only codes outside
    :attr:`findings_exit_codes` fail the step.
    """

    findings_exit_codes: frozenset[int] = field(default=DEFAULT_FINDINGS_EXIT_CODES)

    def is_success(self, exit_code: int) -> bool:
        return exit_code == 0 or exit_code in self.findings_exit_codes

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> ExitCodePolicy:
        """Build a policy from ``TFLINT_WRAPPER_FINDINGS_EXIT_CODES``.

        The variable holds comma separated integers. Empty or unset keeps the
        default.

        Raises:
            ConfigError: If an entry is not an integer.
        """

        raw = environ.get(FINDINGS_EXIT_CODES_ENV, "").strip()
        if not raw:
            return cls()
        codes: set[int] = set()
        for token in raw.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                codes.add(int(token))
            except ValueError as exc:
                raise ConfigError(
                    f"{FINDINGS_EXIT_CODES_ENV} must list integers separated by commas, got {raw!r}",
                ) from exc
        return cls(frozenset(codes))


def locate_real_binary(environ: Mapping[str, str]) -> Path:
    """Return the relocated tflint binary recorded in ``TFLINT_CLI_PATH``.

    ``PATH`` is never searched, so the shim cannot end up invoking itself.

    Raises:
        WrapperError: If the pointer is unset or names no executable file.
    """

    cli_dir = environ.get(CLI_PATH_ENV, "").strip()
    if not cli_dir:
        raise WrapperError(f"{CLI_PATH_ENV} is not set; the tflint wrapper was not installed by setup-tflint")
    binary = Path(cli_dir) / WRAPPED_BINARY_NAME
    if not binary.is_file():
        raise WrapperError(f"Unable to locate the tflint binary at {binary}")
    if not os.access(binary, os.X_OK):
        raise WrapperError(f"The tflint binary at {binary} is not executable")
    return binary


def execute(
    binary: Path,
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    stdout_sink: ByteSink | None = None,
    stderr_sink: ByteSink | None = None,
) -> ExecutionResult:
    """Run ``binary`` with ``args`` echoing output live while recording it.

    Both pipes are drained concurrently so neither stream can stall the child
    once its pipe buffer fills.

    Raises:
        WrapperError: If the binary cannot be started.
    """

    command = [str(binary), *args]
    LOGGER.debug("Running %s", command)
    stdout_capture = OutputListener()
    stderr_capture = OutputListener()
    try:
        # Bandit: argument vector with shell disabled.
        process = subprocess.Popen(  # nosec B603
            command,
            stdin=None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=dict(env) if env is not None else None,
        )
    except OSError as exc:
        raise WrapperError(f"Unable to run {binary}: {exc}") from exc

    assert process.stdout is not None and process.stderr is not None  # nosec B101 - PIPE requested above
    pumps = [
        threading.Thread(
            target=_pump,
            args=(process.stdout, (stdout_capture.listener, _echo_to(stdout_sink or _binary_stream(sys.stdout)))),
            daemon=True,
        ),
        threading.Thread(
            target=_pump,
            args=(process.stderr, (stderr_capture.listener, _echo_to(stderr_sink or _binary_stream(sys.stderr)))),
            daemon=True,
        ),
    ]
    for pump in pumps:
        pump.start()
    exit_code = process.wait()
    for pump in pumps:
        pump.join()
    if exit_code < 0:
        LOGGER.debug("%s was terminated by signal %d", binary, -exit_code)
        exit_code = SIGNAL_EXIT_BASE - exit_code
    return ExecutionResult(exit_code=exit_code, stdout=stdout_capture.data, stderr=stderr_capture.data)


def _pump(source: IO[bytes], listeners: Iterable[Callable[[bytes], None]]) -> None:
    targets = tuple(listeners)
    with source:
        reader = getattr(source, "read1", source.read)
        for chunk in iter(lambda: reader(READ_SIZE), b""):
            for target in targets:
                target(chunk)


def _echo_to(sink: ByteSink) -> Callable[[bytes], None]:
    def _write(chunk: bytes) -> None:
        sink.write(chunk)
        sink.flush()

    return _write


def _binary_stream(stream: IO[str]) -> ByteSink:
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        return buffer
    return _TextSink(stream)


class _TextSink:
    """Adapter writing decoded bytes to a text-only stream such as a test capture."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def write(self, chunk: bytes) -> int:
        return self._stream.write(chunk.decode("utf-8", errors="replace"))

    def flush(self) -> None:
        self._stream.flush()


__all__ = ["ByteSink", "ExecutionResult", "ExitCodePolicy", "execute", "locate_real_binary"]
