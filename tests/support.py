# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers shared by the test modules."""

from __future__ import annotations

import io
from pathlib import Path

from setup_tflint.actions import ActionsRuntime


class RecordingRuntime(ActionsRuntime):
    """Runtime backed by a private environment and in-memory stdout."""

    def __init__(self, environ: dict[str, str], stream: io.StringIO) -> None:
        super().__init__(environ, stream=stream)
        self.buffer = stream

    @property
    def printed(self) -> str:
        return self.buffer.getvalue()

    def file_command(self, env_name: str) -> str:
        return Path(self.environ[env_name]).read_text(encoding="utf-8")


def parse_file_command(text: str) -> dict[str, str]:
    """Decode heredoc records written to a runner file command."""

    values: dict[str, str] = {}
    lines = iter(text.splitlines())
    for line in lines:
        key, _, delimiter = line.partition("<<")
        collected: list[str] = []
        for value_line in lines:
            if value_line == delimiter:
                break
            collected.append(value_line)
        values[key] = "\n".join(collected)
    return values
