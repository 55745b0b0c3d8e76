# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runner integration: inputs, outputs, exported variables, path, state and annotations.

GitHub Actions exposes two channels for talking back to the runner. Modern
runners provide *file commands*: the paths named by ``GITHUB_OUTPUT``,
``GITHUB_ENV``, ``GITHUB_PATH`` and ``GITHUB_STATE`` accept appended records.
Older runners (and plain terminals) only understand *workflow commands* printed
to stdout as ``::name key=value::message``. :class:`ActionsRuntime` prefers the
former and falls back to the latter.
"""

from __future__ import annotations

import json
import os
import sys
import uuid
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Final, TextIO

OUTPUT_FILE_ENV: Final[str] = "GITHUB_OUTPUT"
ENV_FILE_ENV: Final[str] = "GITHUB_ENV"
PATH_FILE_ENV: Final[str] = "GITHUB_PATH"
STATE_FILE_ENV: Final[str] = "GITHUB_STATE"
INPUT_PREFIX: Final[str] = "INPUT_"
STATE_PREFIX: Final[str] = "STATE_"
_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "True", "TRUE"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"false", "False", "FALSE"})


def escape_data(value: str) -> str:
    """Escape ``value`` for use as a workflow command message."""

    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape ``value`` for use as a workflow command property."""

    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def to_command_value(value: object) -> str:
    """Return the string form the runner expects for ``value``."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value)


def input_env_name(name: str) -> str:
    """Return the environment variable carrying the action input ``name``."""

    return f"{INPUT_PREFIX}{name.replace(' ', '_').upper()}"


class ActionsRuntime:
    """Facade over the runner protocol used by setup and the wrapper shim."""

    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        *,
        stream: TextIO | None = None,
    ) -> None:
        self._environ: MutableMapping[str, str] = os.environ if environ is None else environ
        self._stream = stream

    @property
    def environ(self) -> Mapping[str, str]:
        """Return the environment mapping backing this runtime."""

        return self._environ

    # inputs and state -------------------------------------------------

    def get_input(self, name: str, *, required: bool = False) -> str:
        """Return the trimmed value of the action input ``name``.

        Raises:
            ValueError: If ``required`` is set and the input is empty.
        """

        value = self._environ.get(input_env_name(name), "").strip()
        if required and not value:
            raise ValueError(f"Input required and not supplied: {name}")
        return value

    def get_boolean_input(self, name: str, *, default: bool = False) -> bool:
        """Return the YAML 1.2 core-schema boolean value of input ``name``."""

        value = self.get_input(name)
        if not value:
            return default
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ValueError(
            f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
            "Support boolean input list: `true | True | TRUE | false | False | FALSE`",
        )

    def get_state(self, name: str) -> str:
        """Return state saved by an earlier step of the same action."""

        return self._environ.get(f"{STATE_PREFIX}{name}", "")

    def save_state(self, name: str, value: object) -> None:
        """Persist ``value`` under ``name`` for the post step."""

        rendered = to_command_value(value)
        if self._append_key_value(STATE_FILE_ENV, name, rendered):
            return
        self.issue("save-state", rendered, name=name)

    # outputs and environment -----------------------------------------

    def set_output(self, name: str, value: object) -> None:
        """Publish the step output ``name``."""

        rendered = to_command_value(value)
        if self._append_key_value(OUTPUT_FILE_ENV, name, rendered):
            return
        self.write_line("")
        self.issue("set-output", rendered, name=name)

    def export_variable(self, name: str, value: object) -> None:
        """Export ``name`` to this process and to every later step of the job."""

        rendered = to_command_value(value)
        self._environ[name] = rendered
        if self._append_key_value(ENV_FILE_ENV, name, rendered):
            return
        self.issue("set-env", rendered, name=name)

    def add_path(self, directory: Path | str) -> None:
        """Prepend ``directory`` to ``PATH`` for this process and later steps."""

        entry = str(directory)
        path_file = self._environ.get(PATH_FILE_ENV)
        if path_file:
            with Path(path_file).open("a", encoding="utf-8") as handle:
                handle.write(f"{entry}\n")
        else:
            self.issue("add-path", entry)
        current = self._environ.get("PATH", "")
        self._environ["PATH"] = f"{entry}{os.pathsep}{current}" if current else entry

    # annotations ------------------------------------------------------

    def debug(self, message: str) -> None:
        self.issue("debug", message)

    def notice(self, message: str) -> None:
        self.issue("notice", message)

    def warning(self, message: str) -> None:
        self.issue("warning", message)

    def error(self, message: str) -> None:
        self.issue("error", message)

    def add_matcher(self, matcher_path: Path) -> None:
        """Register a problem matcher definition with the runner."""

        self.write_line(f"##[add-matcher]{matcher_path}")

    def issue(self, command: str, message: str = "", **properties: str) -> None:
        """Print the workflow command ``command`` with ``properties``."""

        rendered = f"::{command}"
        if properties:
            props = ",".join(f"{key}={escape_property(value)}" for key, value in properties.items() if value)
            if props:
                rendered = f"{rendered} {props}"
        self.write_line(f"{rendered}::{escape_data(message)}")

    def write_line(self, text: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(f"{text}\n")
        stream.flush()

    def _append_key_value(self, env_name: str, key: str, value: str) -> bool:
        """Append a heredoc record to the file command named by ``env_name``."""

        target = self._environ.get(env_name)
        if not target:
            return False
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in key or delimiter in value:  # pragma: no cover - uuid collision
            raise ValueError("Unexpected input: value should not contain the delimiter")
        with Path(target).open("a", encoding="utf-8") as handle:
            handle.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
        return True


__all__ = [
    "ActionsRuntime",
    "escape_data",
    "escape_property",
    "input_env_name",
    "to_command_value",
]
