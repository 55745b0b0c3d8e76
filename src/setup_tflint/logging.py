# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console status lines and debug logging for setup-tflint."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cache
from typing import Final

from rich.console import Console
from rich.text import Text

PACKAGE_LOGGER: Final[str] = "setup_tflint"
RUNNER_DEBUG_ENV: Final[str] = "RUNNER_DEBUG"

# kind -> (glyph, rich style)
_KINDS: Final[dict[str, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


@dataclass(frozen=True, slots=True)
class ConsoleStyle:
    """Rendering preferences for status lines."""

    color: bool
    emoji: bool


def supports_color() -> bool:
    """Return whether status lines should be coloured.

    Hosted runners render ANSI colour although their stdout is not a TTY.
    ``NO_COLOR`` always wins.
    """

    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("GITHUB_ACTIONS") == "true":
        return True
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def console_for(style: ConsoleStyle) -> Console:
    """Return the shared console rendering with ``style``."""

    return Console(
        color_system="standard" if style.color else None,
        force_terminal=style.color,
        no_color=not style.color,
        emoji=style.emoji,
        soft_wrap=True,
        highlight=False,
    )


def _emit(kind: str, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    glyph, colour = _KINDS[kind]
    style = ConsoleStyle(color=supports_color() if use_color is None else use_color, emoji=use_emoji)
    line = Text(f"{glyph if use_emoji else ''}{msg}")
    if style.color:
        line.stylize(colour)
    console_for(style).print(line)


def info(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    _emit("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    _emit("ok", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    _emit("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    _emit("fail", msg, use_emoji=use_emoji, use_color=use_color)


def enable_debug_logging(environ: Mapping[str, str] | None = None) -> bool:
    """Stream ``setup_tflint`` debug records to stderr when ``RUNNER_DEBUG`` is ``1``.

    Returns:
        bool: ``True`` when debug logging is active.
    """

    env = os.environ if environ is None else environ
    if env.get(RUNNER_DEBUG_ENV) != "1":
        return False
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not getattr(logger, "_setup_tflint_debug", False):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        setattr(logger, "_setup_tflint_debug", True)
    return True


__all__ = [
    "ConsoleStyle",
    "console_for",
    "enable_debug_logging",
    "fail",
    "info",
    "ok",
    "supports_color",
    "warn",
]
