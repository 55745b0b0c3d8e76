# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application whose ``--help`` lists options alphabetically."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click
import typer
from typer.core import TyperCommand, TyperGroup

F = TypeVar("F", bound=Callable[..., Any])


def option_sort_key(param: click.Parameter) -> str:
    """Return the long flag of ``param`` without dashes, e.g. ``wrapper`` for ``--wrapper/--no-wrapper``."""

    flags = [*param.opts, *param.secondary_opts]
    preferred = next((flag for flag in flags if flag.startswith("--")), flags[0] if flags else param.name or "")
    return preferred.lstrip("-").lower()


class AlphabeticalCommand(TyperCommand):
    """Command rendering positional arguments first, then options sorted by flag."""

    def format_options(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        params = self.get_params(ctx)
        arguments = [
            record
            for param in params
            if isinstance(param, click.Argument) and (record := param.get_help_record(ctx)) is not None
        ]
        options = sorted(
            (
                (option_sort_key(param), record)
                for param in params
                if not isinstance(param, click.Argument) and (record := param.get_help_record(ctx)) is not None
            ),
            key=lambda entry: entry[0],
        )
        if arguments:
            with formatter.section("Arguments"):
                formatter.write_dl(arguments)
        if options:
            with formatter.section("Options"):
                formatter.write_dl([record for _, record in options])


class AlphabeticalGroup(TyperGroup):
    command_class = AlphabeticalCommand


class AlphabeticalTyper(typer.Typer):
    """:class:`typer.Typer` registering :class:`AlphabeticalCommand` commands."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("cls", AlphabeticalGroup)
        super().__init__(**kwargs)

    def command(self, name: str | None = None, **kwargs: Any) -> Callable[[F], F]:
        kwargs.setdefault("cls", AlphabeticalCommand)
        return super().command(name, **kwargs)


def create_typer(**kwargs: Any) -> AlphabeticalTyper:
    return AlphabeticalTyper(**kwargs)


__all__ = ["AlphabeticalCommand", "AlphabeticalGroup", "AlphabeticalTyper", "create_typer", "option_sort_key"]
