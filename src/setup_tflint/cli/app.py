# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point of setup-tflint."""

from __future__ import annotations

import typer

from ..actions import ActionsRuntime
from ..config import load_settings
from ..errors import SetupError
from ..logging import enable_debug_logging, fail
from ..plugin_cache import DirectoryBlobCache, save_plugin_cache
from ..setup import run_setup
from .typer_ext import create_typer

app = create_typer(
    name="setup-tflint",
    help="Install tflint on a CI runner and optionally wrap it to capture its output.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode=None,
)


@app.command("setup", help="Download, verify and install tflint, then add it to PATH.")
def setup_command(
    version: str | None = typer.Option(
        None,
        "--version",
        help="tflint release tag or 'latest'. Defaults to the tflint_version input.",
    ),
    checksums: str | None = typer.Option(
        None,
        "--checksums",
        help="Accepted SHA-256 digests of the archive, newline or comma separated.",
    ),
    wrapper: bool | None = typer.Option(
        None,
        "--wrapper/--no-wrapper",
        help="Install the wrapper that publishes stdout, stderr and exitcode outputs.",
    ),
    github_token: str | None = typer.Option(
        None,
        "--github-token",
        help="Token used for the GitHub releases API.",
    ),
    cache: bool | None = typer.Option(
        None,
        "--cache/--no-cache",
        help="Restore the tflint plugin directory keyed by the config files.",
    ),
    config_path: str | None = typer.Option(
        None,
        "--config-path",
        help="Glob of tflint config files hashed into the plugin cache key.",
    ),
    plugin_dir: str | None = typer.Option(
        None,
        "--plugin-dir",
        help="Plugin directory to cache.",
    ),
) -> None:
    """Run the setup pipeline and publish the ``tflint-version`` output."""

    runtime = ActionsRuntime()
    enable_debug_logging(runtime.environ)
    try:
        settings = load_settings(
            runtime,
            version=version,
            checksums=checksums,
            wrapper=wrapper,
            github_token=github_token,
            cache=cache,
            config_path=config_path,
            plugin_dir=plugin_dir,
        )
        run_setup(settings, runtime)
    except (SetupError, OSError) as exc:
        runtime.error(str(exc))
        fail(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("post", help="Save the tflint plugin cache after the job has run.")
def post_command(
    cache: bool | None = typer.Option(
        None,
        "--cache/--no-cache",
        help="Whether plugin caching was enabled. Defaults to the cache input.",
    ),
) -> None:
    """Save the plugin directory recorded by ``setup``."""

    runtime = ActionsRuntime()
    enable_debug_logging(runtime.environ)
    try:
        enabled = cache if cache is not None else runtime.get_boolean_input("cache")
    except ValueError as exc:
        runtime.error(str(exc))
        fail(str(exc))
        raise typer.Exit(code=1) from exc
    save_plugin_cache(runtime, DirectoryBlobCache(), enabled=enabled)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
