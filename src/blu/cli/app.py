# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from ..logging import CLILogger
from .models import (
    CONFIG_OPTION,
    DEBUG_OPTION,
    DEFAULT_CONFIG_PATH,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    UpdateOptions,
    build_update_options,
)
from .update import run_update, show_update

app = typer.Typer(
    name="blu",
    help="Update Flatpak manifest sources from a package update feed.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"blu {__version__}")
        raise typer.Exit(code=0)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: CONFIG_OPTION = DEFAULT_CONFIG_PATH,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Merge the update feed into every manifest below the configured root."""

    options = build_update_options(config, dry_run, emoji, debug)
    ctx.obj = options
    if ctx.invoked_subcommand:
        return
    run_update(options, _logger_for(options))


@app.command("show")
def show(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Package name to look up in the update feed.")],
) -> None:
    """Print the source updates published for NAME."""

    options: UpdateOptions = ctx.obj
    show_update(options, name, _logger_for(options))


def _logger_for(options: UpdateOptions) -> CLILogger:
    return CLILogger(use_emoji=options.use_emoji, debug_enabled=options.debug)


__all__ = ["app"]
