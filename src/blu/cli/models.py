# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the manifest update CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..constants import DEFAULT_CONFIG_NAME

CONFIG_OPTION = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Configuration file path.",
    ),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Show the manifest changes without writing them.",
    ),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Print per-manifest diagnostics."),
]

DEFAULT_CONFIG_PATH = Path(DEFAULT_CONFIG_NAME)


@dataclass(slots=True)
class UpdateOptions:
    """Normalised CLI inputs for the update workflow."""

    config: Path
    dry_run: bool
    use_emoji: bool
    debug: bool


def build_update_options(
    config: Path,
    dry_run: bool,
    emoji: bool,
    debug: bool,
) -> UpdateOptions:
    """Construct ``UpdateOptions`` from Typer parameters.

    Args:
        config: Configuration file supplied via CLI options.
        dry_run: Flag indicating whether manifests should be left untouched.
        emoji: Flag controlling emoji usage in CLI output.
        debug: Flag enabling diagnostic output.

    Returns:
        UpdateOptions: Structured CLI options for manifest updates.
    """

    return UpdateOptions(
        config=config.expanduser().resolve(),
        dry_run=dry_run,
        use_emoji=emoji,
        debug=debug,
    )


__all__ = [
    "CONFIG_OPTION",
    "DEBUG_OPTION",
    "DEFAULT_CONFIG_PATH",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "UpdateOptions",
    "build_update_options",
]
