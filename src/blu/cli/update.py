# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI workflows for patching manifests and inspecting the update feed."""

from __future__ import annotations

import difflib
import json
from pathlib import Path

import typer
from rich.text import Text

from ..catalog import UpdateCatalog
from ..config import BluConfig, load_config
from ..errors import BluError
from ..logging import CLILogger
from ..updater import ManifestChange, ModuleUpdater, UpdateResult
from ..walker import ManifestWalker
from .models import UpdateOptions

_DIFF_STYLES = {"+": "green", "-": "red", "@": "cyan"}


def run_update(options: UpdateOptions, logger: CLILogger) -> None:
    """Run the manifest update workflow for the provided CLI options.

    Args:
        options: Parsed CLI options controlling the update.
        logger: Status output adapter.

    Raises:
        typer.Exit: Always; the exit code reflects success or failure.
    """

    try:
        config = load_config(options.config)
        root = config.manifest_root()
        catalog = _load_catalog(config, logger)
        walker = ManifestWalker(root=root, exclude=config.update_file())
        updater = ModuleUpdater(indent=config.source.indent, dry_run=options.dry_run)
        result = updater.run(catalog, walker)
    except BluError as exc:
        _report_failure(exc, logger)
        raise typer.Exit(code=1) from exc
    _emit_update_summary(result, root=root, logger=logger)


def show_update(options: UpdateOptions, name: str, logger: CLILogger) -> None:
    """Print the source deltas the feed publishes for ``name`` as JSON.

    Raises:
        typer.Exit: With code 1 when configuration, feed or lookup fails.
    """

    try:
        config = load_config(options.config)
        catalog = _load_catalog(config, logger)
        deltas = catalog.lookup(name)
    except BluError as exc:
        _report_failure(exc, logger)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(list(deltas), indent=2, ensure_ascii=False))


def _load_catalog(config: BluConfig, logger: CLILogger) -> UpdateCatalog:
    update_file = config.update_file()
    catalog = UpdateCatalog.from_path(update_file)
    logger.debug(f"feed={update_file} packages={len(catalog)}")
    return catalog


def _report_failure(exc: BluError, logger: CLILogger) -> None:
    logger.fail(f"{exc.kind}: {exc}")


def _emit_update_summary(result: UpdateResult, *, root: Path, logger: CLILogger) -> None:
    """Render a summary of the update run and exit.

    Args:
        result: Aggregated outcome from :class:`ModuleUpdater`.
        root: Manifest tree root used to shorten displayed paths.
        logger: Status output adapter.

    Raises:
        typer.Exit: With code 0 once the summary has been printed.
    """

    logger.debug(f"root={root} manifests={len(result.scanned)}")
    for change in result.changes:
        logger.debug(
            f"manifest={_format_relative(change.path, root)} stanzas={change.merged_stanzas} "
            f"modules={','.join(change.modules)}",
        )

    if not result.scanned:
        logger.warn(f"No manifests found under {root}.")
        raise typer.Exit(code=0)

    if not result.changes:
        logger.ok(f"All {len(result.scanned)} manifest(s) already up to date.")
        raise typer.Exit(code=0)

    if result.dry_run:
        logger.info("DRY RUN: no manifest was written.")
        for change in result.changes:
            _render_diff(change, root=root, logger=logger)
        logger.ok(
            f"Planned updates for {len(result.changes)} manifest(s) ({result.merged_stanzas} source stanza(s)).",
        )
        raise typer.Exit(code=0)

    logger.ok(f"Updated {len(result.written)} manifest(s) ({result.merged_stanzas} source stanza(s)).")
    raise typer.Exit(code=0)


def _render_diff(change: ManifestChange, *, root: Path, logger: CLILogger) -> None:
    label = _format_relative(change.path, root)
    logger.section(f"{label} ({change.merged_stanzas} source stanza(s))")
    diff = difflib.unified_diff(
        change.original_text.splitlines(keepends=True),
        change.updated_text.splitlines(keepends=True),
        fromfile=f"a/{label}",
        tofile=f"b/{label}",
    )
    console = logger.console
    for line in diff:
        text = Text(line.rstrip("\n"))
        if (style := _DIFF_STYLES.get(line[:1])) is not None:
            text.stylize(style)
        console.print(text)


def _format_relative(path: Path, root: Path) -> str:
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(relative) or "."


__all__ = ["run_update", "show_update"]
