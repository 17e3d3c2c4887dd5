# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Manifest update orchestration."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .catalog import UpdateCatalog
from .constants import DEFAULT_JSON_INDENT, MODULES_KEY, NAME_KEY, SOURCES_KEY
from .errors import ManifestIOError, ManifestParseError, ManifestSchemaError
from .identifier import resolve_identifier
from .io import atomic_write_text, dump_json, parse_json, read_text
from .merge import SourceMerger
from .utils import describe_entry, expect_list, expect_mapping, expect_string

LOGGER = logging.getLogger(__name__)


class ManifestChange(BaseModel):
    """Manifest whose merged content differs from the document on disk."""

    model_config = ConfigDict(validate_assignment=True)

    path: Path
    original_text: str
    updated_text: str
    merged_stanzas: int = 0
    modules: list[str] = Field(default_factory=list)


class UpdateResult(BaseModel):
    """Aggregated outcome of a manifest update run."""

    model_config = ConfigDict(validate_assignment=True)

    scanned: list[Path] = Field(default_factory=list)
    changes: list[ManifestChange] = Field(default_factory=list)
    written: list[Path] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def merged_stanzas(self) -> int:
        return sum(change.merged_stanzas for change in self.changes)


class ModuleUpdater:
    """Merge catalogued source deltas into manifest modules.

    A run is split into two phases. :meth:`plan` loads and merges every
    manifest in memory, and :meth:`commit` persists the changed ones. Any
    parse or schema failure during planning aborts before a single file is
    written.
    """

    def __init__(
        self,
        *,
        merger: SourceMerger | None = None,
        indent: int = DEFAULT_JSON_INDENT,
        dry_run: bool = False,
    ) -> None:
        self._merger = merger or SourceMerger()
        self._indent = indent
        self._dry_run = dry_run

    def run(self, catalog: UpdateCatalog, manifest_paths: Iterable[Path]) -> UpdateResult:
        """Update every manifest in ``manifest_paths`` from ``catalog``.

        Args:
            catalog: Indexed update feed.
            manifest_paths: Manifest files to process.

        Returns:
            UpdateResult: Scanned paths, computed changes and written files.

        Raises:
            ManifestIOError: If a manifest cannot be read or written.
            ManifestParseError: If a manifest is not valid JSON.
            ManifestSchemaError: If a manifest or module lacks required fields.
            IdentifierNotFound: If a catalogued delta has no usable identifier key.
        """

        scanned = list(manifest_paths)
        result = UpdateResult(scanned=scanned, changes=self.plan(catalog, scanned), dry_run=self._dry_run)
        if not self._dry_run:
            result.written = self.commit(result.changes)
        return result

    def plan(self, catalog: UpdateCatalog, manifest_paths: Iterable[Path]) -> list[ManifestChange]:
        """Return the in-memory changes for ``manifest_paths`` without writing."""

        return [
            change for path in manifest_paths if (change := self.process_manifest(catalog, path)) is not None
        ]

    def commit(self, changes: Sequence[ManifestChange]) -> list[Path]:
        """Atomically write each change back to its manifest path."""

        written: list[Path] = []
        for change in changes:
            atomic_write_text(change.path, change.updated_text, error=ManifestIOError)
            LOGGER.debug("wrote %s (%d stanza(s) merged)", change.path, change.merged_stanzas)
            written.append(change.path)
        return written

    def process_manifest(self, catalog: UpdateCatalog, path: Path) -> ManifestChange | None:
        """Load ``path``, merge catalogued deltas and describe the change.

        Returns:
            ManifestChange | None: The change, or ``None`` when the merged
            document is identical to the one on disk.
        """

        text = read_text(path, error=ManifestIOError)
        document = parse_json(text, path=path, error=ManifestParseError)
        pristine = copy.deepcopy(document)
        touched: list[str] = []
        merged = self.update_document(catalog, document, path=path, touched=touched)
        if merged == 0:
            return None
        updated_text = dump_json(document, indent=self._indent)
        if updated_text == dump_json(pristine, indent=self._indent):
            LOGGER.debug("%s already up to date", path)
            return None
        return ManifestChange(
            path=path,
            original_text=text,
            updated_text=updated_text,
            merged_stanzas=merged,
            modules=touched,
        )

    def update_document(
        self,
        catalog: UpdateCatalog,
        document: Any,
        *,
        path: Path | None = None,
        touched: list[str] | None = None,
    ) -> int:
        """Merge catalogued deltas into a parsed manifest ``document`` in place.

        Args:
            catalog: Indexed update feed.
            document: Parsed manifest exposing a ``modules`` array.
            path: Manifest path attached to schema errors.
            touched: Optional list collecting names of modules that matched.

        Returns:
            int: Number of source stanzas merged.

        Raises:
            ManifestSchemaError: If ``modules``, ``name`` or ``sources`` are missing.
        """

        manifest = expect_mapping(document, key="<root>", context="manifest", error=ManifestSchemaError, path=path)
        modules = expect_list(
            manifest.get(MODULES_KEY),
            key=MODULES_KEY,
            context="manifest",
            error=ManifestSchemaError,
            path=path,
        )
        return self._update_modules(
            catalog,
            modules,
            context=MODULES_KEY,
            path=path,
            touched=touched if touched is not None else [],
        )

    def _update_modules(
        self,
        catalog: UpdateCatalog,
        modules: list[Any],
        *,
        context: str,
        path: Path | None,
        touched: list[str],
    ) -> int:
        merged = 0
        for index, raw_module in enumerate(modules):
            module = expect_mapping(
                raw_module,
                key=f"{context}[{index}]",
                context="manifest",
                error=ManifestSchemaError,
                path=path,
            )
            module_context = f"{context}{describe_entry(module, index)}"
            name = expect_string(
                module.get(NAME_KEY),
                key=NAME_KEY,
                context=module_context,
                error=ManifestSchemaError,
                path=path,
            )
            sources = expect_list(
                module.get(SOURCES_KEY),
                key=SOURCES_KEY,
                context=module_context,
                error=ManifestSchemaError,
                path=path,
            )
            if (deltas := catalog.get(name)) is not None:
                count = self._merge_module(name, sources, deltas)
                if count:
                    touched.append(name)
                    merged += count
            if (nested := module.get(MODULES_KEY)) is not None:
                children = expect_list(
                    nested,
                    key=MODULES_KEY,
                    context=module_context,
                    error=ManifestSchemaError,
                    path=path,
                )
                merged += self._update_modules(
                    catalog,
                    children,
                    context=f"{module_context}.{MODULES_KEY}",
                    path=path,
                    touched=touched,
                )
        return merged

    def _merge_module(self, name: str, sources: list[Any], deltas: Iterable[Any]) -> int:
        merged = 0
        for delta in deltas:
            identifier_key = resolve_identifier(delta, name=name)
            count = self._merger.merge_all(sources, delta, identifier_key)
            LOGGER.debug("module %s: %s matched %d stanza(s)", name, identifier_key, count)
            merged += count
        return merged


__all__ = ["ManifestChange", "ModuleUpdater", "UpdateResult"]
