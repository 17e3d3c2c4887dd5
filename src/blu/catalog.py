# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Indexed view over the package update feed."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import NAME_KEY, SOURCES_KEY, UPDATES_KEY
from .errors import FeedIOError, FeedParseError, FeedSchemaError, UpdateNotFound
from .io import load_json
from .types import SourceDelta
from .utils import describe_entry, expect_list, expect_mapping, expect_string

LOGGER = logging.getLogger(__name__)


class UpdateRecord(BaseModel):
    """Source deltas published for a single package."""

    model_config = ConfigDict(frozen=True)

    name: str
    sources: tuple[dict[str, Any], ...] = Field(default_factory=tuple)


class UpdateCatalog:
    """Read-only lookup of update records keyed by package name."""

    def __init__(self, records: Mapping[str, UpdateRecord], *, source: Path | None = None) -> None:
        self._records: Mapping[str, UpdateRecord] = MappingProxyType(dict(records))
        self.source = source

    @classmethod
    def build(cls, document: Any, *, source: Path | None = None) -> UpdateCatalog:
        """Index a parsed feed document.

        Entries naming the same package are folded into one record with their
        sources concatenated in feed order.

        Args:
            document: Parsed JSON feed containing an ``updates`` array.
            source: Feed path recorded for error messages.

        Returns:
            UpdateCatalog: Catalog indexed by package name.

        Raises:
            FeedSchemaError: If ``updates`` is missing or an entry is malformed.
        """

        context = "update feed"
        root = expect_mapping(document, key="<root>", context=context, error=FeedSchemaError, path=source)
        entries = expect_list(
            root.get(UPDATES_KEY),
            key=UPDATES_KEY,
            context=context,
            error=FeedSchemaError,
            path=source,
        )
        collected: dict[str, list[dict[str, Any]]] = {}
        for index, raw_entry in enumerate(entries):
            entry_context = f"{UPDATES_KEY}[{index}]"
            entry = expect_mapping(raw_entry, key=entry_context, context=context, error=FeedSchemaError, path=source)
            entry_context = f"{UPDATES_KEY}{describe_entry(entry, index)}"
            name = expect_string(
                entry.get(NAME_KEY),
                key=NAME_KEY,
                context=entry_context,
                error=FeedSchemaError,
                path=source,
            )
            collected.setdefault(name, []).extend(_entry_sources(entry, context=entry_context, source=source))
        records = {name: UpdateRecord(name=name, sources=tuple(sources)) for name, sources in collected.items()}
        LOGGER.debug("indexed %d update record(s) from %s", len(records), source or "<memory>")
        return cls(records, source=source)

    @classmethod
    def from_path(cls, path: Path) -> UpdateCatalog:
        """Load and index the feed stored at ``path``.

        Raises:
            FeedIOError: If the feed cannot be read.
            FeedParseError: If the feed is not valid JSON.
            FeedSchemaError: If the feed is structurally invalid.
        """

        document = load_json(path, io_error=FeedIOError, parse_error=FeedParseError)
        return cls.build(document, source=path)

    def get(self, name: str) -> tuple[SourceDelta, ...] | None:
        """Return the deltas published for ``name`` or ``None``."""

        record = self._records.get(name)
        return record.sources if record is not None else None

    def lookup(self, name: str) -> tuple[SourceDelta, ...]:
        """Return the deltas published for ``name``.

        Raises:
            UpdateNotFound: If the feed holds no record for ``name``.
        """

        return self.record(name).sources

    def record(self, name: str) -> UpdateRecord:
        """Return the full :class:`UpdateRecord` for ``name``.

        Raises:
            UpdateNotFound: If the feed holds no record for ``name``.
        """

        if (record := self._records.get(name)) is None:
            raise UpdateNotFound(f"no update published for '{name}'", path=self.source, name=name)
        return record

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._records))

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[UpdateRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


def _entry_sources(entry: Mapping[str, Any], *, context: str, source: Path | None) -> list[dict[str, Any]]:
    raw_sources = entry.get(SOURCES_KEY)
    if raw_sources is None:
        return []
    items = expect_list(raw_sources, key=SOURCES_KEY, context=context, error=FeedSchemaError, path=source)
    return [
        dict(
            expect_mapping(
                item,
                key=f"{SOURCES_KEY}[{index}]",
                context=context,
                error=FeedSchemaError,
                path=source,
            ),
        )
        for index, item in enumerate(items)
    ]


__all__ = ["UpdateCatalog", "UpdateRecord"]
