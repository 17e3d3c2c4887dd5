# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Patch Flatpak-style manifest sources from a feed of package updates."""

from __future__ import annotations

from .catalog import UpdateCatalog, UpdateRecord
from .errors import (
    AmbiguousIdentifierError,
    BluError,
    ConfigError,
    FeedIOError,
    FeedParseError,
    FeedSchemaError,
    IdentifierNotFound,
    ManifestIOError,
    ManifestParseError,
    ManifestSchemaError,
    UpdateNotFound,
)
from .identifier import resolve_identifier
from .merge import SourceMerger
from .updater import ManifestChange, ModuleUpdater, UpdateResult
from .walker import ManifestWalker

__version__ = "0.1.0"

__all__ = [
    "AmbiguousIdentifierError",
    "BluError",
    "ConfigError",
    "FeedIOError",
    "FeedParseError",
    "FeedSchemaError",
    "IdentifierNotFound",
    "ManifestChange",
    "ManifestIOError",
    "ManifestParseError",
    "ManifestSchemaError",
    "ManifestWalker",
    "ModuleUpdater",
    "SourceMerger",
    "UpdateCatalog",
    "UpdateNotFound",
    "UpdateRecord",
    "UpdateResult",
    "__version__",
    "resolve_identifier",
]
