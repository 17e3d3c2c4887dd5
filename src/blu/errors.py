# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exception hierarchy raised while loading feeds and patching manifests."""

from __future__ import annotations

from pathlib import Path


class BluError(RuntimeError):
    """Base class for every unrecoverable failure reported by blu."""

    kind = "error"

    def __init__(self, message: str, *, path: Path | None = None, name: str | None = None) -> None:
        """Create the error with an optional offending ``path`` or ``name``.

        Args:
            message: Human-readable description of the failure.
            path: File that triggered the failure, when one applies.
            name: Package or module name that triggered the failure.
        """

        super().__init__(message)
        self.path = path
        self.name = name

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{self.path}: {message}"
        return message


class ConfigError(BluError):
    """Raised when the configuration file is missing or invalid."""

    kind = "config"


class FeedIOError(BluError):
    """Raised when the update feed cannot be read."""

    kind = "feed-io"


class FeedParseError(BluError):
    """Raised when the update feed is not valid JSON."""

    kind = "feed-parse"


class FeedSchemaError(BluError):
    """Raised when the update feed lacks required fields."""

    kind = "feed-schema"


class ManifestIOError(BluError):
    """Raised when a manifest cannot be read or written."""

    kind = "manifest-io"


class ManifestParseError(BluError):
    """Raised when a manifest is not valid JSON."""

    kind = "manifest-parse"


class ManifestSchemaError(BluError):
    """Raised when a manifest lacks its ``modules`` array or module fields."""

    kind = "manifest-schema"


class IdentifierNotFound(BluError):
    """Raised when a source delta carries no usable ``__exact`` key."""

    kind = "identifier"


class AmbiguousIdentifierError(IdentifierNotFound):
    """Raised when a source delta carries more than one ``__exact`` key."""


class UpdateNotFound(BluError):
    """Raised when a lookup names a package absent from the update feed."""

    kind = "update-not-found"


__all__ = (
    "AmbiguousIdentifierError",
    "BluError",
    "ConfigError",
    "FeedIOError",
    "FeedParseError",
    "FeedSchemaError",
    "IdentifierNotFound",
    "ManifestIOError",
    "ManifestParseError",
    "ManifestSchemaError",
    "UpdateNotFound",
)
