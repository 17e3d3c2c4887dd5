# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Resolve the ``__exact`` identifier key carried by a source delta."""

from __future__ import annotations

from .constants import EXACT_SUFFIX
from .errors import AmbiguousIdentifierError, IdentifierNotFound
from .types import SourceDelta


def is_identifier_key(key: str) -> bool:
    """Return ``True`` when ``key`` names a stanza field via the exact suffix."""

    return key.endswith(EXACT_SUFFIX) and len(key) > len(EXACT_SUFFIX)


def resolve_identifier(delta: SourceDelta, *, name: str | None = None) -> str:
    """Return the single identifier key declared by ``delta``.

    Args:
        delta: Source delta published by the update feed.
        name: Package name used to enrich error messages.

    Returns:
        str: The key ending in ``__exact``.

    Raises:
        IdentifierNotFound: If no key carries the suffix.
        AmbiguousIdentifierError: If more than one key carries the suffix.
    """

    keys = [key for key in delta if is_identifier_key(key)]
    label = f"source delta for '{name}'" if name else "source delta"
    if not keys:
        raise IdentifierNotFound(f"{label} has no key ending in '{EXACT_SUFFIX}'", name=name)
    if len(keys) > 1:
        raise AmbiguousIdentifierError(
            f"{label} has multiple keys ending in '{EXACT_SUFFIX}': {', '.join(sorted(keys))}",
            name=name,
        )
    return keys[0]


def field_for(identifier_key: str) -> str:
    """Return the stanza field matched by ``identifier_key``."""

    return identifier_key.removesuffix(EXACT_SUFFIX)


__all__ = ["field_for", "is_identifier_key", "resolve_identifier"]
