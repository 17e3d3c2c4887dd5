# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Utility helpers for validating feed and manifest JSON structures."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

from .errors import BluError


def expect_mapping(
    value: Any,
    *,
    key: str,
    context: str,
    error: type[BluError],
    path: Path | None = None,
) -> MutableMapping[str, Any]:
    """Return ``value`` as a JSON object or raise ``error``.

    Args:
        value: Raw JSON value extracted from the document.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.
        error: Exception type raised on mismatch.
        path: Document path attached to the raised error.

    Returns:
        MutableMapping[str, Any]: ``value`` unchanged when it is an object.

    Raises:
        BluError: ``error`` when ``value`` is not an object.
    """

    if not isinstance(value, MutableMapping):
        raise error(f"{context}: expected '{key}' to be an object", path=path)
    return value


def expect_list(
    value: Any,
    *,
    key: str,
    context: str,
    error: type[BluError],
    path: Path | None = None,
) -> list[Any]:
    """Return ``value`` as a JSON array or raise ``error``.

    Args:
        value: Raw JSON value extracted from the document.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.
        error: Exception type raised on mismatch.
        path: Document path attached to the raised error.

    Returns:
        list[Any]: ``value`` unchanged when it is an array.

    Raises:
        BluError: ``error`` when ``value`` is missing or not an array.
    """

    if value is None:
        raise error(f"{context}: missing required '{key}' array", path=path)
    if not isinstance(value, list):
        raise error(f"{context}: expected '{key}' to be an array", path=path)
    return value


def expect_string(
    value: Any,
    *,
    key: str,
    context: str,
    error: type[BluError],
    path: Path | None = None,
) -> str:
    """Return ``value`` as a string or raise ``error``.

    Args:
        value: Raw JSON value extracted from the document.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.
        error: Exception type raised on mismatch.
        path: Document path attached to the raised error.

    Returns:
        str: ``value`` unchanged when it is a string.

    Raises:
        BluError: ``error`` when ``value`` is missing or not a string.
    """

    if value is None:
        raise error(f"{context}: missing required '{key}'", path=path)
    if not isinstance(value, str):
        raise error(f"{context}: expected '{key}' to be a string", path=path)
    return value


def describe_entry(mapping: Mapping[str, Any], index: int) -> str:
    """Return a short label for an array entry, preferring its ``name``."""

    name = mapping.get("name")
    return f"[{index}] ({name})" if isinstance(name, str) else f"[{index}]"


__all__ = ["describe_entry", "expect_list", "expect_mapping", "expect_string"]
