# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases for feed and manifest documents."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

SourceDelta: TypeAlias = Mapping[str, Any]
SourceStanza: TypeAlias = MutableMapping[str, Any]

__all__ = [
    "JSONPrimitive",
    "JSONValue",
    "SourceDelta",
    "SourceStanza",
]
