# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across blu modules."""

from __future__ import annotations

from typing import Final

DEFAULT_CONFIG_NAME: Final[str] = ".blu.conf.toml"

EXACT_SUFFIX: Final[str] = "__exact"

MANIFEST_EXTENSION: Final[str] = ".json"
HIDDEN_PREFIX: Final[str] = "."

UPDATES_KEY: Final[str] = "updates"
MODULES_KEY: Final[str] = "modules"
NAME_KEY: Final[str] = "name"
SOURCES_KEY: Final[str] = "sources"

DEFAULT_JSON_INDENT: Final[int] = 4

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_JSON_INDENT",
    "EXACT_SUFFIX",
    "HIDDEN_PREFIX",
    "MANIFEST_EXTENSION",
    "MODULES_KEY",
    "NAME_KEY",
    "SOURCES_KEY",
    "UPDATES_KEY",
]
