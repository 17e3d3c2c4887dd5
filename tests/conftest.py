# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

OLD_URL = "http://x/1.0.tar.gz"
NEW_URL = "http://x/2.0.tar.gz"

JsonWriter = Callable[[Path, Any], Path]


def _write_json(path: Path, payload: Any) -> Path:
    """Serialize *payload* as formatted JSON to *path* and return the path."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=4) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_json() -> JsonWriter:
    """Return a helper writing JSON documents, creating parent directories."""

    return _write_json


@pytest.fixture
def feed_document() -> dict[str, Any]:
    """Return a feed updating the ``foo`` archive from 1.0 to 2.0."""

    return {
        "updates": [
            {
                "name": "foo",
                "sources": [{"url__exact": OLD_URL, "url": NEW_URL, "sha256": "NEW"}],
            },
        ],
    }


@pytest.fixture
def manifest_document() -> dict[str, Any]:
    """Return a manifest holding the ``foo`` module at version 1.0."""

    return {
        "modules": [
            {
                "name": "foo",
                "sources": [{"type": "archive", "url": OLD_URL, "sha256": "OLD"}],
            },
        ],
    }


@pytest.fixture
def project(
    tmp_path: Path,
    write_json: JsonWriter,
    feed_document: dict[str, Any],
    manifest_document: dict[str, Any],
) -> Path:
    """Create a manifest tree with a config file, an update feed and one manifest."""

    root = tmp_path / "project"
    root.mkdir()
    (root / ".blu.conf.toml").write_text(
        '[source]\nupdate_file = "updates.json"\nroot = "."\n',
        encoding="utf-8",
    )
    write_json(root / "updates.json", feed_document)
    write_json(root / "org.example.App.json", manifest_document)
    return root
