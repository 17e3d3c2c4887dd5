# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for manifest update orchestration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from blu.catalog import UpdateCatalog
from blu.errors import IdentifierNotFound, ManifestParseError, ManifestSchemaError
from blu.updater import ModuleUpdater
from blu.walker import ManifestWalker

OLD_URL = "http://x/1.0.tar.gz"
NEW_URL = "http://x/2.0.tar.gz"


def _read(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def test_end_to_end_updates_matching_stanza(project: Path) -> None:
    catalog = UpdateCatalog.from_path(project / "updates.json")
    walker = ManifestWalker(root=project, exclude=project / "updates.json")

    result = ModuleUpdater().run(catalog, walker)

    manifest = project / "org.example.App.json"
    assert result.scanned == [manifest]
    assert result.written == [manifest]
    assert result.merged_stanzas == 1
    assert result.changes[0].modules == ["foo"]
    assert _read(manifest) == {
        "modules": [
            {"name": "foo", "sources": [{"type": "archive", "url": NEW_URL, "sha256": "NEW"}]},
        ],
    }


def test_uncatalogued_module_leaves_manifest_bytes_unchanged(
    tmp_path: Path,
    write_json,
    feed_document: dict[str, Any],
) -> None:
    manifest = write_json(
        tmp_path / "app.json",
        {"modules": [{"name": "bar", "sources": [{"type": "archive", "url": OLD_URL, "sha256": "OLD"}]}]},
    )
    original = manifest.read_bytes()

    result = ModuleUpdater().run(UpdateCatalog.build(feed_document), [manifest])

    assert result.changes == []
    assert result.written == []
    assert manifest.read_bytes() == original


def test_all_matching_stanzas_in_a_module_are_merged(feed_document: dict[str, Any]) -> None:
    document = {
        "modules": [
            {
                "name": "foo",
                "sources": [
                    {"type": "archive", "url": OLD_URL, "sha256": "OLD"},
                    {"type": "patch", "path": "fix.patch"},
                    {"type": "archive", "url": OLD_URL, "sha256": "OLD", "dest": "vendor"},
                ],
            },
        ],
    }

    merged = ModuleUpdater().update_document(UpdateCatalog.build(feed_document), document)

    sources = document["modules"][0]["sources"]
    assert merged == 2
    assert sources[0] == {"type": "archive", "url": NEW_URL, "sha256": "NEW"}
    assert sources[1] == {"type": "patch", "path": "fix.patch"}
    assert sources[2] == {"type": "archive", "url": NEW_URL, "sha256": "NEW", "dest": "vendor"}


def test_other_modules_are_untouched(feed_document: dict[str, Any]) -> None:
    bar = {"name": "bar", "sources": [{"type": "archive", "url": OLD_URL}], "buildsystem": "meson"}
    document = {
        "modules": [bar, {"name": "foo", "sources": [{"url": OLD_URL}]}],
    }
    before = json.dumps(bar)

    ModuleUpdater().update_document(UpdateCatalog.build(feed_document), document)

    assert json.dumps(document["modules"][0]) == before


def test_nested_modules_are_updated(feed_document: dict[str, Any]) -> None:
    document = {
        "modules": [
            {
                "name": "app",
                "sources": [],
                "modules": [{"name": "foo", "sources": [{"type": "archive", "url": OLD_URL}]}],
            },
        ],
    }

    merged = ModuleUpdater().update_document(UpdateCatalog.build(feed_document), document)

    assert merged == 1
    assert document["modules"][0]["modules"][0]["sources"][0]["url"] == NEW_URL


def test_second_run_reports_no_changes(project: Path) -> None:
    catalog = UpdateCatalog.from_path(project / "updates.json")
    manifest = project / "org.example.App.json"
    ModuleUpdater().run(catalog, [manifest])
    written = manifest.read_bytes()

    result = ModuleUpdater().run(catalog, [manifest])

    assert result.changes == []
    assert manifest.read_bytes() == written


def test_dry_run_does_not_write(project: Path) -> None:
    catalog = UpdateCatalog.from_path(project / "updates.json")
    manifest = project / "org.example.App.json"
    original = manifest.read_text(encoding="utf-8")

    result = ModuleUpdater(dry_run=True).run(catalog, [manifest])

    assert result.dry_run is True
    assert result.written == []
    assert len(result.changes) == 1
    assert NEW_URL in result.changes[0].updated_text
    assert result.changes[0].original_text == original
    assert manifest.read_text(encoding="utf-8") == original


def test_schema_error_in_later_manifest_prevents_all_writes(
    project: Path,
    write_json,
) -> None:
    catalog = UpdateCatalog.from_path(project / "updates.json")
    good = project / "org.example.App.json"
    bad = write_json(project / "zz" / "broken.json", {"name": "no-modules"})
    original = good.read_bytes()

    with pytest.raises(ManifestSchemaError) as excinfo:
        ModuleUpdater().run(catalog, [good, bad])

    assert excinfo.value.path == bad
    assert good.read_bytes() == original


def test_parse_error_names_manifest(tmp_path: Path, feed_document: dict[str, Any]) -> None:
    manifest = tmp_path / "broken.json"
    manifest.write_text("{\"modules\": [}", encoding="utf-8")

    with pytest.raises(ManifestParseError) as excinfo:
        ModuleUpdater().run(UpdateCatalog.build(feed_document), [manifest])

    assert excinfo.value.path == manifest
    assert str(manifest) in str(excinfo.value)


@pytest.mark.parametrize(
    "document",
    [
        {"modules": {"name": "foo"}},
        {"modules": ["shared-modules/foo.json"]},
        {"modules": [{"sources": []}]},
        {"modules": [{"name": "foo"}]},
        {"modules": [{"name": "foo", "sources": {}}]},
        {"modules": [{"name": "app", "sources": [], "modules": [{"name": "foo"}]}]},
    ],
)
def test_malformed_modules_raise_schema_errors(document: Any, feed_document: dict[str, Any]) -> None:
    with pytest.raises(ManifestSchemaError):
        ModuleUpdater().update_document(UpdateCatalog.build(feed_document), document)


def test_delta_without_identifier_fails_when_module_is_catalogued() -> None:
    catalog = UpdateCatalog.build({"updates": [{"name": "foo", "sources": [{"url": "x"}]}]})
    document = {"modules": [{"name": "foo", "sources": [{"url": "x"}]}]}

    with pytest.raises(IdentifierNotFound):
        ModuleUpdater().update_document(catalog, document)


def test_rewrite_uses_configured_indent(project: Path) -> None:
    catalog = UpdateCatalog.from_path(project / "updates.json")
    manifest = project / "org.example.App.json"

    ModuleUpdater(indent=2).run(catalog, [manifest])

    text = manifest.read_text(encoding="utf-8")
    assert text.startswith('{\n  "modules": [')
    assert text.endswith("}\n")


@pytest.mark.parametrize("token", ["NaN", "1e400"])
def test_non_finite_number_in_manifest_is_a_parse_error(
    tmp_path: Path,
    feed_document: dict[str, Any],
    token: str,
) -> None:
    manifest = tmp_path / "app.json"
    text = f'{{"x": {token}, "modules": [{{"name": "foo", "sources": [{{"url": "http://x/1.0.tar.gz"}}]}}]}}'
    manifest.write_text(text, encoding="utf-8")

    with pytest.raises(ManifestParseError):
        ModuleUpdater().run(UpdateCatalog.build(feed_document), [manifest])

    assert manifest.read_text(encoding="utf-8") == text
