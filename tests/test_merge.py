# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for source stanza merging."""

from __future__ import annotations

import copy

import pytest

from blu.merge import SourceMerger, json_equal

DELTA = {"url__exact": "http://x/1.0.tar.gz", "url": "http://x/2.0.tar.gz", "sha256": "NEW"}


def _stanza() -> dict[str, object]:
    return {"type": "archive", "url": "http://x/1.0.tar.gz", "sha256": "OLD"}


def test_merge_overwrites_matching_stanza() -> None:
    stanza = _stanza()

    assert SourceMerger().merge(stanza, DELTA, "url__exact") is True
    assert stanza == {"type": "archive", "url": "http://x/2.0.tar.gz", "sha256": "NEW"}


def test_merge_never_writes_identifier_key() -> None:
    stanza = _stanza()

    SourceMerger().merge(stanza, DELTA, "url__exact")

    assert "url__exact" not in stanza


def test_merge_is_idempotent() -> None:
    merger = SourceMerger()
    once = _stanza()
    merger.merge(once, DELTA, "url__exact")
    twice = copy.deepcopy(once)

    merger.merge(twice, DELTA, "url__exact")

    assert twice == once


def test_merge_leaves_non_matching_stanza_untouched() -> None:
    stanza = {"type": "archive", "url": "http://x/0.9.tar.gz", "sha256": "OLD"}
    before = copy.deepcopy(stanza)

    assert SourceMerger().merge(stanza, DELTA, "url__exact") is False
    assert stanza == before


def test_merge_ignores_stanza_without_identifier_field() -> None:
    stanza = {"type": "git", "commit": "abc"}

    assert SourceMerger().merge(stanza, {"url__exact": None, "url": "x"}, "url__exact") is False
    assert stanza == {"type": "git", "commit": "abc"}


def test_merge_adds_absent_keys_and_allows_type_changes() -> None:
    stanza = {"type": "archive", "url": "a", "size": "12"}
    delta = {"url__exact": "a", "size": 12, "x-checker-data": {"type": "anitya", "project-id": 1}}

    SourceMerger().merge(stanza, delta, "url__exact")

    assert stanza["size"] == 12
    assert stanza["x-checker-data"] == {"type": "anitya", "project-id": 1}


def test_merged_values_do_not_alias_delta() -> None:
    delta = {"url__exact": "a", "mirror-urls": ["m1"]}
    stanza = {"url": "a"}

    SourceMerger().merge(stanza, delta, "url__exact")
    stanza["mirror-urls"].append("m2")  # type: ignore[union-attr]

    assert delta["mirror-urls"] == ["m1"]


def test_merge_all_updates_every_matching_stanza() -> None:
    stanzas: list[object] = [_stanza(), {"type": "file", "url": "other"}, _stanza(), "shared-modules/foo.json"]

    merged = SourceMerger().merge_all(stanzas, DELTA, "url__exact")

    assert merged == 2
    assert stanzas[0] == stanzas[2] == {"type": "archive", "url": "http://x/2.0.tar.gz", "sha256": "NEW"}
    assert stanzas[1] == {"type": "file", "url": "other"}
    assert stanzas[3] == "shared-modules/foo.json"


def test_merge_all_without_matches_is_not_an_error() -> None:
    stanzas: list[object] = [{"type": "file", "url": "other"}]

    assert SourceMerger().merge_all(stanzas, DELTA, "url__exact") == 0


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        (1, True),
        (1.0, 1),
        (0, False),
        ([1, 2], [1.0, 2]),
        ({"a": True}, {"a": 1}),
    ],
)
def test_identifier_values_of_different_json_kinds_do_not_match(current: object, expected: object) -> None:
    stanza = {"type": "file", "size": current, "sha256": "OLD"}

    assert SourceMerger().merge(stanza, {"size__exact": expected, "sha256": "NEW"}, "size__exact") is False
    assert stanza["sha256"] == "OLD"


def test_identifier_matches_equal_nested_values() -> None:
    stanza = {"type": "file", "only-arches": ["x86_64", "aarch64"], "sha256": "OLD"}
    delta = {"only-arches__exact": ["x86_64", "aarch64"], "sha256": "NEW"}

    assert SourceMerger().merge(stanza, delta, "only-arches__exact") is True
    assert stanza["sha256"] == "NEW"


def test_json_equal_distinguishes_bool_int_and_float() -> None:
    assert json_equal(1, 1)
    assert json_equal({"a": [1, "x"]}, {"a": [1, "x"]})
    assert not json_equal(True, 1)
    assert not json_equal(1, 1.0)
    assert not json_equal({"a": 1}, {"a": 1, "b": 2})
