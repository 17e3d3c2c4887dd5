# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Merge update deltas into manifest source stanzas."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping, MutableMapping
from typing import cast

from .identifier import field_for
from .types import JSONValue, SourceDelta, SourceStanza

_MISSING = object()


def json_equal(left: JSONValue, right: JSONValue) -> bool:
    """Return ``True`` when ``left`` and ``right`` are the same JSON value.

    Booleans, integers and floats are distinct JSON kinds, so ``true``, ``1``
    and ``1.0`` never compare equal to one another.
    """

    if type(left) is not type(right):
        return False
    if isinstance(left, Mapping):
        right_map = cast(Mapping[str, JSONValue], right)
        if left.keys() != right_map.keys():
            return False
        return all(json_equal(value, right_map[key]) for key, value in left.items())
    if isinstance(left, list):
        right_list = cast(list[JSONValue], right)
        return len(left) == len(right_list) and all(map(json_equal, left, right_list))
    return left == right


class SourceMerger:
    """Apply source deltas to every stanza whose identifier field matches."""

    def matches(self, stanza: object, delta: SourceDelta, identifier_key: str) -> bool:
        """Return ``True`` when ``stanza`` is the target of ``delta``.

        Stanzas that are not objects, or that lack the identifier field, never
        match.
        """

        if not isinstance(stanza, MutableMapping):
            return False
        current = stanza.get(field_for(identifier_key), _MISSING)
        return current is not _MISSING and json_equal(current, delta[identifier_key])

    def merge(self, stanza: object, delta: SourceDelta, identifier_key: str) -> bool:
        """Overwrite ``stanza`` fields with ``delta`` when the identifier matches.

        Every delta key except ``identifier_key`` is copied into the stanza,
        adding absent keys and replacing present ones regardless of type.

        Args:
            stanza: Source stanza mutated in place.
            delta: Update fields published by the feed.
            identifier_key: Key of ``delta`` ending in ``__exact``.

        Returns:
            bool: ``True`` when the stanza matched and was merged.
        """

        if not self.matches(stanza, delta, identifier_key):
            return False
        target = cast(SourceStanza, stanza)
        for key, value in delta.items():
            if key == identifier_key:
                continue
            target[key] = copy.deepcopy(value)
        return True

    def merge_all(self, stanzas: Iterable[object], delta: SourceDelta, identifier_key: str) -> int:
        """Merge ``delta`` into each matching stanza and return the match count."""

        return sum(1 for stanza in stanzas if self.merge(stanza, delta, identifier_key))


__all__ = ["SourceMerger", "json_equal"]
