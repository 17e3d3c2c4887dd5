# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading and atomically rewriting JSON documents."""

from __future__ import annotations

import json
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from .constants import DEFAULT_JSON_INDENT
from .errors import BluError


class _NonFiniteNumber(ValueError):
    """Raised while decoding when a number has no finite JSON representation."""


def _reject_constant(token: str) -> Any:
    raise _NonFiniteNumber(token)


def _parse_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise _NonFiniteNumber(token)
    return value


def read_text(path: Path, *, error: type[BluError]) -> str:
    """Return the UTF-8 contents of ``path``.

    Args:
        path: File to read.
        error: Exception type raised when the file cannot be read.

    Returns:
        str: Decoded file contents.

    Raises:
        BluError: ``error`` when the file is missing, unreadable or not UTF-8.
    """

    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise error("file does not exist", path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise error(f"unable to read file ({exc})", path=path) from exc


def parse_json(text: str, *, path: Path, error: type[BluError]) -> Any:
    """Parse ``text`` as JSON, raising ``error`` with location details.

    Args:
        text: Raw document text.
        path: Document path used in error messages.
        error: Exception type raised on malformed JSON.

    Returns:
        Any: Parsed JSON value.

    Raises:
        BluError: ``error`` when ``text`` is not valid JSON, including the
            ``NaN`` and ``Infinity`` tokens and numbers too large for a float.
    """

    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
    except json.JSONDecodeError as exc:
        raise error(f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}", path=path) from exc
    except _NonFiniteNumber as exc:
        raise error(f"invalid JSON: non-finite number {exc}", path=path) from exc


def load_json(path: Path, *, io_error: type[BluError], parse_error: type[BluError]) -> Any:
    """Read and parse the JSON document stored at ``path``."""

    return parse_json(read_text(path, error=io_error), path=path, error=parse_error)


def dump_json(document: Any, *, indent: int = DEFAULT_JSON_INDENT) -> str:
    """Render ``document`` as JSON text with a trailing newline.

    Key order is preserved and non-ASCII characters are written verbatim.
    Non-finite floats raise :class:`ValueError` instead of producing invalid
    JSON.
    """

    return json.dumps(document, indent=indent, ensure_ascii=False, allow_nan=False) + "\n"


def atomic_write_text(path: Path, text: str, *, error: type[BluError]) -> None:
    """Replace ``path`` with ``text`` via a temporary file and ``os.replace``.

    The temporary file lives in the destination directory so the final rename
    never crosses filesystems. Existing permission bits are carried over.

    Args:
        path: Destination file.
        text: UTF-8 text to write.
        error: Exception type raised when the write fails.

    Raises:
        BluError: ``error`` when the temporary file cannot be written or renamed.
    """

    try:
        mode = path.stat().st_mode & 0o7777
    except FileNotFoundError:
        mode = None
    try:
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            prefix=f".{path.name}.",
            suffix=".tmp",
            dir=path.parent,
            delete=False,
        )
    except OSError as exc:
        raise error(f"unable to create temporary file ({exc})", path=path) from exc
    tmp_path = Path(handle.name)
    try:
        with handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise error(f"unable to write file ({exc})", path=path) from exc


__all__ = ["atomic_write_text", "dump_json", "load_json", "parse_json", "read_text"]
