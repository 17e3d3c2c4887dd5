# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loader for ``.blu.conf.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .constants import DEFAULT_JSON_INDENT
from .errors import ConfigError

SOURCE_SECTION: Final[str] = "source"
BUILD_SECTION: Final[str] = "build"


class SourceSettings(BaseModel):
    """Settings describing where the update feed and manifests live."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    update_file: Path = Field(validation_alias=AliasChoices("update_file", "updates"))
    root: Path | None = None
    indent: int = Field(default=DEFAULT_JSON_INDENT, ge=0, le=16)


class BluConfig(BaseModel):
    """Top-level configuration document."""

    model_config = ConfigDict(extra="ignore")

    source: SourceSettings
    build: dict[str, Any] = Field(default_factory=dict)
    path: Path | None = None

    def update_file(self) -> Path:
        """Return the absolute path of the update feed."""

        return self._resolve(self.source.update_file)

    def manifest_root(self, cwd: Path | None = None) -> Path:
        """Return the manifest tree root, defaulting to ``cwd``."""

        if self.source.root is None:
            return (cwd or Path.cwd()).resolve()
        return self._resolve(self.source.root)

    def _resolve(self, value: Path) -> Path:
        value = value.expanduser()
        if value.is_absolute() or self.path is None:
            return value.resolve()
        return (self.path.parent / value).resolve()


def parse_config(data: Mapping[str, Any], *, path: Path | None = None) -> BluConfig:
    """Validate a parsed settings document.

    Args:
        data: Mapping produced by :func:`tomllib.load`.
        path: Location of the document, used to anchor relative paths.

    Returns:
        BluConfig: Validated configuration.

    Raises:
        ConfigError: If the ``source`` table is missing or a value is invalid.
    """

    if not isinstance(data.get(SOURCE_SECTION), Mapping):
        raise ConfigError(f"missing [{SOURCE_SECTION}] table", path=path)
    build = data.get(BUILD_SECTION, {})
    if not isinstance(build, Mapping):
        raise ConfigError(f"[{BUILD_SECTION}] must be a table", path=path)
    try:
        return BluConfig.model_validate({SOURCE_SECTION: data[SOURCE_SECTION], BUILD_SECTION: build, "path": path})
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError(f"invalid configuration ({details})", path=path) from exc


def load_config(path: Path) -> BluConfig:
    """Load and validate the TOML configuration stored at ``path``.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or fails validation.
    """

    path = path.expanduser().resolve()
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError("configuration file does not exist", path=path) from exc
    except OSError as exc:
        raise ConfigError(f"unable to read configuration ({exc})", path=path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML ({exc})", path=path) from exc
    return parse_config(data, path=path)


__all__ = ["BluConfig", "SourceSettings", "load_config", "parse_config"]
