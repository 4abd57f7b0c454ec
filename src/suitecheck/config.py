# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for suitecheck runs."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Final, TypeAlias

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "suitecheck"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class PlatformTarget(StrEnum):
    """Platforms a run may target.

    ``SLOPPY`` is a cost policy rather than a platform: see
    :data:`suitecheck.platforms.PLATFORM_TABLE` for how each suite applies it.
    """

    IOS = "ios"
    ANDROID = "android"
    BOTH = "both"
    SLOPPY = "sloppy"


@dataclass(frozen=True, slots=True)
class AllFiles:
    """Every file in scope; no diff is computed."""

    def describe(self) -> str:
        return "all files"


@dataclass(frozen=True, slots=True)
class BranchChanges:
    """Files changed since the current branch forked from the base branch."""

    def describe(self) -> str:
        return "files changed on this branch"


@dataclass(frozen=True, slots=True)
class DiffAgainst:
    """Files changed relative to an arbitrary commit-ish."""

    ref: str

    def describe(self) -> str:
        return f"files changed since {self.ref}"


SelectionMode: TypeAlias = AllFiles | BranchChanges | DiffAgainst


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable per-run options assembled from CLI input.

    Attributes:
        mode: Active file selection policy.
        platform: Platform target or policy.
        fix: Whether checkers that support it should rewrite files.
        coverage: Whether the test runner should collect coverage.
        suites: Ordered suite names requested; empty selects the defaults.
    """

    mode: SelectionMode = field(default_factory=BranchChanges)
    platform: PlatformTarget = PlatformTarget.SLOPPY
    fix: bool = False
    coverage: bool = False
    suites: tuple[str, ...] = ()


class ProjectSettings(BaseModel):
    """Repository layout and checker commands read from ``[tool.suitecheck]``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: Path = Field(default_factory=Path.cwd)
    source_dir: str = "src"
    source_extensions: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")
    format_extensions: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".json", ".md")
    base_branch: str = "origin/main"
    android_dir: str = "android"
    ios_dir: str = "ios"
    manifest: str = "package.json"
    lockfile: str = "yarn.lock"
    node_version: str = ">=20,<21"
    lint_command: tuple[str, ...] = ("npx", "eslint")
    type_check_command: tuple[str, ...] = ("npx", "tsc", "--noEmit")
    format_command: tuple[str, ...] = ("npx", "prettier")
    test_command: tuple[str, ...] = ("npx", "jest")
    dedupe_command: tuple[str, ...] = ("npx", "yarn-deduplicate")
    gradle_command: tuple[str, ...] = ("./gradlew",)

    @field_validator("source_extensions", "format_extensions")
    @classmethod
    def _normalise_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in value)

    @field_validator("node_version")
    @classmethod
    def _validate_specifier(cls, value: str) -> str:
        try:
            SpecifierSet(value)
        except InvalidSpecifier as exc:
            raise ValueError(f"invalid version specifier {value!r}") from exc
        return value

    @field_validator(
        "lint_command",
        "type_check_command",
        "format_command",
        "test_command",
        "dedupe_command",
        "gradle_command",
    )
    @classmethod
    def _require_executable(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("checker commands must name an executable")
        return value

    @property
    def node_specifier(self) -> SpecifierSet:
        return SpecifierSet(self.node_version)


def _read_section(pyproject: Path) -> Mapping[str, Any]:
    """Return the ``[tool.suitecheck]`` table from ``pyproject`` if present."""

    if not pyproject.is_file():
        return {}
    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {pyproject}: {exc}") from exc
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {pyproject} must be a table")
    return section


def _format_validation_error(error: ValidationError) -> str:
    parts: Iterable[str] = (
        f"{'.'.join(str(loc) for loc in entry['loc']) or '<root>'}: {entry['msg']}" for entry in error.errors()
    )
    return "; ".join(parts)


def load_settings(root: Path) -> ProjectSettings:
    """Load project settings for the repository at ``root``.

    Args:
        root: Repository root containing an optional ``pyproject.toml``.

    Returns:
        ProjectSettings: Validated settings with defaults applied.

    Raises:
        ConfigError: If the configuration table is malformed.
    """

    resolved = root.resolve()
    section = dict(_read_section(resolved / PYPROJECT_FILENAME))
    if "root" in section:
        raise ConfigError("'root' cannot be set in configuration; use --root")
    try:
        return ProjectSettings(root=resolved, **section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.suitecheck] configuration: {_format_validation_error(exc)}") from exc


__all__ = [
    "AllFiles",
    "BranchChanges",
    "ConfigError",
    "DiffAgainst",
    "PlatformTarget",
    "ProjectSettings",
    "RunConfig",
    "SelectionMode",
    "load_settings",
]
