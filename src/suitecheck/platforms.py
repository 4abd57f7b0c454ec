# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Mapping of platform targets onto the concrete platforms each suite covers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from .config import PlatformTarget


class Platform(StrEnum):
    """A concrete mobile platform."""

    IOS = "ios"
    ANDROID = "android"


_IOS: Final = (Platform.IOS,)
_ANDROID: Final = (Platform.ANDROID,)
_BOTH: Final = (Platform.ANDROID, Platform.IOS)

# test-run cost scales with platform count, so sloppy narrows it to iOS.
# native checks are platform specific, so sloppy still covers both.
PLATFORM_TABLE: Final[Mapping[str, Mapping[PlatformTarget, tuple[Platform, ...]]]] = MappingProxyType(
    {
        "test-run": MappingProxyType(
            {
                PlatformTarget.IOS: _IOS,
                PlatformTarget.ANDROID: _ANDROID,
                PlatformTarget.BOTH: _BOTH,
                PlatformTarget.SLOPPY: _IOS,
            },
        ),
        "native": MappingProxyType(
            {
                PlatformTarget.IOS: _IOS,
                PlatformTarget.ANDROID: _ANDROID,
                PlatformTarget.BOTH: _BOTH,
                PlatformTarget.SLOPPY: _BOTH,
            },
        ),
    },
)


def platforms_for(suite: str, target: PlatformTarget) -> tuple[Platform, ...]:
    """Return the platforms ``suite`` should cover for ``target``.

    Args:
        suite: Registered suite name.
        target: Platform target selected for the run.

    Returns:
        tuple[Platform, ...]: Concrete platforms in execution order.

    Raises:
        KeyError: If ``suite`` is not platform aware.
    """

    return PLATFORM_TABLE[suite][target]


__all__ = ["PLATFORM_TABLE", "Platform", "platforms_for"]
