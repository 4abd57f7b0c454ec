# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Final summary rendering for a suitecheck run."""

from __future__ import annotations

from .dispatch import RunResult
from .logging import Logger


def report(result: RunResult, logger: Logger) -> int:
    """Render ``result`` and return the process exit status.

    Returns:
        int: ``0`` when every attempted suite passed, ``1`` otherwise.
    """

    logger.summary(result.records)
    if result.failed:
        logger.fail(f"Failed suites: {', '.join(result.failed)}")
    else:
        logger.ok("All suites passed")
    return result.exit_code()


__all__ = ["report"]
