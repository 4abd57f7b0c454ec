# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution for checker invocations."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; checkers are launched from argument
# lists assembled by suitecheck itself and never through a shell.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = False
    capture_output: bool = False
    text: bool = True


class ToolInvocationError(RuntimeError):
    """Raised when a checker executable cannot be located or started."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        """Initialise the error with the offending command.

        Args:
            command: Command sequence that could not be started.
            reason: Human-readable explanation of the failure.
        """

        head = command[0] if command else "<empty>"
        super().__init__(f"Unable to run '{head}': {reason}")
        self.command = tuple(command)
        self.reason = reason


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """

        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _normalize_args(args: Sequence[str], cwd: Path | None) -> list[str]:
    """Resolve the executable of ``args`` to an absolute path.

    Relative executables containing a path separator (``./gradlew``) are
    resolved against ``cwd``; bare names are looked up on ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.
        cwd: Working directory the command will run in.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ToolInvocationError: If no arguments are given or the executable
            cannot be found.
    """

    if not args:
        raise ToolInvocationError(args, "subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]
    if "/" in head or (os.sep != "/" and os.sep in head):
        candidate = (cwd or Path.cwd()) / head_path
        if not candidate.exists():
            raise ToolInvocationError(args, f"executable {candidate} does not exist")
        return [str(candidate), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise ToolInvocationError(args, "executable was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        ToolInvocationError: If the executable cannot be resolved or started.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args, resolved_options.cwd)
    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=resolved_options.text,
        )
    except OSError as exc:
        raise ToolInvocationError(normalized, str(exc)) from exc

    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = [
    "CommandOptions",
    "SubprocessExecutionError",
    "ToolInvocationError",
    "run_command",
]
