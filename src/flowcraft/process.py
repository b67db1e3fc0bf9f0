# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run external commands (git) without a shell."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def _resolve_executable(args: Sequence[str]) -> list[str]:
    if not args:
        raise ValueError("a command needs at least the executable name")
    head, *rest = args
    if Path(head).is_absolute():
        return [head, *rest]
    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture_output: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run ``args`` with text I/O after locating the executable on ``PATH``.

    Args:
        args: Executable followed by its arguments.
        cwd: Working directory of the child process.
        env: Replacement environment, inherited when ``None``.
        check: Raise on a non-zero exit status.
        capture_output: Collect stdout and stderr instead of inheriting them.

    Returns:
        subprocess.CompletedProcess[str]: Finished process.

    Raises:
        FileNotFoundError: If the executable is not on ``PATH``.
        subprocess.CalledProcessError: If ``check`` is set and the command fails.
    """

    command = _resolve_executable(args)
    LOGGER.debug("running %s in %s", " ".join(args), cwd or Path.cwd())
    return subprocess.run(  # nosec B603 - argument list, no shell expansion
        command,
        cwd=cwd,
        env=dict(env) if env is not None else None,
        check=check,
        capture_output=capture_output,
        text=True,
    )


__all__ = ["run_command"]
