# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrapper around ``subprocess`` execution of the language server."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; commands are passed as argument
# lists and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def run_command(args: Sequence[str], *, timeout: float | None = None) -> subprocess.CompletedProcess[str]:
    """Execute *args* with captured text output and return the finished process.

    The exit status is never checked here. A timeout is reported as exit status
    ``124`` with a note appended to stderr instead of raising.

    Args:
        args: Argument vector; the executable is resolved on ``PATH``.
        timeout: Optional limit in seconds.

    Returns:
        subprocess.CompletedProcess[str]: Finished process with stdout/stderr text.

    Raises:
        FileNotFoundError: If the executable cannot be located on ``PATH``.
    """
    normalized = _normalize_args(args)

    try:
        # Bandit: argument lists only, no shell expansion.
        return subprocess.run(  # nosec B603
            normalized,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {timeout:.1f}s"
        return subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )


__all__ = ["TIMEOUT_RETURNCODE", "run_command"]
