# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for the CLI (errors, exit codes, verbose logging)."""

from __future__ import annotations

import logging
import sys
from typing import Final

from rich.text import Text

from ..checker import InvocationFailure

EXIT_OK: Final[int] = 0
EXIT_PROBLEMS: Final[int] = 1
EXIT_FAILURE: Final[int] = 255

PACKAGE_LOGGER: Final[str] = "llscheck"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str | Text, *, exit_code: int = EXIT_FAILURE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(str(message))
        self.message = message
        self.exit_code = exit_code


def describe_invocation_failure(exc: InvocationFailure) -> Text:
    """Return the fatal message for a failed language server run.

    Args:
        exc: Failure raised by :func:`~llscheck.checker.check_workspace`.

    Returns:
        Text: ``Command failed: <command>`` followed by the trimmed stderr.
    """

    text = Text()
    text.append("Command failed: ", style="red")
    text.append(exc.command_line, style="yellow")
    if exc.stderr:
        text.append("\n")
        text.append(exc.stderr)
    return text


def enable_verbose_logging() -> None:
    """Stream ``llscheck`` debug records to stderr."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    if getattr(logger, "_llscheck_verbose_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_llscheck_verbose_configured", True)


__all__ = [
    "CLIError",
    "EXIT_FAILURE",
    "EXIT_OK",
    "EXIT_PROBLEMS",
    "describe_invocation_failure",
    "enable_verbose_logging",
]
