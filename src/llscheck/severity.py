# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class UnknownSeverityError(ValueError):
    """Raised when a diagnostic carries a severity outside the known levels."""


class SeverityLevel(IntEnum):
    """Severity levels reported by the language server, most severe first."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4

    @property
    def label(self) -> str:
        """Return the display name used in reports (``"Error"``, ``"Hint"``...)."""

        return self.name.capitalize()

    @property
    def color(self) -> str:
        """Return the rich style name used to paint this severity."""

        return SEVERITY_COLORS[self]

    @classmethod
    def coerce(cls, value: object) -> SeverityLevel:
        """Return the member matching *value*.

        Args:
            value: Integer rank or existing member.

        Returns:
            SeverityLevel: Matching severity member.

        Raises:
            UnknownSeverityError: If *value* is not one of the four known ranks.
        """

        if isinstance(value, bool) or not isinstance(value, int):
            raise UnknownSeverityError(f"unknown severity {value!r}")
        try:
            return cls(value)
        except ValueError as exc:
            raise UnknownSeverityError(f"unknown severity {value!r}") from exc


SEVERITY_COLORS: Final[dict[SeverityLevel, str]] = {
    SeverityLevel.ERROR: "red",
    SeverityLevel.WARNING: "yellow",
    SeverityLevel.INFORMATION: "bold white",
    SeverityLevel.HINT: "dim white",
}


class CheckLevel(str, Enum):
    """Minimum severity names accepted by ``lua-language-server --checklevel``."""

    ERROR = "Error"
    WARNING = "Warning"
    INFORMATION = "Information"
    HINT = "Hint"

    @property
    def severity(self) -> SeverityLevel:
        """Return the :class:`SeverityLevel` matching this threshold."""

        return SeverityLevel[self.name]


__all__ = ["SEVERITY_COLORS", "CheckLevel", "SeverityLevel", "UnknownSeverityError"]
