# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deterministic ordering of diagnostics within a file."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Diagnostic
from .severity import SeverityLevel

DiagnosticSortKey = tuple[int, int, SeverityLevel]


def diagnostic_sort_key(diagnostic: Diagnostic) -> DiagnosticSortKey:
    """Return the ``(line, character, severity)`` key used to order diagnostics."""

    start = diagnostic.range.start
    return start.line, start.character, diagnostic.severity


def compare_diagnostics(x: Diagnostic, y: Diagnostic) -> bool:
    """Return ``True`` when *x* sorts strictly before *y*.

    Diagnostics are ordered by start line, then start character, then
    severity so errors precede warnings reported at the same position.

    Args:
        x: Left-hand diagnostic.
        y: Right-hand diagnostic.

    Returns:
        bool: ``True`` if *x* belongs before *y*.
    """

    return diagnostic_sort_key(x) < diagnostic_sort_key(y)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Return *diagnostics* in report order; equal keys keep their input order."""

    return sorted(diagnostics, key=diagnostic_sort_key)


__all__ = ["compare_diagnostics", "diagnostic_sort_key", "sort_diagnostics"]
