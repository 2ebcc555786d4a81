# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Human-friendly rendering of a language server diagnosis."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from rich.cells import cell_len

from .colorize import Colorizer, get_colorizer
from .models import Diagnosis, Diagnostic, Stats, parse_diagnosis
from .ordering import sort_diagnostics
from .paths import to_relative_display, uri_to_path
from .severity import SeverityLevel

MAX_PATH_COLUMN: Final[int] = 50
INDENT: Final[str] = "  "
GUTTER: Final[str] = "  "
SEPARATOR: Final[str] = " / "
NO_PROBLEMS_MESSAGE: Final[str] = "Diagnosis completed, no problems found"
PATH_COLOR: Final[str] = "blue"
LOCATION_COLOR: Final[str] = "white"
CODE_COLOR: Final[str] = "dim"
TOTAL_COLOR: Final[str] = "bold white"


@dataclass(frozen=True, slots=True)
class _FileSection:
    """Diagnostics for one file, already sorted, with its display names."""

    uri: str
    path: str
    display: str
    diagnostics: Sequence[Diagnostic]


def _plural(count: int, label: str, *, always: bool = False) -> str:
    suffix = "s" if always or count != 1 else ""
    return f"{count} {label}{suffix}"


def format_location(diagnostic: Diagnostic) -> str:
    """Return the 1-based ``line:col-endCol`` location of *diagnostic*.

    Ranges whose end sits on another line render as ``line:col-endLine:endCol``.
    """

    start = diagnostic.range.start
    end = diagnostic.range.end
    location = f"{start.line + 1}:{start.character + 1}-"
    if diagnostic.range.is_multiline and end.line is not None:
        return f"{location}{end.line + 1}:{end.character}"
    return f"{location}{end.character}"


def location_target(uri: str, diagnostic: Diagnostic) -> str:
    """Return the hyperlink target for a diagnostic location."""

    start = diagnostic.range.start
    return f"{uri}#L{start.line + 1}:{start.character + 1}"


def format_counts(
    counts: Mapping[SeverityLevel, int],
    colorizer: Colorizer,
    *,
    always_plural: bool = False,
) -> str:
    """Return ``"2 Errors / 1 Warning"`` style text for the non-zero *counts*."""

    parts = [
        colorizer.colorize(_plural(counts[level], level.label, always=always_plural), level.color)
        for level in SeverityLevel
        if counts.get(level, 0) > 0
    ]
    return SEPARATOR.join(parts)


def _collect_sections(diagnosis: Diagnosis) -> list[_FileSection]:
    sections: list[_FileSection] = []
    for uri, diagnostics in diagnosis.items():
        if not diagnostics:
            continue
        path = uri_to_path(uri)
        sections.append(
            _FileSection(
                uri=uri,
                path=path,
                display=to_relative_display(path),
                diagnostics=sort_diagnostics(diagnostics),
            ),
        )
    sections.sort(key=lambda section: (section.path, section.uri))
    return sections


def _render_message(message: str, column: int, *, dim: bool, colorizer: Colorizer) -> str:
    """Re-indent continuation lines of *message* so they start at *column*.

    Only ``\\n`` (and ``\\r\\n``) break lines; blank continuation lines stay empty.
    """

    indent = " " * column
    lines = [line.removesuffix("\r") for line in message.split("\n")]
    if dim:
        lines = [colorizer.colorize(line, SeverityLevel.HINT.color) for line in lines]
    head, *rest = lines
    return "\n".join([head, *(f"{indent}{line}" if line else "" for line in rest)])


def _render_section(
    section: _FileSection,
    path_width: int,
    counts: Counter[SeverityLevel],
    colorizer: Colorizer,
) -> list[str]:
    path_text = colorizer.hyperlink(colorizer.colorize(section.display, PATH_COLOR), section.uri)
    padding = " " * max(0, path_width - cell_len(section.display))
    lines = [f"{path_text}{padding}{GUTTER}{format_counts(counts, colorizer)}"]

    locations = [format_location(diagnostic) for diagnostic in section.diagnostics]
    location_width = max(cell_len(location) for location in locations)
    for diagnostic, location in zip(section.diagnostics, locations):
        severity = diagnostic.severity
        tag = f"[{severity.label}]"
        location_text = colorizer.hyperlink(
            colorizer.colorize(location, LOCATION_COLOR),
            location_target(section.uri, diagnostic),
        )
        location_padding = " " * (location_width - cell_len(location))
        prefix_width = cell_len(INDENT) + location_width + cell_len(GUTTER)
        message_column = prefix_width + cell_len(tag) + 1 + cell_len(diagnostic.code) + 2
        message = _render_message(
            diagnostic.message,
            message_column,
            dim=severity is SeverityLevel.HINT,
            colorizer=colorizer,
        )
        lines.append(
            f"{INDENT}{location_text}{location_padding}{GUTTER}"
            f"{colorizer.colorize(tag, severity.color)} "
            f"{colorizer.colorize(diagnostic.code, CODE_COLOR)}: {message}",
        )
    return lines


def generate_summary(stats: Stats, colorizer: Colorizer) -> str:
    """Return the trailing summary line for *stats*."""

    if stats.total == 0:
        return NO_PROBLEMS_MESSAGE
    counts = format_counts(stats.per_severity, colorizer, always_plural=True)
    total = colorizer.colorize(f"Total {stats.total}", TOTAL_COLOR)
    return f"{total}: {counts} in {stats.files} files"


def generate_report(
    diagnosis: Mapping[str, Sequence[Diagnostic | Mapping[str, object]]],
    *,
    colorizer: Colorizer | None = None,
) -> tuple[str, Stats]:
    """Render *diagnosis* as an aligned report and compute its statistics.

    Files are listed by path, each with a header showing its per-severity
    breakdown followed by one line per diagnostic in position order. The same
    input and colorizer always produce the same text.

    Args:
        diagnosis: Mapping of file URI to diagnostics; plain mappings are
            validated as if they had been read from ``check.json``.
        colorizer: Colour policy to apply. Defaults to the process-wide
            colorizer installed by :func:`~llscheck.colorize.setup_colorize`.

    Returns:
        tuple[str, Stats]: Report text (without a trailing newline) and counts.

    Raises:
        MalformedDiagnosisError: If *diagnosis* does not have the expected shape.
    """

    painter = colorizer if colorizer is not None else get_colorizer()
    sections = _collect_sections(parse_diagnosis(diagnosis))
    path_width = min(
        MAX_PATH_COLUMN,
        max((cell_len(section.display) for section in sections), default=0),
    )

    totals: Counter[SeverityLevel] = Counter()
    lines: list[str] = []
    for section in sections:
        counts = Counter(diagnostic.severity for diagnostic in section.diagnostics)
        totals.update(counts)
        if lines:
            lines.append("")
        lines.extend(_render_section(section, path_width, counts, painter))

    stats = Stats(
        total=sum(totals.values()),
        files=len(sections),
        per_severity=dict(totals),
    )
    if stats.total:
        lines.append("")
    lines.append(generate_summary(stats, painter))
    return "\n".join(lines), stats


__all__ = [
    "MAX_PATH_COLUMN",
    "NO_PROBLEMS_MESSAGE",
    "format_counts",
    "format_location",
    "generate_report",
    "generate_summary",
    "location_target",
]
