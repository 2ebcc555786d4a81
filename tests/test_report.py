# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnosis report rendering."""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from llscheck.colorize import Colorizer, setup_colorize
from llscheck.models import MalformedDiagnosisError, parse_diagnosis
from llscheck.report import MAX_PATH_COLUMN, format_location, generate_report
from llscheck.severity import SeverityLevel

DiagnosisPayload = dict[str, list[dict[str, Any]]]
DiagnosticFactory = Callable[..., dict[str, Any]]


def test_empty_diagnosis_reports_no_problems() -> None:
    report, stats = generate_report({})
    assert stats.total == 0
    assert stats.files == 0
    assert "no problems found" in report


def test_stats_for_single_file(sample_diagnosis: DiagnosisPayload) -> None:
    _, stats = generate_report(sample_diagnosis)
    assert stats.total == 2
    assert stats.files == 1
    assert stats[SeverityLevel.ERROR] == 1
    assert stats[SeverityLevel.WARNING] == 1
    assert stats[SeverityLevel.INFORMATION] == 0
    assert stats[SeverityLevel.HINT] == 0
    assert stats.total == sum(stats.per_severity.values())


def test_plain_report_layout(sample_diagnosis: DiagnosisPayload) -> None:
    report, _ = generate_report(sample_diagnosis)
    assert report == (
        "test/main.lua  1 Error / 1 Warning\n"
        "  1:7-9  [Warning] unused-local: Unused local variable 'foo'\n"
        "  2:1-3  [Error] undefined-global: Undefined global 'bar'\n"
        "\n"
        "Total 2: 1 Errors / 1 Warnings in 1 files"
    )


def test_diagnostic_lines_use_one_based_positions(sample_diagnosis: DiagnosisPayload) -> None:
    report, _ = generate_report(sample_diagnosis)
    assert re.search(r"\s+1:7-9\s+\[Warning\] unused-local", report)
    assert re.search(r"\s+2:1-3\s+\[Error\] undefined-global", report)
    assert "Total 2: 1 Errors / 1 Warnings in 1 files" in report


def test_colored_report(sample_diagnosis: DiagnosisPayload, file_uri: Callable[[str], str]) -> None:
    setup_colorize(True)
    report, _ = generate_report(sample_diagnosis)

    uri = file_uri("test/main.lua")
    assert "\x1b[34mtest/main.lua" in report
    assert "\x1b[33m[Warning]" in report
    assert "\x1b[31m[Error]" in report
    assert "\x1b[0m" in report
    assert f"\x1b]8;;{uri}\x1b\\" in report
    assert f"\x1b]8;;{uri}#L1:7\x1b\\" in report


def test_explicit_colorizer_overrides_process_state(sample_diagnosis: DiagnosisPayload) -> None:
    report, _ = generate_report(sample_diagnosis, colorizer=Colorizer(enabled=True))
    assert "\x1b[" in report
    plain, _ = generate_report(sample_diagnosis)
    assert "\x1b" not in plain


def test_multiline_messages_are_reindented(
    make_diagnostic: DiagnosticFactory,
    file_uri: Callable[[str], str],
) -> None:
    diagnosis = {
        file_uri("test/main.lua"): [
            make_diagnostic(
                "type-mismatch",
                "Cannot assign `string` to `number`.\nExpected: number\nGot: string",
                severity=1,
            ),
        ],
    }
    report, _ = generate_report(diagnosis)

    lines = report.splitlines()
    first = next(line for line in lines if "Cannot assign" in line)
    column = first.index("Cannot assign")
    assert f"{' ' * column}Expected: number" in lines
    assert f"{' ' * column}Got: string" in lines


def test_messages_only_break_on_newlines(
    make_diagnostic: DiagnosticFactory,
    file_uri: Callable[[str], str],
) -> None:
    diagnosis = {
        file_uri("test/main.lua"): [
            make_diagnostic("x", "form\x0cfeed and separator"),
            make_diagnostic("y", "windows\r\nline", line=1),
        ],
    }
    report, _ = generate_report(diagnosis)

    assert "[Warning] x: form\x0cfeed and separator\n" in report
    assert "[Warning] y: windows\n" in report
    assert "\r" not in report
    column = report.split("\n")[2].index("windows")
    assert f"\n{' ' * column}line\n" in report


def test_blank_continuation_lines_have_no_trailing_spaces(
    make_diagnostic: DiagnosticFactory,
    file_uri: Callable[[str], str],
) -> None:
    diagnosis = {file_uri("test/main.lua"): [make_diagnostic("x", "first\n\nthird")]}
    report, _ = generate_report(diagnosis)

    assert "[Warning] x: first\n\n" in report
    assert all(line == line.rstrip() for line in report.split("\n"))


def test_files_are_ordered_by_decoded_absolute_path(
    make_diagnostic: DiagnosticFactory,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    workdir = tmp_path / "w"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    outside = f"file://{tmp_path}/a/x.lua"
    inside = f"file://{workdir}/-x.lua"
    tilde = f"file://{workdir}/b%7Ec.lua"
    dash = f"file://{workdir}/b-c.lua"
    diagnosis = {uri: [make_diagnostic("x", "y")] for uri in (tilde, inside, dash, outside)}

    report, _ = generate_report(diagnosis)

    # Relative order would put "-x.lua" before "../a/x.lua"; raw URI order
    # would put "b%7Ec.lua" before "b-c.lua".
    headers = [line.split("  ")[0] for line in report.split("\n") if line.endswith("1 Warning")]
    assert headers == [os.path.join("..", "a", "x.lua"), "-x.lua", "b-c.lua", "b~c.lua"]


def test_same_position_orders_error_first(
    make_diagnostic: DiagnosticFactory,
    file_uri: Callable[[str], str],
) -> None:
    diagnosis = {
        file_uri("test/main.lua"): [
            make_diagnostic("warning-code", "Warning message", severity=2),
            make_diagnostic("error-code", "Error message", severity=1),
        ],
    }
    report, stats = generate_report(diagnosis)
    assert stats.total == 2
    assert stats[1] == 1
    assert stats[2] == 1
    assert report.index("error-code") < report.index("warning-code")


def test_multiple_files_are_sorted_and_aligned(
    make_diagnostic: DiagnosticFactory,
    file_uri: Callable[[str], str],
) -> None:
    diagnosis = {
        file_uri("test/longer/b.lua"): [make_diagnostic("undefined-global", "Undefined", severity=1)],
        file_uri("test/a.lua"): [make_diagnostic("unused-local", "Unused", severity=2)],
    }
    report, stats = generate_report(diagnosis)

    assert stats.total == 2
    assert stats.files == 2
    assert report.index("test/a.lua") < report.index("test/longer/b.lua")
    width = len("test/longer/b.lua")
    assert f"{'test/a.lua'.ljust(width)}  1 Warning\n" in report
    assert "test/longer/b.lua  1 Error\n" in report
    assert report.endswith("Total 2: 1 Errors / 1 Warnings in 2 files")


def test_files_without_diagnostics_are_skipped(
    make_diagnostic: DiagnosticFactory,
    file_uri: Callable[[str], str],
) -> None:
    diagnosis = {
        file_uri("test/clean.lua"): [],
        file_uri("test/dirty.lua"): [make_diagnostic("x", "y", severity=3)],
    }
    report, stats = generate_report(diagnosis)
    assert stats.files == 1
    assert "clean.lua" not in report
    assert "1 Information\n" in report
    assert "1 Informations in 1 files" in report


def test_path_column_is_capped(make_diagnostic: DiagnosticFactory, file_uri: Callable[[str], str]) -> None:
    long_name = "test/" + "d" * 70 + ".lua"
    diagnosis = {
        file_uri(long_name): [make_diagnostic("x", "y")],
        file_uri("test/s.lua"): [make_diagnostic("x", "y")],
    }
    report, _ = generate_report(diagnosis)
    assert f"{'test/s.lua'.ljust(MAX_PATH_COLUMN)}  1 Warning" in report
    assert f"{long_name}  1 Warning" in report


def test_location_padding_within_file(make_diagnostic: DiagnosticFactory, file_uri: Callable[[str], str]) -> None:
    diagnosis = {
        file_uri("test/main.lua"): [
            make_diagnostic("short", "a", line=0, character=0, end_character=1),
            make_diagnostic("long", "b", line=119, character=10, end_character=20),
        ],
    }
    report, _ = generate_report(diagnosis)
    assert "  1:1-1      [Warning] short: a" in report
    assert "  120:11-20  [Warning] long: b" in report


def test_multiline_range_location(make_diagnostic: DiagnosticFactory) -> None:
    entry = make_diagnostic("x", "y", line=2, character=0, end_character=4)
    entry["range"]["end"]["line"] = 4
    diagnostic = parse_diagnosis({"file:///a.lua": [entry]})["file:///a.lua"][0]
    assert format_location(diagnostic) == "3:1-5:4"


def test_hint_messages_are_dimmed(make_diagnostic: DiagnosticFactory, file_uri: Callable[[str], str]) -> None:
    diagnosis = {file_uri("test/main.lua"): [make_diagnostic("hint-code", "just a hint", severity=4)]}
    report, _ = generate_report(diagnosis, colorizer=Colorizer(enabled=True))
    assert "\x1b[2;37mjust a hint\x1b[0m" in report


def test_report_is_deterministic(sample_diagnosis: DiagnosisPayload) -> None:
    setup_colorize(True)
    assert generate_report(sample_diagnosis) == generate_report(sample_diagnosis)


def test_unknown_severity_fails_loudly(make_diagnostic: DiagnosticFactory) -> None:
    with pytest.raises(MalformedDiagnosisError):
        generate_report({"file:///a.lua": [make_diagnostic("x", "y", severity=0)]})
