# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from llscheck.colorize import setup_colorize


def _diagnostic(
    code: str,
    message: str,
    *,
    line: int = 0,
    character: int = 0,
    end_character: int = 5,
    severity: int = 2,
) -> dict[str, Any]:
    """Return a diagnostic shaped like a ``check.json`` entry."""

    return {
        "code": code,
        "message": message,
        "range": {
            "start": {"line": line, "character": character},
            "end": {"character": end_character},
        },
        "severity": severity,
    }


def _file_uri(relative: str) -> str:
    """Return the ``file://`` URI of *relative* resolved against the cwd."""

    return "file://" + os.path.abspath(relative)


@pytest.fixture(autouse=True)
def _plain_colorizer(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test with colour disabled and restore it afterwards."""

    monkeypatch.delenv("NO_COLOR", raising=False)
    setup_colorize(False)
    yield
    setup_colorize(False)


@pytest.fixture
def sample_diagnosis() -> dict[str, list[dict[str, Any]]]:
    """Return one file holding a warning and an error."""

    return {
        _file_uri("test/main.lua"): [
            _diagnostic(
                "unused-local",
                "Unused local variable 'foo'",
                line=0,
                character=6,
                end_character=9,
                severity=2,
            ),
            _diagnostic(
                "undefined-global",
                "Undefined global 'bar'",
                line=1,
                character=0,
                end_character=3,
                severity=1,
            ),
        ],
    }


@pytest.fixture
def make_diagnostic() -> Callable[..., dict[str, Any]]:
    """Return a factory building ``check.json`` diagnostic entries."""

    return _diagnostic


@pytest.fixture
def file_uri() -> Callable[[str], str]:
    """Return a helper converting cwd-relative paths to ``file://`` URIs."""

    return _file_uri
