# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnosis data models and the JSON parse boundary."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .severity import SeverityLevel, UnknownSeverityError


class MalformedDiagnosisError(ValueError):
    """Raised when a diagnosis artifact is not valid JSON or has the wrong shape."""


class Position(BaseModel):
    """Zero-based line/character offset."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class EndPosition(BaseModel):
    """End of a range; the language server usually omits the line."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    line: int | None = Field(default=None, ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    """Source span covered by a diagnostic."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    start: Position
    end: EndPosition

    @property
    def is_multiline(self) -> bool:
        """Return ``True`` when the end position sits on a different line."""

        return self.end.line is not None and self.end.line != self.start.line


class Diagnostic(BaseModel):
    """Single diagnostic emitted by ``lua-language-server --check``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str
    message: str
    range: Range
    severity: SeverityLevel

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> SeverityLevel:
        try:
            return SeverityLevel.coerce(value)
        except UnknownSeverityError as exc:
            raise ValueError(str(exc)) from exc


Diagnosis = dict[str, list[Diagnostic]]

_DIAGNOSIS_ADAPTER: TypeAdapter[Diagnosis] = TypeAdapter(Diagnosis)


class Stats(BaseModel):
    """Aggregate counts derived from a rendered diagnosis."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    files: int = 0
    per_severity: dict[SeverityLevel, int] = Field(default_factory=dict)

    def __getitem__(self, level: SeverityLevel | int) -> int:
        return self.per_severity.get(SeverityLevel.coerce(level), 0)


def parse_diagnosis(payload: object) -> Diagnosis:
    """Validate a decoded ``check.json`` document.

    Args:
        payload: Object decoded from JSON, or an already-built mapping of
            URIs to diagnostics.

    Returns:
        Diagnosis: Mapping of file URI to its parsed diagnostics.

    Raises:
        MalformedDiagnosisError: If the document does not match the expected
            ``{uri: [diagnostic, ...]}`` shape or uses an unknown severity.
    """

    if not isinstance(payload, Mapping):
        raise MalformedDiagnosisError(
            f"diagnosis must be a JSON object, got {type(payload).__name__}",
        )
    try:
        return _DIAGNOSIS_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise MalformedDiagnosisError(f"invalid diagnosis: {exc}") from exc


def load_diagnosis(path: Path) -> Diagnosis:
    """Read and validate the diagnosis artifact stored at *path*.

    Args:
        path: Location of the JSON artifact written by the language server.

    Returns:
        Diagnosis: Parsed diagnosis mapping.

    Raises:
        MalformedDiagnosisError: If the file is not valid JSON or has the wrong shape.
    """

    content = path.read_text(encoding="utf-8")
    try:
        payload: Any = json.loads(content)
    except json.JSONDecodeError as exc:
        raise MalformedDiagnosisError(f"{path}: invalid JSON: {exc}") from exc
    return parse_diagnosis(payload)


__all__ = [
    "Diagnosis",
    "Diagnostic",
    "EndPosition",
    "MalformedDiagnosisError",
    "Position",
    "Range",
    "Stats",
    "load_diagnosis",
    "parse_diagnosis",
]
