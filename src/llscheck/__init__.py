# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Human-friendly reports for ``lua-language-server --check`` diagnoses."""

from __future__ import annotations

from .checker import InvocationFailure, check_workspace
from .colorize import Colorizer, ColorMode, get_colorizer, setup_colorize
from .models import Diagnosis, Diagnostic, MalformedDiagnosisError, Stats, load_diagnosis, parse_diagnosis
from .ordering import compare_diagnostics
from .paths import to_relative_display, uri_to_path
from .report import generate_report
from .severity import CheckLevel, SeverityLevel, UnknownSeverityError

__all__ = [
    "CheckLevel",
    "ColorMode",
    "Colorizer",
    "Diagnosis",
    "Diagnostic",
    "InvocationFailure",
    "MalformedDiagnosisError",
    "SeverityLevel",
    "Stats",
    "UnknownSeverityError",
    "check_workspace",
    "compare_diagnostics",
    "generate_report",
    "get_colorizer",
    "load_diagnosis",
    "parse_diagnosis",
    "setup_colorize",
    "to_relative_display",
    "uri_to_path",
]
