# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""llscheck CLI package exports."""

from __future__ import annotations

from .app import app, run

__all__ = ["app", "run"]
