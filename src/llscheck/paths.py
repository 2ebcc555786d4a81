# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for turning language server URIs into displayable paths."""

from __future__ import annotations

import os
import re
from os import PathLike
from pathlib import Path
from typing import Final
from urllib.parse import unquote

_Pathish = str | PathLike[str] | Path

# ``file://`` plus an optional extra slash in front of a drive letter
# (``file:///C:/x``) or an absolute POSIX path (``file:///x``).
_FILE_SCHEME: Final[re.Pattern[str]] = re.compile(r"^file:///?([A-Za-z]?:?/)")


def uri_to_path(uri: str) -> str:
    """Return the filesystem path encoded in a ``file://`` URI.

    Exactly one layer of ``%XX`` escapes is decoded, so ``%2520`` becomes a
    literal ``%20``. No existence check or path cleaning is performed.

    Args:
        uri: URI as emitted by the language server.

    Returns:
        str: Decoded filesystem path.
    """

    stripped = _FILE_SCHEME.sub(r"\1", uri, count=1)
    return unquote(stripped, errors="surrogateescape")


def to_relative_display(path: _Pathish, *, base_dir: _Pathish | None = None) -> str:
    """Return ``path`` relative to ``base_dir`` for display purposes.

    Args:
        path: Absolute filesystem path.
        base_dir: Directory used to relativise the path. Defaults to the
            current working directory.

    Returns:
        str: Relative path when one can be computed, otherwise ``path`` unchanged.
    """

    raw = os.fspath(path)
    if not os.path.isabs(raw):
        return raw
    base = os.fspath(base_dir) if base_dir is not None else os.getcwd()
    try:
        return os.path.relpath(raw, base)
    except ValueError:
        return raw


__all__ = ["to_relative_display", "uri_to_path"]
