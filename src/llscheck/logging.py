# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing status messages written to standard error."""

from __future__ import annotations

from rich.text import Text

from .console import get_console_manager


def _print_line(msg: str | Text, *, style: str | None, use_color: bool) -> None:
    """Render ``msg`` to the stderr console using shared styling helpers.

    Args:
        msg: Plain message or pre-styled rich text.
        style: Rich style applied to the whole line when colour is active.
        use_color: Flag indicating whether ANSI colour output is desired.
    """

    console = get_console_manager().get(color=use_color, stderr=True)
    text = msg if isinstance(msg, Text) else Text(msg)
    if style and use_color:
        text.stylize(style)
    console.print(text)


def fail(msg: str | Text, *, use_color: bool = False) -> None:
    """Emit an error message.

    Args:
        msg: Message text; pre-styled :class:`~rich.text.Text` keeps its spans.
        use_color: Flag indicating whether ANSI colour output is desired.
    """

    _print_line(msg, style=None if isinstance(msg, Text) else "red", use_color=use_color)


__all__ = ["fail"]
