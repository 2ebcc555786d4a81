# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Terminal colour and hyperlink policy."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, TextIO

from rich.color import ColorSystem
from rich.style import Style

from .console import detect_tty

NO_COLOR_ENV: Final[str] = "NO_COLOR"
OSC: Final[str] = "\033]"
ST: Final[str] = "\033\\"


class ColorMode(str, Enum):
    """Tri-state colour preference supplied by the caller."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def no_color_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when ``NO_COLOR`` is set to a non-empty value."""

    env = os.environ if environ is None else environ
    return bool(env.get(NO_COLOR_ENV, ""))


@dataclass(frozen=True, slots=True)
class Colorizer:
    """Apply ANSI styles and OSC-8 hyperlinks when enabled, pass text through otherwise."""

    enabled: bool = False

    @classmethod
    def from_mode(
        cls,
        mode: ColorMode | str,
        *,
        stream: TextIO | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Colorizer:
        """Resolve a colour *mode* against the terminal and environment.

        ``NO_COLOR`` disables colour even when it is forced on; ``auto`` also
        requires *stream* (stdout by default) to be a terminal.

        Args:
            mode: Requested colour behaviour.
            stream: Stream whose TTY status drives ``auto`` detection.
            environ: Environment mapping consulted for ``NO_COLOR``.

        Returns:
            Colorizer: Colorizer reflecting the resolved policy.
        """

        resolved = ColorMode(mode)
        if resolved is ColorMode.NEVER or no_color_requested(environ):
            return cls(enabled=False)
        if resolved is ColorMode.ALWAYS:
            return cls(enabled=True)
        return cls(enabled=detect_tty(stream))

    def colorize(self, text: str, color: str) -> str:
        """Wrap *text* in the SGR sequence for the rich style *color*."""

        if not self.enabled or not text:
            return text
        return Style.parse(color).render(text, color_system=ColorSystem.STANDARD)

    def hyperlink(self, text: str, target: str) -> str:
        """Wrap *text* in an OSC-8 hyperlink pointing at *target*."""

        if not self.enabled:
            return text
        return f"{OSC}8;;{target}{ST}{text}{OSC}8;;{ST}"


_ACTIVE: Colorizer = Colorizer(enabled=False)


def setup_colorize(
    mode: ColorMode | str | bool = ColorMode.AUTO,
    *,
    stream: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> Colorizer:
    """Install and return the process-wide colorizer.

    Args:
        mode: Colour mode; booleans map to ``always``/``never``.
        stream: Stream used for ``auto`` TTY detection.
        environ: Environment mapping consulted for ``NO_COLOR``.

    Returns:
        Colorizer: The newly active colorizer.
    """

    global _ACTIVE
    if isinstance(mode, bool):
        mode = ColorMode.ALWAYS if mode else ColorMode.NEVER
    _ACTIVE = Colorizer.from_mode(mode, stream=stream, environ=environ)
    return _ACTIVE


def get_colorizer() -> Colorizer:
    """Return the colorizer installed by :func:`setup_colorize`."""

    return _ACTIVE


__all__ = [
    "ColorMode",
    "Colorizer",
    "NO_COLOR_ENV",
    "get_colorizer",
    "no_color_requested",
    "setup_colorize",
]
