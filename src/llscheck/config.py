# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for a single ``llscheck`` run."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .checker import DEFAULT_EXECUTABLE
from .colorize import ColorMode
from .severity import CheckLevel

DEFAULT_CONFIG_FILENAME: Final[str] = ".luarc.json"


class ConfigError(ValueError):
    """Raised when configuration input is invalid."""


def default_configpath(cwd: Path | None = None) -> Path | None:
    """Return the absolute ``.luarc.json`` in *cwd* when one exists."""

    candidate = (Path.cwd() if cwd is None else cwd) / DEFAULT_CONFIG_FILENAME
    return candidate.absolute() if candidate.is_file() else None


class CheckConfig(BaseModel):
    """Validated inputs for checking a workspace and rendering the report."""

    model_config = ConfigDict(frozen=True)

    workspace: Path = Field(default_factory=lambda: Path("."))
    checklevel: CheckLevel = CheckLevel.WARNING
    configpath: Path | None = None
    color: ColorMode = ColorMode.AUTO
    executable: str = Field(default=DEFAULT_EXECUTABLE, min_length=1)
    timeout: float | None = Field(default=None, gt=0)

    @field_validator("workspace", "configpath")
    @classmethod
    def _require_existing(cls, value: Path | None) -> Path | None:
        if value is not None and not value.exists():
            raise ValueError(f"'{value}': No such file or directory")
        return value

    @classmethod
    def build(cls, **values: object) -> CheckConfig:
        """Return a validated configuration, filling in the default config file.

        Args:
            **values: Field values; ``configpath`` falls back to
                :func:`default_configpath` when omitted or ``None``.

        Returns:
            CheckConfig: Validated configuration.

        Raises:
            ConfigError: If any value is invalid.
        """

        if values.get("configpath") is None:
            values["configpath"] = default_configpath()
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            messages = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
            )
            raise ConfigError(messages) from exc


__all__ = ["CheckConfig", "ConfigError", "DEFAULT_CONFIG_FILENAME", "default_configpath"]
