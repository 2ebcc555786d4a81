# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from ..checker import DEFAULT_EXECUTABLE, InvocationFailure, check_workspace
from ..colorize import Colorizer, ColorMode, setup_colorize
from ..config import CheckConfig, ConfigError
from ..logging import fail
from ..models import MalformedDiagnosisError
from ..report import generate_report
from ..severity import CheckLevel
from .shared import (
    EXIT_OK,
    EXIT_PROBLEMS,
    CLIError,
    describe_invocation_failure,
    enable_verbose_logging,
)

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="llscheck",
    help="Generate a LuaLS diagnosis report and print to human-friendly format.",
    pretty_exceptions_enable=False,
)


def run_check(config: CheckConfig, colorizer: Colorizer) -> int:
    """Check the configured workspace, print the report and return the exit status.

    Args:
        config: Validated run configuration.
        colorizer: Colour policy applied to the report.

    Returns:
        int: ``0`` when no problems were found, ``1`` otherwise.

    Raises:
        CLIError: If the language server fails or writes a malformed diagnosis.
    """

    try:
        diagnosis = check_workspace(
            config.workspace,
            config.checklevel,
            config.configpath,
            executable=config.executable,
            timeout=config.timeout,
        )
    except InvocationFailure as exc:
        raise CLIError(describe_invocation_failure(exc)) from exc
    except MalformedDiagnosisError as exc:
        raise CLIError(f"Malformed diagnosis: {exc}") from exc

    if diagnosis is None:
        LOGGER.debug("no diagnosis written for %s", config.workspace)
        return EXIT_OK

    report, stats = generate_report(diagnosis, colorizer=colorizer)
    typer.echo(report, color=colorizer.enabled)
    return EXIT_PROBLEMS if stats.total else EXIT_OK


@app.command()
def check(
    workspace: Annotated[
        Path,
        typer.Argument(help="The workspace to check.", exists=True),
    ] = Path("."),
    checklevel: Annotated[
        CheckLevel,
        typer.Option(
            "--checklevel",
            help="The minimum level of diagnostic that should be logged.",
            case_sensitive=False,
        ),
    ] = CheckLevel.WARNING,
    configpath: Annotated[
        Path | None,
        typer.Option(
            "--configpath",
            help="Path to a LuaLS config file (defaults to ./.luarc.json when present).",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    color: Annotated[
        ColorMode,
        typer.Option("--color", help="When to add color and hyperlinks to output."),
    ] = ColorMode.AUTO,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Do not add color to output."),
    ] = False,
    executable: Annotated[
        str,
        typer.Option(
            "--executable",
            help="lua-language-server executable to run.",
            envvar="LLSCHECK_EXECUTABLE",
        ),
    ] = DEFAULT_EXECUTABLE,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Abort the check after this many seconds."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log the executed command to stderr."),
    ] = False,
) -> None:
    """Check WORKSPACE with lua-language-server and print a diagnosis report."""

    if verbose:
        enable_verbose_logging()
    try:
        config = CheckConfig.build(
            workspace=workspace,
            checklevel=checklevel,
            configpath=configpath,
            color=ColorMode.NEVER if no_color else color,
            executable=executable,
            timeout=timeout,
        )
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    colorizer = setup_colorize(config.color)
    try:
        status = run_check(config, colorizer)
    except CLIError as exc:
        fail(exc.message, use_color=colorizer.enabled)
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=status)


def run() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "check", "run", "run_check"]
