# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run ``lua-language-server --check`` and load the diagnosis it writes."""

from __future__ import annotations

import logging
import shlex
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from .models import Diagnosis, load_diagnosis
from .process_utils import run_command
from .severity import CheckLevel

LOGGER = logging.getLogger(__name__)

DEFAULT_EXECUTABLE: Final[str] = "lua-language-server"
DIAGNOSIS_FILENAME: Final[str] = "check.json"
TEMP_PREFIX: Final[str] = "llscheck-"
MISSING_EXECUTABLE_RETURNCODE: Final[int] = 127


class InvocationFailure(RuntimeError):
    """Raised when the language server fails without producing a diagnosis."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str | None) -> None:
        """Capture the failed command and its diagnostics.

        Args:
            command: Argument vector that was executed.
            returncode: Exit status reported by the process.
            stderr: Captured standard error text.
        """

        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        super().__init__(f"Command failed: {self.command_line}")

    @property
    def command_line(self) -> str:
        """Return the command as a shell-quoted string."""

        return shlex.join(self.command)


class InvocationOutcome(Enum):
    """Interpretation of a finished language server run."""

    DIAGNOSIS = "diagnosis"
    NO_DIAGNOSIS = "no-diagnosis"
    FAILED = "failed"


def resolve_invocation_outcome(returncode: int, artifact_exists: bool) -> InvocationOutcome:
    """Apply the artifact-first success policy.

    The language server exits non-zero whenever it reports problems, so the
    exit status alone cannot distinguish findings from crashes. An artifact
    always wins; only a non-zero exit with no artifact is a failure.

    Args:
        returncode: Exit status of the language server.
        artifact_exists: Whether the diagnosis file was written.

    Returns:
        InvocationOutcome: How the caller should treat the run.
    """

    if artifact_exists:
        return InvocationOutcome.DIAGNOSIS
    if returncode != 0:
        return InvocationOutcome.FAILED
    return InvocationOutcome.NO_DIAGNOSIS


@dataclass(frozen=True, slots=True)
class CheckInvocation:
    """Arguments for a single ``--check`` run."""

    workspace: Path
    checklevel: CheckLevel
    output_dir: Path
    configpath: Path | None = None
    executable: str = DEFAULT_EXECUTABLE

    @property
    def diagnosis_path(self) -> Path:
        """Return where the language server writes its JSON diagnosis."""

        return self.output_dir / DIAGNOSIS_FILENAME

    def build_command(self) -> list[str]:
        """Return the argument vector for this invocation."""

        command = [
            self.executable,
            "--check",
            str(self.workspace),
            "--checklevel",
            self.checklevel.value,
            "--check_format",
            "json",
            "--check_out_path",
            str(self.diagnosis_path),
            "--logpath",
            str(self.output_dir),
        ]
        if self.configpath is not None:
            command.extend(["--configpath", str(self.configpath)])
        return command


def check_workspace(
    workspace: Path | str,
    checklevel: CheckLevel | str = CheckLevel.WARNING,
    configpath: Path | str | None = None,
    *,
    executable: str = DEFAULT_EXECUTABLE,
    timeout: float | None = None,
) -> Diagnosis | None:
    """Run the language server against *workspace* and return its diagnosis.

    Each call writes into a fresh temporary directory, which is left for the
    operating system to reclaim.

    Args:
        workspace: Directory to check.
        checklevel: Minimum severity the language server should report.
        configpath: Optional ``.luarc.json`` style configuration file.
        executable: Language server executable name or absolute path.
        timeout: Optional limit in seconds; ``None`` waits indefinitely.

    Returns:
        Diagnosis | None: Parsed diagnosis, or ``None`` when the run succeeded
        without writing one.

    Raises:
        InvocationFailure: If the run failed and produced no diagnosis.
        MalformedDiagnosisError: If the diagnosis file cannot be parsed.
    """

    invocation = CheckInvocation(
        workspace=Path(workspace),
        checklevel=CheckLevel(checklevel),
        output_dir=Path(tempfile.mkdtemp(prefix=TEMP_PREFIX)),
        configpath=Path(configpath) if configpath is not None else None,
        executable=executable,
    )
    command = invocation.build_command()
    LOGGER.debug("running %s", shlex.join(command))

    try:
        completed = run_command(command, timeout=timeout)
    except FileNotFoundError as exc:
        raise InvocationFailure(command, MISSING_EXECUTABLE_RETURNCODE, str(exc)) from exc

    artifact = invocation.diagnosis_path
    outcome = resolve_invocation_outcome(completed.returncode, artifact.is_file())
    LOGGER.debug("exit status %d, outcome %s", completed.returncode, outcome.value)

    if outcome is InvocationOutcome.FAILED:
        raise InvocationFailure(command, completed.returncode, completed.stderr)
    if outcome is InvocationOutcome.NO_DIAGNOSIS:
        return None
    return load_diagnosis(artifact)


__all__ = [
    "CheckInvocation",
    "DEFAULT_EXECUTABLE",
    "DIAGNOSIS_FILENAME",
    "InvocationFailure",
    "InvocationOutcome",
    "check_workspace",
    "resolve_invocation_outcome",
]
