"""Spawning of external commands."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

from loguru import logger


class CommandFailedError(Exception):
    """Raised when an external command cannot be spawned or exits non-zero."""

    def __init__(self, command: Sequence[str], returncode: int | None = None) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(f"Failed to execute: {self.command_line}")

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


class CommandRunner(Protocol):
    """Runs one command to completion inside ``cwd``."""

    def run(self, command: Sequence[str], cwd: Path) -> None:
        ...


def _resolve_executable(name: str) -> str:
    # npm, npx and ng ship as .cmd shims on Windows, which CreateProcess does not search for.
    if os.name == "nt":
        return shutil.which(name) or name
    return name


class SubprocessRunner:
    """Run commands with the parent's standard streams attached."""

    def run(self, command: Sequence[str], cwd: Path) -> None:
        argv = [_resolve_executable(command[0]), *command[1:]]
        logger.debug("Running {} in {}", shlex.join(command), cwd)
        try:
            completed = subprocess.run(argv, cwd=cwd, check=False)
        except OSError as exc:
            logger.debug("Could not spawn {}: {}", command[0], exc)
            raise CommandFailedError(command) from exc
        if completed.returncode != 0:
            logger.debug("{} exited with status {}", command[0], completed.returncode)
            raise CommandFailedError(command, completed.returncode)


__all__ = [
    "CommandFailedError",
    "CommandRunner",
    "SubprocessRunner",
]
