"""Shared models for pipeline progress and console output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class MessageLevel(str, Enum):
    """Semantic level of a status line."""

    PROGRESS = "progress"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


def decorate(message: str, level: MessageLevel = MessageLevel.PROGRESS) -> str:
    """Return ``message`` wrapped in rich markup for ``level``."""

    if level == MessageLevel.PROGRESS:
        return f"[blue]==>[/blue] [green]{message}[/green]"
    if level == MessageLevel.SUCCESS:
        return f"[green]{message}[/green]"
    if level == MessageLevel.WARNING:
        return f"[yellow]Warning:[/yellow] {message}"
    return f"[red]{message}[/red]"


@dataclass(slots=True)
class StepRecord:
    """A completed pipeline step."""

    name: str
    command: Optional[List[str]] = None
    path: Optional[Path] = None


@dataclass(slots=True)
class InitResult:
    """Outcome of a successful initialization run."""

    project_name: str
    project_dir: Path
    steps: List[StepRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def commands(self) -> List[List[str]]:
        return [step.command for step in self.steps if step.command is not None]

    @property
    def written_files(self) -> List[Path]:
        return [step.path for step in self.steps if step.path is not None]

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


__all__ = [
    "MessageLevel",
    "decorate",
    "StepRecord",
    "InitResult",
]
