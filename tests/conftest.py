from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from ng_create.runner import CommandFailedError


def emulate_command(command: Sequence[str], cwd: Path) -> None:
    """Reproduce the on-disk effects of ``ng new`` and ``npx husky init``."""

    args = list(command)
    if args[1:2] == ["new"]:
        project_dir = cwd / args[2]
        (project_dir / "src").mkdir(parents=True)
        (project_dir / "src" / "styles.scss").write_text("/* You can add global styles to this file */\n")
        manifest = {
            "name": args[2],
            "version": "0.0.0",
            "scripts": {"ng": "ng", "start": "ng serve", "build": "ng build", "lint": "echo placeholder"},
            "private": True,
        }
        (project_dir / "package.json").write_text(json.dumps(manifest, indent=2))
    elif args == ["npx", "husky", "init"]:
        (cwd / ".husky").mkdir(exist_ok=True)
        (cwd / ".husky" / "pre-commit").write_text("npm test\n")
        manifest_path = cwd / "package.json"
        manifest = json.loads(manifest_path.read_text())
        manifest["scripts"]["prepare"] = "husky"
        manifest_path.write_text(json.dumps(manifest, indent=2))


class FakeRunner:
    """Records every command and fails on the first one starting with ``fail_on``."""

    def __init__(self, fail_on: Optional[str] = None) -> None:
        self.fail_on = fail_on
        self.calls: List[Tuple[List[str], Path]] = []

    @property
    def commands(self) -> List[str]:
        return [" ".join(command) for command, _ in self.calls]

    def run(self, command: Sequence[str], cwd: Path) -> None:
        self.calls.append((list(command), cwd))
        if self.fail_on and " ".join(command).startswith(self.fail_on):
            raise CommandFailedError(command, 1)
        emulate_command(command, cwd)


@pytest.fixture()
def runner_factory() -> Callable[..., FakeRunner]:
    return FakeRunner


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def fake_subprocess(monkeypatch: pytest.MonkeyPatch):
    """Replace ``subprocess.run`` inside the runner; returns the list of recorded argv."""

    state = {"calls": [], "fail_on": None, "missing": None}

    def _run(argv, cwd=None, check=False):
        state["calls"].append(list(argv))
        line = " ".join(argv)
        if state["missing"] and argv[0] == state["missing"]:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        if state["fail_on"] and line.startswith(state["fail_on"]):
            return subprocess.CompletedProcess(argv, 1)
        emulate_command(argv, Path(cwd))
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setattr("ng_create.runner.subprocess.run", _run)
    return state
