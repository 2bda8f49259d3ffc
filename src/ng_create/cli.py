"""Typer-based CLI for ng-create-with-config."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from .config import Config, ConfigError, load_config, save_config
from .initializer import run_init
from .runner import CommandFailedError

PROG_NAME = "ng-create-with-config"

app = typer.Typer(help="Create an Angular project with Tailwind, ESLint, Prettier, lint-staged and Husky configured.")
config_app = typer.Typer(help="Write the default ng-create-with-config configuration.")
console = Console()
err_console = Console(stderr=True)


class LogLevel(str, Enum):
    """Levels accepted by loguru."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _console_sink(message) -> None:
    err_console.print(str(message), end="", markup=False, highlight=False)


def _configure_logging(level: str, log_file: Path | None) -> None:
    logger.remove()
    logger.add(_console_sink, level=level, format="{level}: {message}")
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level="DEBUG")


@app.command()
def create(
    project_name: Optional[str] = typer.Argument(None, help="Name of the project directory to generate", show_default=False),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML configuration overriding the defaults"),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level", case_sensitive=False, help="Console logging level"
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write a debug log to this file"),
) -> None:
    """Generate PROJECT_NAME and wire up its lint and format tooling."""

    if not project_name:
        err_console.print(f"Usage: {PROG_NAME} <project-name>", markup=False)
        err_console.print("   or: python -m ng_create <project-name>", markup=False)
        raise typer.Exit(code=1)

    _configure_logging(log_level.value, log_file)
    try:
        settings = load_config(config)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=4)

    try:
        run_init(project_name, settings, base_dir=Path.cwd())
    except CommandFailedError as exc:
        logger.debug("Aborting after {!r} (status {})", exc.command_line, exc.returncode)
        err_console.print(f"[red]Failed to execute:[/red] {escape(exc.command_line)}")
        raise typer.Exit(code=1)


@config_app.command("init-config")
def init_config(
    path: Path = typer.Argument(..., writable=True, resolve_path=True),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default configuration to PATH."""

    if path.exists() and not force:
        err_console.print(f"[red]{escape(str(path))} already exists; pass --force to overwrite.[/red]")
        raise typer.Exit(code=1)
    save_config(Config(), path)
    console.print(f"[green]Wrote configuration to {escape(str(path))}[/green]")


if __name__ == "__main__":
    app()
