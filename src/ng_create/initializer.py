"""High level project initialization routine."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from .config import Config, DependencyGroup
from .manifest import load_manifest, with_lint_staged, with_scripts, write_manifest
from .models import InitResult, MessageLevel, StepRecord, decorate
from .rendering import (
    render_eslint_config,
    render_postcss_config,
    render_pre_commit_hook,
    render_prettier_config,
    render_prettier_ignore,
    render_stylesheet,
)
from .runner import CommandRunner, SubprocessRunner

console = Console()

DEFAULT_PREFIX = "app"


def build_new_command(project_name: str, config: Config) -> List[str]:
    """Return the ``ng new`` argv for ``project_name``."""

    project = config.project
    command = [*config.tool_command("ng"), "new", project_name]
    command.append("--routing" if project.routing else "--routing=false")
    command.append(f"--style={project.style}")
    if project.skip_git:
        command.append("--skip-git")
    if project.prefix != DEFAULT_PREFIX:
        command.append(f"--prefix={project.prefix}")
    return command


def build_install_command(group: DependencyGroup, config: Config) -> List[str]:
    command = [*config.tool_command("npm"), "install", *group.packages]
    if group.dev:
        command.append("--save-dev")
    return command


def _run(runner: CommandRunner, command: List[str], cwd: Path, result: InitResult, name: str) -> None:
    runner.run(command, cwd)
    result.steps.append(StepRecord(name=name, command=command))
    logger.info("Finished {}", name)


def _write(path: Path, content: str, result: InitResult, name: str) -> None:
    path.write_text(content, encoding="utf-8", newline="\n")
    result.steps.append(StepRecord(name=name, path=path))
    logger.info("Wrote {}", path)


def generate_project(
    project_name: str, config: Config, *, base_dir: Path, runner: CommandRunner, result: InitResult
) -> Path:
    """Run the generator in ``base_dir`` and return the new project directory."""

    _run(runner, build_new_command(project_name, config), base_dir, result, "generate project")
    return base_dir / project_name


def install_dependencies(project_dir: Path, config: Config, *, runner: CommandRunner, result: InitResult) -> None:
    for group in config.dependencies:
        _run(runner, build_install_command(group, config), project_dir, result, f"install {group.name}")
        for follow_up in group.follow_up:
            command = config.expand_command(follow_up)
            _run(runner, command, project_dir, result, f"set up {group.name}")


def configure_tailwind(project_dir: Path, config: Config, *, result: InitResult) -> None:
    _write(project_dir / ".postcssrc.json", render_postcss_config(), result, "postcss config")
    stylesheet = project_dir / "src" / f"styles.{config.project.style}"
    _write(stylesheet, render_stylesheet(config), result, "global stylesheet")


def configure_prettier(project_dir: Path, config: Config, *, result: InitResult) -> None:
    _write(project_dir / ".prettierrc", render_prettier_config(config), result, "prettier config")
    _write(project_dir / ".prettierignore", render_prettier_ignore(config), result, "prettier ignore")


def configure_eslint(project_dir: Path, config: Config, *, result: InitResult) -> None:
    _write(project_dir / "eslint.config.js", render_eslint_config(config), result, "eslint config")


def install_pre_commit_hook(project_dir: Path, config: Config, *, result: InitResult) -> Path:
    """Write the hook script and try to mark it executable."""

    hook_dir = project_dir / config.hook.directory
    hook_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hook_dir / config.hook.name
    _write(hook_path, render_pre_commit_hook(config), result, "pre-commit hook")

    if sys.platform != "win32":
        try:
            hook_path.chmod(config.hook.mode)
        except OSError as exc:
            logger.debug("chmod {} failed: {}", hook_path, exc)
            message = "Could not make pre-commit hook executable"
            result.warnings.append(message)
            console.print(decorate(message, MessageLevel.WARNING))
    return hook_path


def _describe_project(config: Config) -> str:
    style = config.project.style.upper()
    if config.project.routing:
        return f"Angular with routing and {style}"
    return f"Angular with {style}"


def print_summary(project_name: str, config: Config) -> None:
    console.print(decorate("✨ Project setup complete! ✨"))
    console.print()
    console.print("Your Angular project is ready with:")
    console.print(f"  ✓ {_describe_project(config)}")
    console.print("  ✓ Tailwind CSS")
    console.print("  ✓ ESLint with Angular rules")
    console.print("  ✓ Prettier")
    console.print("  ✓ lint-staged with Husky pre-commit hooks")
    console.print()
    console.print("Available commands:")
    console.print("  npm start              - Start development server")
    console.print("  npm run lint           - Run ESLint")
    console.print("  npm run lint:fix       - Fix ESLint issues")
    console.print("  npm run format         - Format code with Prettier")
    console.print("  npm run format:check   - Check code formatting")
    console.print()
    console.print("Get started:")
    console.print(f"  cd {escape(project_name)}")
    console.print("  npm start")


def run_init(
    project_name: str,
    config: Optional[Config] = None,
    *,
    base_dir: Optional[Path] = None,
    runner: Optional[CommandRunner] = None,
) -> InitResult:
    """Generate ``project_name`` under ``base_dir`` and wire up the lint/format tooling.

    Raises ``CommandFailedError`` as soon as an external command fails; nothing
    already written is rolled back.
    """

    config = config or Config()
    base_dir = base_dir or Path.cwd()
    runner = runner or SubprocessRunner()
    result = InitResult(project_name=project_name, project_dir=base_dir / project_name)

    console.print(decorate(f"Creating Angular project: {escape(project_name)}"))
    project_dir = generate_project(project_name, config, base_dir=base_dir, runner=runner, result=result)
    logger.debug("Project directory is {}", project_dir)

    console.print(decorate("Installing dependencies..."))
    install_dependencies(project_dir, config, runner=runner, result=result)

    console.print(decorate("Configuring Tailwind CSS..."))
    configure_tailwind(project_dir, config, result=result)

    console.print(decorate("Configuring Prettier..."))
    configure_prettier(project_dir, config, result=result)

    console.print(decorate("Configuring ESLint, Prettier, Unused Imports and Simple Sort Imports..."))
    configure_eslint(project_dir, config, result=result)

    console.print(decorate("Configuring lint-staged..."))
    manifest_path = project_dir / "package.json"
    manifest = with_lint_staged(load_manifest(manifest_path), config.lint_staged)

    console.print(decorate("Setting up Husky pre-commit hook..."))
    install_pre_commit_hook(project_dir, config, result=result)

    console.print(decorate("Adding npm scripts..."))
    manifest = with_scripts(manifest, config.scripts)
    write_manifest(manifest_path, manifest)
    result.steps.append(StepRecord(name="package manifest", path=manifest_path))
    logger.info("Wrote {}", manifest_path)

    print_summary(project_name, config)
    return result


__all__ = [
    "build_install_command",
    "build_new_command",
    "configure_eslint",
    "configure_prettier",
    "configure_tailwind",
    "generate_project",
    "install_dependencies",
    "install_pre_commit_hook",
    "print_summary",
    "run_init",
]
