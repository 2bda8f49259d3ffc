"""Configuration loading and validation for ng-create-with-config."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class ToolsConfig(BaseModel):
    """Executables the pipeline shells out to."""

    ng: str = "ng"
    npm: str = "npm"
    npx: str = "npx"

    @field_validator("ng", "npm", "npx")
    @classmethod
    def _ensure_executable(cls, value: str) -> str:
        if not shlex.split(value):
            raise ValueError("Tool command cannot be empty")
        return value


STYLE_DIALECTS = ("css", "scss", "sass")


class ProjectConfig(BaseModel):
    """Flags passed to ``ng new``."""

    routing: bool = True
    style: str = "scss"
    skip_git: bool = True
    prefix: str = "app"

    @field_validator("style")
    @classmethod
    def _normalize_style(cls, value: str) -> str:
        value = value.lower().lstrip(".")
        if value not in STYLE_DIALECTS:
            raise ValueError(f"Stylesheet dialect must be one of: {', '.join(STYLE_DIALECTS)}")
        return value


class DependencyGroup(BaseModel):
    """A single ``npm install`` invocation and the commands that follow it."""

    name: str
    packages: List[str]
    dev: bool = False
    follow_up: List[List[str]] = Field(default_factory=list)

    @field_validator("packages")
    @classmethod
    def _ensure_packages(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("A dependency group must list at least one package")
        return value


def _default_dependencies() -> List[DependencyGroup]:
    return [
        DependencyGroup(
            name="Tailwind CSS",
            packages=["tailwindcss", "@tailwindcss/postcss", "postcss"],
        ),
        DependencyGroup(
            name="ESLint",
            packages=["@angular-eslint/schematics"],
            dev=True,
            follow_up=[["{ng}", "add", "@angular-eslint/schematics", "--skip-confirmation"]],
        ),
        DependencyGroup(
            name="Prettier",
            packages=["prettier", "prettier-eslint", "eslint-config-prettier", "eslint-plugin-prettier"],
            dev=True,
        ),
        DependencyGroup(
            name="Unused Imports ESLint plugin",
            packages=["eslint-plugin-unused-imports"],
            dev=True,
        ),
        DependencyGroup(
            name="Simple Import Sort ESLint plugin",
            packages=["eslint-plugin-simple-import-sort"],
            dev=True,
        ),
        DependencyGroup(
            name="lint-staged and Husky",
            packages=["lint-staged", "husky"],
            dev=True,
            follow_up=[["{npx}", "husky", "init"]],
        ),
    ]


class PrettierOverride(BaseModel):
    files: str
    options: Dict[str, Any] = Field(default_factory=dict)


class PrettierConfig(BaseModel):
    """Contents of ``.prettierrc``; field order is the serialized key order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tab_width: int = 2
    end_of_line: str = "auto"
    prose_wrap: str = "preserve"
    use_tabs: bool = False
    single_quote: bool = True
    semi: bool = True
    bracket_spacing: bool = True
    arrow_parens: str = "avoid"
    trailing_comma: str = "es5"
    bracket_same_line: bool = True
    print_width: int = 80
    overrides: List[PrettierOverride] = Field(
        default_factory=lambda: [PrettierOverride(files="*.html", options={"parser": "angular"})]
    )


def _default_prettier_ignore() -> List[str]:
    return [
        "node_modules",
        "dist",
        "coverage",
        ".angular",
        "*.min.js",
        "*.min.css",
        "package-lock.json",
    ]


def _default_lint_staged() -> Dict[str, List[str]]:
    return {
        "*.ts": ["eslint --fix", "prettier --write"],
        "*.html": ["prettier --write"],
        "*.scss": ["prettier --write"],
    }


def _default_scripts() -> Dict[str, str]:
    return {
        "lint": "ng lint",
        "lint:fix": "ng lint --fix",
        "format": 'prettier --write "src/**/*.{ts,html,scss}"',
        "format:check": 'prettier --check "src/**/*.{ts,html,scss}"',
    }


class HookConfig(BaseModel):
    """Pre-commit hook written under the hook manager directory."""

    directory: str = ".husky"
    name: str = "pre-commit"
    command: str = "npx lint-staged"
    mode: int = 0o755


class Config(BaseModel):
    """Top-level configuration."""

    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    dependencies: List[DependencyGroup] = Field(default_factory=_default_dependencies)
    prettier: PrettierConfig = Field(default_factory=PrettierConfig)
    prettier_ignore: List[str] = Field(default_factory=_default_prettier_ignore)
    lint_staged: Dict[str, List[str]] = Field(default_factory=_default_lint_staged)
    scripts: Dict[str, str] = Field(default_factory=_default_scripts)
    hook: HookConfig = Field(default_factory=HookConfig)

    def tool_command(self, name: str) -> List[str]:
        """Split a configured tool such as ``pnpm dlx`` into argv words."""

        return shlex.split(getattr(self.tools, name))

    def expand_command(self, command: List[str]) -> List[str]:
        """Substitute ``{ng}``, ``{npm}`` and ``{npx}`` placeholders with configured executables."""

        expanded: List[str] = []
        for part in command:
            if part in ("{ng}", "{npm}", "{npx}"):
                expanded.extend(self.tool_command(part[1:-1]))
            else:
                expanded.append(part)
        return expanded


class ConfigError(Exception):
    """Raised when a configuration file is invalid."""


def load_config(path: Optional[Path]) -> Config:
    """Load configuration from a YAML file, or return the defaults when ``path`` is None."""

    if path is None:
        return Config()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read configuration: {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def save_config(config: Config, path: Path) -> None:
    """Persist configuration to disk as YAML."""

    rendered = config.model_dump()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(rendered, sort_keys=False), encoding="utf-8")


__all__ = [
    "Config",
    "ConfigError",
    "DependencyGroup",
    "HookConfig",
    "PrettierConfig",
    "ProjectConfig",
    "ToolsConfig",
    "load_config",
    "save_config",
]
