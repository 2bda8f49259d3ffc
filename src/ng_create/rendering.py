"""Rendering of the configuration files written into the generated project."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader

from .config import Config

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

POSTCSS_CONFIG: Dict[str, Any] = {"plugins": {"@tailwindcss/postcss": {}}}


def _environment() -> Environment:
    loader = FileSystemLoader(str(TEMPLATES_DIR))
    return Environment(loader=loader, autoescape=False, trim_blocks=True, keep_trailing_newline=True)


def _render(name: str, **context: Any) -> str:
    return _environment().get_template(name).render(**context)


def _dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def render_postcss_config() -> str:
    return _dump_json(POSTCSS_CONFIG)


def render_stylesheet(config: Config) -> str:
    """Tailwind entry point: plain CSS imports it, Sass dialects load it as a module."""

    return _render("styles.j2", style=config.project.style)


def render_prettier_config(config: Config) -> str:
    """Serialize the Prettier record using its camelCase option names."""

    return _dump_json(config.prettier.model_dump(by_alias=True))


def render_prettier_ignore(config: Config) -> str:
    return _render("prettierignore.j2", patterns=config.prettier_ignore)


def render_eslint_config(config: Config) -> str:
    return _render(
        "eslint.config.js.j2",
        prefix=config.project.prefix,
        end_of_line=config.prettier.end_of_line,
    )


def render_pre_commit_hook(config: Config) -> str:
    return _render("pre-commit.j2", command=config.hook.command)


__all__ = [
    "POSTCSS_CONFIG",
    "TEMPLATES_DIR",
    "render_eslint_config",
    "render_postcss_config",
    "render_pre_commit_hook",
    "render_prettier_config",
    "render_prettier_ignore",
    "render_stylesheet",
]
