"""Reading, patching and writing the generated project's ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

Manifest = Dict[str, Any]


def load_manifest(path: Path) -> Manifest:
    """Parse ``package.json`` from disk."""

    return json.loads(path.read_text(encoding="utf-8"))


def with_lint_staged(manifest: Mapping[str, Any], rules: Mapping[str, List[str]]) -> Manifest:
    """Return a copy of ``manifest`` whose ``lint-staged`` key is replaced by ``rules``."""

    updated = dict(manifest)
    updated["lint-staged"] = {pattern: list(commands) for pattern, commands in rules.items()}
    return updated


def with_scripts(manifest: Mapping[str, Any], scripts: Mapping[str, str]) -> Manifest:
    """Return a copy of ``manifest`` with ``scripts`` merged over the existing ones.

    Existing scripts not named in ``scripts`` are kept; named ones are overwritten.
    """

    updated = dict(manifest)
    merged = dict(manifest.get("scripts") or {})
    merged.update(scripts)
    updated["scripts"] = merged
    return updated


def write_manifest(path: Path, manifest: Mapping[str, Any]) -> None:
    """Write the whole manifest back with two-space indentation."""

    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


__all__ = [
    "Manifest",
    "load_manifest",
    "with_lint_staged",
    "with_scripts",
    "write_manifest",
]
