from __future__ import annotations

from pathlib import Path

import pytest

from ng_create.config import Config, ConfigError, load_config, save_config


@pytest.fixture()
def config_file(tmp_path: Path):
    def _factory(text: str) -> Path:
        path = tmp_path / "config.yml"
        path.write_text(text)
        return path

    return _factory


def test_defaults_without_file() -> None:
    config = load_config(None)

    assert config.tools.npm == "npm"
    assert [group.name for group in config.dependencies][0] == "Tailwind CSS"
    assert config.prettier.model_dump(by_alias=True)["bracketSameLine"] is True


def test_partial_file_overrides_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("tools:\n  npm: pnpm\nprettier:\n  printWidth: 100\n")

    config = load_config(path)

    assert config.tools.npm == "pnpm"
    assert config.tools.ng == "ng"
    assert config.prettier.print_width == 100
    assert config.prettier.tab_width == 2


def test_saved_defaults_load_back(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.yml"
    save_config(Config(), path)

    assert load_config(path) == Config()


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("")

    assert load_config(path) == Config()


@pytest.mark.parametrize(
    "content, message",
    [
        ("tools: [unclosed\n", "Failed to parse YAML"),
        ("- just\n- a list\n", "must be a mapping"),
        ("project:\n  style: ''\n", "Invalid configuration"),
        ("dependencies:\n  - name: empty\n    packages: []\n", "Invalid configuration"),
    ],
)
def test_invalid_files_raise_config_error(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "config.yml"
    path.write_text(content)

    with pytest.raises(ConfigError, match=message):
        load_config(path)


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "absent.yml")


def test_expand_command_uses_configured_tools() -> None:
    config = Config.model_validate({"tools": {"npx": "pnpm dlx"}})

    assert config.expand_command(["{npx}", "husky", "init"]) == ["pnpm", "dlx", "husky", "init"]
    assert config.expand_command(["{ng}", "add", "x"]) == ["ng", "add", "x"]


def test_tool_with_arguments_splits_into_words() -> None:
    config = Config.model_validate({"tools": {"npm": "corepack pnpm"}})

    assert config.tool_command("npm") == ["corepack", "pnpm"]


@pytest.mark.parametrize("value", ["", "   ", "'unterminated"])
def test_unusable_tool_rejected(config_file, value: str) -> None:
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(config_file(f"tools:\n  ng: \"{value}\"\n"))


def test_unsupported_style_rejected(config_file) -> None:
    with pytest.raises(ConfigError, match="Stylesheet dialect"):
        load_config(config_file("project:\n  style: less\n"))


@pytest.mark.parametrize("kind", ["directory", "invalid-utf8"])
def test_unreadable_file_raises_config_error(tmp_path: Path, kind: str) -> None:
    if kind == "directory":
        path = tmp_path / "config.d"
        path.mkdir()
    else:
        path = tmp_path / "config.yml"
        path.write_bytes(b"\xff\xfe tools: {}\n")

    with pytest.raises(ConfigError, match="Could not read configuration"):
        load_config(path)
