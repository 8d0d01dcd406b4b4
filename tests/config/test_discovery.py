"""Tests for config discovery and validated loading."""

from pathlib import Path

import click
import pytest

from layerforge.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, read_config


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[registry]\nname = "skulls"\n')
        assert find_config(tmp_path) == config_file.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file.resolve()

    def test_nearest_wins(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / CONFIG_FILENAME).write_text("")
        assert find_config(inner / ".") == (inner / CONFIG_FILENAME).resolve()

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "gone.toml"))
        assert find_config(tmp_path) is None


class TestReadConfig:
    def test_returns_only_set_keys(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[registry]\nname = "skulls"\n[skull]\ncyclops_variant = "Cyclops"\n')
        assert read_config(config_file) == {
            "registry": {"name": "skulls"},
            "skull": {"cyclops_variant": "Cyclops"},
        }

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert read_config(config_file) == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[registry\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            read_config(config_file)

    def test_unknown_key(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[catalog]\nart_limt = 3\n")
        with pytest.raises(click.ClickException, match="Invalid config"):
            read_config(config_file)

    def test_unknown_section(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[rendering]\nsvg = true\n")
        with pytest.raises(click.ClickException, match="Invalid config"):
            read_config(config_file)

    def test_rejected_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[catalog]\ndefault_limit = 500\n")
        with pytest.raises(click.ClickException, match="Invalid config"):
            read_config(config_file)
