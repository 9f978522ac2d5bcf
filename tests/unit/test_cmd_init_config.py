"""Unit tests for the init-config command."""

from __future__ import annotations

import tomllib
from pathlib import Path

from click.testing import CliRunner

from sensus.commands.init_config import _load_example_config, cli
from sensus.config import load_config


class TestLoadExampleConfig:
    def test_loads_non_empty_content(self) -> None:
        assert len(_load_example_config()) > 0

    def test_contains_all_sections(self) -> None:
        content = _load_example_config()
        for section in ("[api]", "[paths]", "[display]", "[search]"):
            assert section in content, f"Missing section {section}"

    def test_example_is_valid_config(self, temp_dir: Path) -> None:
        path = temp_dir / "config.toml"
        path.write_text(_load_example_config())
        config, warnings = load_config(path)
        assert config.api_per_page == 2000
        assert warnings == []


class TestInitConfigCommand:
    def test_creates_config_file(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert result.exception is None
            assert Path("test-config.toml").read_text() == _load_example_config()

    def test_fails_if_exists_without_force(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("existing")
            result = runner.invoke(cli, ["--output", "test-config.toml"], standalone_mode=False)
            assert isinstance(result.exception, SystemExit)
            assert result.exception.code == 1
            assert Path("test-config.toml").read_text() == "existing"

    def test_force_overwrites_existing(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("test-config.toml").write_text("old content")
            result = runner.invoke(
                cli, ["--output", "test-config.toml", "--force"], standalone_mode=False
            )
            assert result.exception is None
            assert "[api]" in Path("test-config.toml").read_text()

    def test_creates_parent_directories(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["--output", "a/b/config.toml"], standalone_mode=False)
            assert result.exception is None
            assert Path("a/b/config.toml").exists()

    def test_custom_values_written(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                [
                    "--output",
                    "config.toml",
                    "--api-url",
                    "http://mirror.test",
                    "--review-db",
                    "decisions.db",
                ],
                standalone_mode=False,
            )
            assert result.exception is None
            data = tomllib.loads(Path("config.toml").read_text())
            assert data["api"]["base_url"] == "http://mirror.test"
            assert data["paths"]["review_db"].endswith("decisions.db")

    def test_invalid_url_rejected(self) -> None:
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli, ["--output", "config.toml", "--api-url", "nope"], standalone_mode=False
            )
            assert isinstance(result.exception, SystemExit)
            assert not Path("config.toml").exists()
