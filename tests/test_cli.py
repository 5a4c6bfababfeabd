"""Tests for the pagewise CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pagewise import pager_config
from pagewise.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """Run every command from an unconfigured directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(pager_config, "USER_CONFIG_FILE", tmp_path / "user" / "config.json")
    monkeypatch.delenv(pager_config.ENV_ENTRIES_PER_PAGE, raising=False)
    monkeypatch.delenv(pager_config.ENV_FORMAT, raising=False)


class TestShow:
    """Tests for the show command."""

    def test_full_json(self):
        result = runner.invoke(
            app, ["show", "--total", "10", "--per-page", "3", "--page", "4", "--full", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["current_page"] == 4
        assert data["entries_on_this_page"] == 1
        assert data["next_page"] is None

    def test_compact_by_default(self):
        result = runner.invoke(app, ["show", "--total", "10", "--per-page", "3", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "total_entries": 10,
            "entries_per_page": 3,
            "current_page": 1,
        }

    def test_page_size_from_config(self, tmp_path: Path):
        pager_config.create_pager_config(tmp_path, entries_per_page=4, output_format="json")
        result = runner.invoke(app, ["show", "--total", "10", "--page", "9"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["current_page"] == 3

    def test_invalid_page_size(self):
        result = runner.invoke(app, ["show", "--total", "10", "--per-page", "0"])
        assert result.exit_code == 1
        assert "entries_per_page" in result.output


class TestPages:
    """Tests for the pages command."""

    def test_lists_each_page(self):
        result = runner.invoke(app, ["pages", "--total", "10", "--per-page", "3"])
        assert result.exit_code == 0, result.output
        assert "10 entries, 3 per page" in result.output
        assert "First item" in result.output

    def test_empty_set(self):
        result = runner.invoke(app, ["pages", "--total", "0"])
        assert result.exit_code == 0
        assert "No entries" in result.output


class TestSlice:
    """Tests for the slice command."""

    def test_json(self):
        result = runner.invoke(
            app, ["slice", "a", "b", "c", "d", "e", "--per-page", "2", "--page", "3", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["items"] == ["e"]
        assert data["pagination"]["current_page"] == 3

    def test_text(self):
        result = runner.invoke(
            app, ["slice", "a", "b", "c", "d", "e", "--per-page", "2", "--page", "2", "--format", "text"]
        )
        assert result.exit_code == 0, result.output
        assert result.output.split() == ["c", "d"]

    def test_text_keeps_bracketed_items(self):
        result = runner.invoke(app, ["slice", "[bold]x", "[id]", ":smile:", "--format", "text"])
        assert result.exit_code == 0, result.output
        assert result.output.split() == ["[bold]x", "[id]", ":smile:"]

    def test_long_items_are_not_wrapped(self):
        long_item = "y" * 200
        result = runner.invoke(app, ["slice", long_item, "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["items"] == [long_item]


class TestConfigCommands:
    """Tests for init and config."""

    def test_init_then_config(self, tmp_path: Path):
        result = runner.invoke(app, ["init", "--path", str(tmp_path), "--per-page", "20"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".pagewise" / "config.json").exists()

        result = runner.invoke(app, ["config", "--path", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "Entries per page: 20" in result.output

    def test_init_missing_directory(self, tmp_path: Path):
        result = runner.invoke(app, ["init", "--path", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Directory not found" in result.output

    def test_malformed_config_file_reported(self, tmp_path: Path):
        config_dir = tmp_path / ".pagewise"
        config_dir.mkdir()
        (config_dir / "config.json").write_text('{"output": null}')
        result = runner.invoke(app, ["show", "--total", "3"])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_invalid_config_reported(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(pager_config.ENV_FORMAT, "xml")
        result = runner.invoke(app, ["show", "--total", "3"])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output
