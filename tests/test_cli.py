"""Tests for CLI module."""

import json

import pytest
from click.testing import CliRunner

from snap_organizer.cli import cli
from snap_organizer.models.config import create_default_config


def flat(result):
    """Command output with line wrapping undone."""
    return " ".join(result.output.split())


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project_file(tmp_path):
    path = tmp_path / "project.json"
    path.write_text(json.dumps({"items": [
        {"id": "1", "name": "Main Render", "kind": "composition"},
        {"id": "2", "name": "clip.mov", "extension": "mov"},
        {"id": "3", "name": "vo.wav", "extension": "wav"},
        {"id": "4", "name": "Precomp", "kind": "composition", "parent": ["Old"]},
    ]}), encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    create_default_config(path)
    return path


class TestInitCommand:
    """Test the init command."""

    def test_writes_default_config(self, runner, tmp_path):
        output = tmp_path / "out.json"
        result = runner.invoke(cli, ["init", "--output", str(output)])
        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["folders"]

    def test_refuses_to_overwrite(self, runner, config_file):
        result = runner.invoke(cli, ["init", "--output", str(config_file)])
        assert result.exit_code == 1
        assert "already exists" in flat(result)


class TestValidateCommand:
    """Test the validate command."""

    def test_valid_config(self, runner, config_file):
        result = runner.invoke(cli, ["validate", str(config_file)])
        assert result.exit_code == 0
        assert "Configuration is valid" in flat(result)

    def test_invalid_config(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"folders": []}), encoding="utf-8")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "is invalid" in flat(result)

    def test_non_utf8_config(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"folders": [], "note": "\xff\xfe"}')
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Encoding error" in flat(result)

    def test_warnings_are_listed(self, runner, tmp_path):
        data = {
            "folders": [
                {"id": "a", "name": "A", "categories": [{"type": "Audio"}]},
                {"id": "b", "name": "B", "order": 1, "categories": [{"type": "Audio"}]},
            ],
            "exceptions": [],
            "settings": {},
        }
        path = tmp_path / "dup.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 0
        assert "Warning" in flat(result)


class TestPlanCommand:
    """Test the plan command."""

    def test_plan_lists_placements(self, runner, project_file, config_file):
        result = runner.invoke(cli, ["plan", str(project_file), "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Placement Plan" in flat(result)
        assert "4 items placed" in flat(result)


class TestOrganizeCommand:
    """Test the organize command."""

    def test_organize_writes_project(self, runner, project_file, tmp_path):
        output = tmp_path / "organized.json"
        result = runner.invoke(cli, ["organize", str(project_file), "--output", str(output)])

        assert result.exit_code == 0
        assert "Moved 4 items" in flat(result)

        data = json.loads(output.read_text(encoding="utf-8"))
        parents = {item["id"]: item["parent"] for item in data["items"]}
        assert parents["1"] == ["00_Render"]
        assert parents["2"] == ["01_Source", "02_Footage"]
        assert parents["3"] == ["01_Source", "04_Audio"]
        assert ["Old"] not in data["folders"]

    def test_organize_selected_items(self, runner, project_file, tmp_path):
        output = tmp_path / "organized.json"
        result = runner.invoke(cli, [
            "organize", str(project_file), "--item", "3", "--output", str(output),
        ])
        assert result.exit_code == 0
        assert "Moved 1 items" in flat(result)

    def test_organize_empty_project_fails(self, runner, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")
        result = runner.invoke(cli, ["organize", str(path)])
        assert result.exit_code == 1
        assert "No items to organize" in flat(result)

    def test_invalid_project_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{oops", encoding="utf-8")
        result = runner.invoke(cli, ["organize", str(path)])
        assert result.exit_code == 1
        assert "Invalid project file" in flat(result)


class TestStatsCommand:
    """Test the stats command."""

    def test_stats_table(self, runner, project_file):
        result = runner.invoke(cli, ["stats", str(project_file)])
        assert result.exit_code == 0
        assert "Project Statistics" in flat(result)
        assert "Compositions" in flat(result)
