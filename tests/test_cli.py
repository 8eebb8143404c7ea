"""Tests for the command-line entry point."""

import pytest
import yaml

from portfolio_site.cli import main


@pytest.fixture()
def config_file(site_config, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(site_config.model_dump()))
    return path


class TestCli:
    def test_list_with_category(self, config_file, capsys):
        assert main(["--config", str(config_file), "list", "--category", "ui"]) == 0
        out = capsys.readouterr().out
        assert "atlas: Atlas Design System (2024)" in out
        assert "weather" not in out
        assert "Showing 2 of 3 projects" in out

    def test_list_no_match(self, config_file, capsys):
        main(["--config", str(config_file), "list", "--search", "zzz"])
        assert "No projects found" in capsys.readouterr().out

    def test_build_is_default(self, config_file, tmp_path, capsys):
        assert main(["--config", str(config_file)]) == 0
        assert (tmp_path / "out" / "projects" / "dashboard.html").exists()
        assert (tmp_path / "out" / "index.html").exists()
        assert "Generated 3 project pages" in capsys.readouterr().out

    def test_add_and_remove(self, config_file, capsys):
        assert main(["--config", str(config_file), "add", "New Thing", "Desc", "Python, YAML"]) == 0
        assert "Added new-thing" in capsys.readouterr().out
        assert main(["--config", str(config_file), "remove", "new-thing"]) == 0

    def test_remove_unknown_reports_error(self, config_file, capsys):
        assert main(["--config", str(config_file), "remove", "nope"]) == 1
        assert "Error: Project not found" in capsys.readouterr().err

    def test_theme_toggle_persists(self, config_file, tmp_path, capsys):
        main(["--config", str(config_file), "theme", "toggle"])
        assert capsys.readouterr().out.strip() == "dark"
        main(["--config", str(config_file), "theme"])
        assert capsys.readouterr().out.strip() == "dark"
        assert (tmp_path / "prefs.json").exists()
