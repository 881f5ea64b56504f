"""Tests for the command-line interface."""

import json

from click.testing import CliRunner

from ready_to_ship import __version__
from ready_to_ship.cli import cli
from ready_to_ship.config import REPORT_FILENAME

GOOD_ENV = "JWT_SECRET=" + "s" * 40 + "\n"


class TestModuleCommands:
    """Test per-module subcommands."""

    def test_every_module_is_registered(self):
        assert {"env", "auth", "api", "project", "security", "dependencies", "database", "report", "fix"} <= set(
            cli.commands
        )

    def test_env_passes(self, make_project):
        root = make_project({".env": GOOD_ENV})

        result = CliRunner().invoke(cli, ["env", "--path", str(root)])

        assert result.exit_code == 0
        assert "ENV VALIDATION" in result.output
        assert "READY" in result.output

    def test_env_fails(self, make_project):
        root = make_project({})

        result = CliRunner().invoke(cli, ["env", "-p", str(root)])

        assert result.exit_code == 1
        assert "MISSING: .env file not found" in result.output
        assert "NOT READY" in result.output

    def test_database_skipped_exits_zero(self, make_project):
        root = make_project({})

        result = CliRunner().invoke(cli, ["database", "-p", str(root)])

        assert result.exit_code == 0
        assert "SKIPPED" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestReportCommand:
    """Test the full report command."""

    def test_report_empty_project(self, make_project):
        root = make_project({})

        result = CliRunner().invoke(cli, ["report", "-p", str(root), "--verbose"])

        assert result.exit_code == 1
        assert "FINAL VERDICT: NOT READY" in result.output
        assert "Detailed Issues:" in result.output

    def test_report_json_and_skip(self, make_project):
        root = make_project({".env": GOOD_ENV})

        result = CliRunner().invoke(cli, ["report", "-p", str(root), "--json", "--skip", "database,dependencies"])

        data = json.loads((root / REPORT_FILENAME).read_text())
        assert set(data["summary"]) == {"env", "auth", "api", "project", "security"}
        assert data["summary"]["env"]["passed"] is True
        assert result.exit_code == 1


class TestFixCommand:
    """Test the fix command."""

    def test_dry_run_by_default(self, make_project):
        root = make_project({})

        result = CliRunner().invoke(cli, ["fix", "-p", str(root)])

        assert result.exit_code == 0
        assert "DRY RUN" in result.output
        assert not (root / "README.md").exists()
        assert not (root / ".env.example").exists()

    def test_apply_creates_templates(self, make_project):
        root = make_project({})

        result = CliRunner().invoke(cli, ["fix", "-p", str(root), "--apply"])

        assert result.exit_code == 0
        assert (root / "README.md").is_file()
        assert (root / ".env.example").is_file()
