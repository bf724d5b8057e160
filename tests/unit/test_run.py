"""
Unit Tests for run.py Entry Script.

Tests individual functions with mocked dependencies.
"""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

import run
from run import main, validate_project_root


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()

        assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for main CLI entry point."""

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Voice Notes Entry Point" in result.output
        for option in ("--action", "--verbose", "--debug", "--migrate-action", "--coverage"):
            assert option in result.output

    def test_info_is_the_default_action(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Voice Notes" in result.output
        assert "Available Actions:" in result.output
        assert "--action migrate" in result.output

    @pytest.mark.parametrize(("flag", "level"), [("--verbose", "INFO"), ("-d", "DEBUG")])
    def test_logging_flags(self, runner, flag, level):
        with patch("run.setup_logging") as mock_setup:
            runner.invoke(main, ["--action", "info", flag])

        mock_setup.assert_called_once_with(level=level, format_type="console")

    def test_config_action_shows_all_sections(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        for section in (
            "Application Settings",
            "Database Settings",
            "Logging Settings",
            "Feature Flags",
            "Security Settings",
        ):
            assert section in result.output

    def test_health_action_reports_checks(self, runner):
        result = runner.invoke(main, ["--action", "health"])

        assert "Health Check Results" in result.output
        assert "YAML configuration" in result.output
        assert "PASS" in result.output

    def test_invalid_action_shows_error(self, runner):
        result = runner.invoke(main, ["--action", "invalid"])

        assert result.exit_code != 0
        assert "Invalid value" in result.output


class TestMigrateAction:
    """Tests for the migrate action's alembic command line."""

    @pytest.mark.parametrize(
        ("args", "expected_tail"),
        [
            ([], ["upgrade", "head"]),
            (["--migrate-action", "downgrade", "--revision", "base"], ["downgrade", "base"]),
            (["--migrate-action", "current"], ["current"]),
            (["--migrate-action", "history"], ["history", "--verbose"]),
            (
                ["--migrate-action", "autogenerate", "-m", "add notes"],
                ["revision", "--autogenerate", "-m", "add notes"],
            ),
        ],
    )
    def test_builds_alembic_command(self, runner, args, expected_tail):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(main, ["--action", "migrate", *args])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert cmd[1:5] == ["-m", "alembic", "-c", str(run.ALEMBIC_INI)]
        assert cmd[5:] == expected_tail

    def test_autogenerate_requires_message(self, runner):
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(main, ["--action", "migrate", "--migrate-action", "autogenerate"])

        assert result.exit_code == 1
        mock_run.assert_not_called()

    def test_failure_propagates_exit_code(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=3)):
            result = runner.invoke(main, ["--action", "migrate"])

        assert result.exit_code == 3


class TestServerAndTestActions:
    """Tests for actions that shell out."""

    def test_server_uses_configured_address_and_overrides(self, runner):
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(
                main, ["--action", "server", "--port", "9001", "--reload"]
            )

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "voicenotes.backend.main:app" in cmd
        assert cmd[cmd.index("--port") + 1] == "9001"
        assert "--reload" in cmd

    def test_unit_tests_with_coverage(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(
                main, ["--action", "test", "--test-type", "unit", "--coverage"]
            )

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "tests/unit" in cmd
        assert "--cov=voicenotes" in cmd
