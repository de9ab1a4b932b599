# Tests for reltool.cli
# CLI commands using Click testing

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from reltool.cli import cli
from reltool.git.errors import ChangelogError
from reltool.git.parse import parse_repo


@pytest.fixture
def isolated(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run CLI commands in an empty project directory."""
    project = temp_dir / "release-it"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.delenv("RELTOOL_CONFIG", raising=False)
    return project


class TestCliGroup:
    """Tests for main CLI group."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "reltool" in result.output
        assert "info" in result.output
        assert "changelog" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "reltool" in result.output


class TestInfoCommand:
    """Tests for info command."""

    @patch("reltool.cli.Git")
    def test_not_a_repo(self, mock_git_cls, isolated):
        mock_git_cls.return_value.is_git_repo.return_value = False
        runner = CliRunner()
        result = runner.invoke(cli, ["info"])
        assert result.exit_code == 1
        assert "Not a git repository" in result.output

    @patch("reltool.cli.Git")
    def test_shows_state(self, mock_git_cls, isolated):
        git = MagicMock()
        git.is_git_repo.return_value = True
        git.is_in_git_root_dir.return_value = True
        git.get_branch_name.return_value = "master"
        git.has_upstream.return_value = False
        git.is_working_dir_clean.return_value = True
        git.status_entries.return_value = []
        git.get_latest_tag.return_value = "1.0.0"
        git.get_remote_url.return_value = "git@github.com:webpro/release-it.git"
        git.get_repository.return_value = parse_repo("git@github.com:webpro/release-it.git")
        mock_git_cls.return_value = git

        runner = CliRunner()
        result = runner.invoke(cli, ["info", "--remote", "origin"])
        assert result.exit_code == 0
        assert "master" in result.output
        assert "1.0.0" in result.output
        assert "webpro/release-it" in result.output
        git.get_remote_url.assert_called_once_with("origin")


class TestChangelogCommand:
    """Tests for changelog command."""

    @patch("reltool.cli.Git")
    def test_prints_changelog(self, mock_git_cls, isolated):
        mock_git_cls.return_value.get_changelog.return_value = "* Second commit (abc1234)\n* First commit (def5678)"
        runner = CliRunner()
        result = runner.invoke(cli, ["changelog", "--latest-version", "1.0.0"])
        assert result.exit_code == 0
        assert result.output == "* Second commit (abc1234)\n* First commit (def5678)\n"
        mock_git_cls.return_value.get_changelog.assert_called_once_with(command=None, latest_version="1.0.0")

    @patch("reltool.cli.Git")
    def test_table(self, mock_git_cls, isolated):
        mock_git_cls.return_value.get_changelog.return_value = "* Second commit (abc1234)"
        runner = CliRunner()
        result = runner.invoke(cli, ["changelog", "--table"])
        assert result.exit_code == 0
        assert "abc1234" in result.output
        assert "Second commit" in result.output

    @patch("reltool.cli.Git")
    def test_failure(self, mock_git_cls, isolated):
        mock_git_cls.return_value.get_changelog.side_effect = ChangelogError("Could not create changelog: bad flag")
        runner = CliRunner()
        result = runner.invoke(cli, ["changelog", "--command", "git log --invalid"])
        assert result.exit_code == 1
        assert "Could not create changelog" in result.output

    @patch("reltool.cli.Git")
    def test_verbose_flag(self, mock_git_cls, isolated):
        mock_git_cls.return_value.get_changelog.return_value = ""
        runner = CliRunner()
        runner.invoke(cli, ["changelog", "-v"])
        config = mock_git_cls.call_args[0][0]
        assert config.options.verbose is True
        assert config.name == "release-it"


class TestConfigCommands:
    """Tests for config subcommands."""

    def test_init_show_validate(self, isolated):
        runner = CliRunner()

        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0
        assert (isolated / ".reltool.yaml").exists()

        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0
        assert "name: release-it" in result.output

        result = runner.invoke(cli, ["config", "validate"])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_validate_invalid(self, isolated):
        (isolated / ".reltool.yaml").write_text("options:\n  verbose: [1]\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate"])
        assert result.exit_code == 1
        assert "options -> verbose" in result.output
