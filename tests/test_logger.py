# Tests for reltool.logger
# Rich console output

import io

from rich.console import Console

from reltool.git.parse import CommitRecord
from reltool.logger import ReleaseLogger


def make_logger() -> tuple[ReleaseLogger, io.StringIO]:
    buffer = io.StringIO()
    return ReleaseLogger(Console(file=buffer, highlight=False, width=120)), buffer


class TestReleaseLogger:
    """Tests for ReleaseLogger."""

    def test_warning_escapes_markup(self):
        logger, buffer = make_logger()
        logger.warning("Could not reset [bold]file[/bold]")
        assert "Could not reset [bold]file[/bold]" in buffer.getvalue()

    def test_command_is_literal(self):
        logger, buffer = make_logger()
        logger.command("git push --follow-tags   -u origin master :tada:")
        assert buffer.getvalue().strip() == "$ git push --follow-tags   -u origin master :tada:"

    def test_repository_state(self):
        logger, buffer = make_logger()
        logger.show_repository_state({"Branch": "master", "Upstream": False, "Latest tag": None})
        output = buffer.getvalue()
        assert "master" in output
        assert "✗" in output
        assert "Latest tag" in output

    def test_changelog_table(self):
        logger, buffer = make_logger()
        logger.show_changelog([CommitRecord(subject="Fix [parser]", hash="abc1234")])
        assert "Fix [parser]" in buffer.getvalue()
        assert "abc1234" in buffer.getvalue()

    def test_empty_changelog(self):
        logger, buffer = make_logger()
        logger.show_changelog([])
        assert "No commits" in buffer.getvalue()
