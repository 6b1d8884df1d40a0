"""Tests for running external commands."""

import subprocess
from unittest.mock import MagicMock

import pytest

from qmdvault.core.errors import CommandError
from qmdvault.core.process import run_command


class TestRunCommand:
    """Tests for run_command."""

    def test_runs_argument_list_without_shell(self, mock_subprocess_run):
        """Commands are passed as a list and never through a shell."""
        mock_subprocess_run.return_value = MagicMock(returncode=0, stdout="ok\n", stderr="")

        result = run_command(["qmd", "search", "it's; rm -rf /"])

        assert result.stdout == "ok\n"
        args, kwargs = mock_subprocess_run.call_args
        assert args[0] == ["qmd", "search", "it's; rm -rf /"]
        assert not kwargs.get("shell")
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True

    def test_raises_on_failure(self, mock_subprocess_run):
        """Non-zero exit raises CommandError with the details."""
        mock_subprocess_run.return_value = MagicMock(
            returncode=2, stdout="", stderr="boom"
        )

        with pytest.raises(CommandError) as exc_info:
            run_command(["git", "push"])

        assert exc_info.value.returncode == 2
        assert exc_info.value.stderr == "boom"
        assert exc_info.value.command == ["git", "push"]
        assert "boom" in str(exc_info.value)

    def test_check_false_returns_result(self, mock_subprocess_run):
        """With check=False the caller inspects the exit status."""
        mock_subprocess_run.return_value = MagicMock(returncode=1, stdout="", stderr="")

        result = run_command(["git", "diff", "--cached", "--quiet"], check=False)

        assert result.returncode == 1

    def test_missing_binary(self, mock_subprocess_run):
        """A missing binary becomes CommandError 127."""
        mock_subprocess_run.side_effect = FileNotFoundError("qmd")

        with pytest.raises(CommandError) as exc_info:
            run_command(["qmd", "status"])

        assert exc_info.value.returncode == 127

    def test_timeout(self, mock_subprocess_run):
        """A timeout becomes CommandError."""
        mock_subprocess_run.side_effect = subprocess.TimeoutExpired(["qmd"], 5)

        with pytest.raises(CommandError, match="timed out"):
            run_command(["qmd", "embed"], timeout=5)

    def test_stringifies_arguments(self, mock_subprocess_run):
        """Non-string arguments are converted."""
        run_command(["qmd", "get", "x", "-l", 200])

        assert mock_subprocess_run.call_args[0][0] == ["qmd", "get", "x", "-l", "200"]


class TestCommandError:
    """Tests for CommandError."""

    def test_output_combines_streams(self):
        """output joins stderr and stdout."""
        error = CommandError(["qmd"], 1, stdout="out", stderr="err")

        assert error.output == "err\nout"
