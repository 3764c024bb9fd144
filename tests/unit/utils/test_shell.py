"""Unit tests for shell execution utilities."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from ostatus.utils.shell import CommandResult, command_exists, run_command


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success(self) -> None:
        """Exit code 0 is a success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True

    def test_failure(self) -> None:
        """Any other exit code is a failure."""
        assert CommandResult(stdout="", stderr="boom", returncode=2).success is False


class TestRunCommand:
    """Tests for run_command function."""

    @patch("ostatus.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns stdout, stderr and the exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["rpm", "-qa"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["text"] is True

    @patch("ostatus.utils.shell.subprocess.run")
    def test_passes_timeout_and_cwd(self, mock_run: MagicMock) -> None:
        """Timeout and working directory are passed through."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["git", "status"], timeout=None, cwd="/tmp")

        assert mock_run.call_args.kwargs["timeout"] is None
        assert mock_run.call_args.kwargs["cwd"] == "/tmp"

    @patch("ostatus.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        """A timeout is raised to the caller."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["testsolv"], timeout=1)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["testsolv"], timeout=1)


class TestCommandExists:
    """Tests for command_exists function."""

    def test_found(self) -> None:
        """A command on PATH exists."""
        with patch("ostatus.utils.shell.shutil.which", return_value="/usr/bin/rpm"):
            assert command_exists("rpm") is True

    def test_not_found(self) -> None:
        """A command missing from PATH does not exist."""
        with patch("ostatus.utils.shell.shutil.which", return_value=None):
            assert command_exists("testsolv") is False
