"""Unit tests for upstream role config generation."""

from pathlib import Path
from unittest.mock import patch

import pytest
from ostatus.core.errors import ConfigError
from ostatus.core.upstream import PROJECTS, UpstreamBranch, control_path, fetch_configs
from ostatus.utils.shell import CommandResult


class TestProjects:
    """Tests for the known upstream projects."""

    def test_tumbleweed_from_master(self) -> None:
        """Tumbleweed is generated from the openSUSE master branch."""
        assert UpstreamBranch("master", "opensuse-tumbleweed") in PROJECTS["openSUSE"]

    def test_control_path(self, tmp_path: Path) -> None:
        """The definition is control/control.<project>.xml."""
        assert control_path(tmp_path, "SMO") == tmp_path / "control" / "control.SMO.xml"


class TestFetchConfigs:
    """Tests for fetch_configs function."""

    def test_git_missing(self, tmp_path: Path) -> None:
        """fetch_configs requires git."""
        with (
            patch("ostatus.core.upstream.command_exists", return_value=False),
            pytest.raises(ConfigError, match="git is not available"),
        ):
            fetch_configs(tmp_path)

    def test_writes_one_config_per_branch(self, tmp_path: Path, control_xml: str) -> None:
        """Every branch is checked out and converted."""
        calls: list[list[str]] = []

        def fake_git(args: list[str], **kwargs: object) -> CommandResult:
            calls.append(args)
            if args[1] == "clone":
                checkout = Path(args[-1])
                (checkout / "control").mkdir(parents=True)
                (checkout / "control" / "control.MicroOS.xml").write_text(control_xml)
            return CommandResult(stdout="", stderr="", returncode=0)

        projects = {
            "MicroOS": (
                UpstreamBranch("master", "opensuse-microos"),
                UpstreamBranch("release", "opensuse-microos-6.0"),
            )
        }
        seen: list[tuple[str, str]] = []
        with (
            patch("ostatus.core.upstream.command_exists", return_value=True),
            patch("ostatus.core.upstream.run_command", side_effect=fake_git),
        ):
            written = fetch_configs(
                tmp_path, projects, on_branch=lambda p, b: seen.append((p, b))
            )

        assert written == [
            tmp_path / "opensuse-microos.cfg",
            tmp_path / "opensuse-microos-6.0.cfg",
        ]
        assert "[server_role]\npatterns = base minimal_base\n" in written[0].read_text()
        assert calls[0][:2] == ["git", "clone"]
        assert "https://github.com/yast/skelcd-control-MicroOS.git" in calls[0]
        assert ["git", "checkout", "--quiet", "origin/release"] in calls
        assert seen == [("MicroOS", "master"), ("MicroOS", "release")]

    def test_clone_failure(self, tmp_path: Path) -> None:
        """A failed clone raises ConfigError."""
        with (
            patch("ostatus.core.upstream.command_exists", return_value=True),
            patch(
                "ostatus.core.upstream.run_command",
                return_value=CommandResult("", "repository not found", 128),
            ),
            pytest.raises(ConfigError, match="repository not found"),
        ):
            fetch_configs(tmp_path, {"Nope": (UpstreamBranch("master", "nope"),)})
