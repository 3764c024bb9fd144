"""Unit tests for the role command."""

from pathlib import Path

from ostatus.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestRoleCommand:
    """Tests for the role command."""

    def test_scores(self, system_root: Path) -> None:
        """role prints every role score and the detected role."""
        result = runner.invoke(app, ["--root", str(system_root), "role"])
        assert result.exit_code == 0, result.output
        assert "0.667" in result.stdout
        assert "0.250" in result.stdout
        assert "Detected role: server" in result.stdout

    def test_quiet(self, system_root: Path) -> None:
        """--quiet prints only the role name."""
        result = runner.invoke(app, ["--quiet", "--root", str(system_root), "role"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "server"

    def test_control(self, tmp_path: Path, system_root: Path, control_xml: str) -> None:
        """Roles can come from a product definition."""
        control = tmp_path / "control.xml"
        control.write_text(control_xml)
        result = runner.invoke(
            app, ["-q", "--root", str(system_root), "role", "--control", str(control)]
        )
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "server_role"

    def test_missing_index(self, tmp_path: Path, system_root: Path) -> None:
        """An unreadable system fails."""
        (system_root / "var/cache/zypp/solv/@System/solv.idx").unlink()
        result = runner.invoke(app, ["--root", str(system_root), "role"])
        assert result.exit_code == 1
        assert "installed index" in result.output

    def test_config_not_utf8(self, system_root: Path) -> None:
        """A role config that is not UTF-8 gives a one-line error."""
        (system_root / "etc" / "ostatus.cfg").write_bytes(b"[web]\npatterns = caf\xe9\n")
        result = runner.invoke(app, ["--root", str(system_root), "role"])
        assert result.exit_code == 1
        assert "Cannot read role config" in result.output
        assert "Traceback" not in result.output
