"""Unit tests for the repository and solver configuration readers."""

from pathlib import Path

import pytest
from ostatus.core.errors import InventoryError
from ostatus.core.paths import SystemPaths
from ostatus.models.repo import SolverConf, ZypperRepo
from ostatus.scanners.repos import read_repos, read_solver_conf


def _add_repo(system_root: Path, alias: str, body: str, cache: bool = True) -> None:
    repo_file = system_root / "etc/zypp/repos.d" / f"{alias}.repo"
    repo_file.write_text(f"[{alias}]\n{body}")
    if cache:
        solv = system_root / "var/cache/zypp/solv" / alias / "solv"
        solv.parent.mkdir(parents=True, exist_ok=True)
        solv.write_text("")


class TestReadRepos:
    """Tests for read_repos function."""

    def test_sorted_by_priority(self, paths: SystemPaths) -> None:
        """Repositories are sorted by ascending priority."""
        assert read_repos(paths) == [ZypperRepo("repo-update", 90), ZypperRepo("repo-oss", 99)]

    def test_equal_priority_keeps_file_order(self, paths: SystemPaths, system_root: Path) -> None:
        """Equal priorities keep the sorted file order."""
        _add_repo(system_root, "aaa", "baseurl=http://a/\n")
        repos = read_repos(paths)
        assert [r.alias for r in repos] == ["repo-update", "aaa", "repo-oss"]

    def test_skips_disabled(self, paths: SystemPaths, system_root: Path) -> None:
        """Disabled repositories are skipped."""
        _add_repo(system_root, "debug", "enabled=0\nbaseurl=http://debug/\n")
        assert "debug" not in [r.alias for r in read_repos(paths)]

    def test_skips_missing_cache(self, paths: SystemPaths, system_root: Path) -> None:
        """Repositories without a solver cache are skipped."""
        _add_repo(system_root, "new", "baseurl=http://new/\n", cache=False)
        assert "new" not in [r.alias for r in read_repos(paths)]

    def test_skips_duplicate_url(self, paths: SystemPaths, system_root: Path) -> None:
        """The first repository with a base URL wins."""
        _add_repo(
            system_root,
            "zzz-mirror",
            "priority=1\nbaseurl=http://download.opensuse.org/tumbleweed/repo/oss/\n",
        )
        assert "zzz-mirror" not in [r.alias for r in read_repos(paths)]

    def test_invalid_priority(self, paths: SystemPaths, system_root: Path) -> None:
        """A non-numeric priority raises InventoryError."""
        _add_repo(system_root, "bad", "priority=high\n")
        with pytest.raises(InventoryError, match="Invalid value"):
            read_repos(paths)

    def test_repo_file_not_utf8(self, paths: SystemPaths, system_root: Path) -> None:
        """A .repo file that is not UTF-8 raises InventoryError."""
        repo_file = system_root / "etc/zypp/repos.d" / "bad.repo"
        repo_file.write_bytes(b"[bad]\nname=caf\xe9\n")
        with pytest.raises(InventoryError, match="Cannot read repository file"):
            read_repos(paths)

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing repos.d raises InventoryError."""
        with pytest.raises(InventoryError, match="not found"):
            read_repos(SystemPaths(root=tmp_path))


class TestReadSolverConf:
    """Tests for read_solver_conf function."""

    def test_only_requires(self, paths: SystemPaths) -> None:
        """Commented settings are ignored, active ones applied."""
        assert read_solver_conf(paths) == SolverConf(only_requires=True)

    def test_vendor_change(self, paths: SystemPaths) -> None:
        """solver.allowVendorChange = true enables the flag."""
        paths.zypp_conf.write_text("[main]\nsolver.allowVendorChange = true\n")
        conf = read_solver_conf(paths)
        assert conf == SolverConf(allow_vendor_change=True)
        assert conf.flags == ("allowvendorchange",)

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing zypp.conf raises InventoryError."""
        with pytest.raises(InventoryError):
            read_solver_conf(SystemPaths(root=tmp_path))

    def test_not_utf8(self, paths: SystemPaths) -> None:
        """A zypp.conf that is not UTF-8 raises InventoryError."""
        paths.zypp_conf.write_bytes(b"[main]\n# caf\xe9\n")
        with pytest.raises(InventoryError, match="Cannot read"):
            read_solver_conf(paths)
