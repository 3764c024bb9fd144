"""System path management for ostatus.

All the files ostatus reads live at well known locations of a zypper
based system. SystemPaths resolves them below a root directory so the
whole tool can run against a mounted image or a test fixture tree.

Defaults (relative to the root):
- Role configs: /usr/etc/ and /etc/
- Repositories: /etc/zypp/repos.d/*.repo
- Solver caches: /var/cache/zypp/solv/<alias>/solv
- Status directory: /usr/lib/sysimage/ostatus
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "ostatus"

# Name of the role config shared by all products
CONFIG_NAME = "ostatus.cfg"

# Environment variable overriding the system root
ROOT_ENV = "OSTATUS_ROOT"

# Environment variable overriding the settings file location
SETTINGS_ENV = "OSTATUS_SETTINGS"

# Alias of the repository holding the installed packages
SYSTEM_REPO = "@System"


def _join(root: Path, absolute: str) -> Path:
    """Resolve an absolute system path below root."""
    return root / absolute.lstrip("/")


@dataclass(frozen=True, slots=True)
class SystemPaths:
    """Locations of the system files ostatus reads and writes.

    Attributes:
        root: Directory treated as the system root.
    """

    root: Path = Path("/")

    @property
    def config_dirs(self) -> tuple[Path, Path]:
        """Directories searched for role configs, vendor directory first."""
        return (_join(self.root, "/usr/etc"), _join(self.root, "/etc"))

    @property
    def os_release(self) -> Path:
        return _join(self.root, "/etc/os-release")

    @property
    def baseproduct(self) -> Path:
        return _join(self.root, "/etc/products.d/baseproduct")

    @property
    def repos_dir(self) -> Path:
        return _join(self.root, "/etc/zypp/repos.d")

    @property
    def zypp_conf(self) -> Path:
        return _join(self.root, "/etc/zypp/zypp.conf")

    @property
    def solv_cache_dir(self) -> Path:
        return _join(self.root, "/var/cache/zypp/solv")

    @property
    def auto_installed(self) -> Path:
        return _join(self.root, "/var/lib/zypp/AutoInstalled")

    @property
    def system_index(self) -> Path:
        """Index of the installed solvables (name, version, arch per line)."""
        return self.solv_cache_dir / SYSTEM_REPO / "solv.idx"

    @property
    def status_dir(self) -> Path:
        return _join(self.root, "/usr/lib/sysimage/ostatus")

    def solv_file(self, alias: str) -> Path:
        """Get the solver cache file of a repository.

        Args:
            alias: Repository alias.

        Returns:
            Path to <solv cache>/<alias>/solv.
        """
        return self.solv_cache_dir / alias / "solv"


def get_system_paths(root: Path | None = None) -> SystemPaths:
    """Get the system paths, respecting the OSTATUS_ROOT override.

    Args:
        root: Explicit root directory. Takes precedence over the environment.

    Returns:
        SystemPaths rooted at the selected directory.
    """
    if root is not None:
        return SystemPaths(root=root)
    env_root = os.environ.get(ROOT_ENV)
    if env_root:
        return SystemPaths(root=Path(env_root))
    return SystemPaths()


def get_settings_path() -> Path:
    """Get the application settings file path.

    Returns:
        Path to /etc/ostatus/settings.toml (or OSTATUS_SETTINGS).
    """
    override = os.environ.get(SETTINGS_ENV)
    if override:
        return Path(override)
    return Path("/etc") / APP_NAME / "settings.toml"
