"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. The
system_root fixture lays out a small openSUSE system below tmp_path:

- installed: product openSUSE, patterns base, minimal_base and devel,
  packages bash, vim, grub2 and glibc (glibc auto-installed)
- roles: server (base minimal_base) and web (base apache)
- repositories: repo-oss (priority 99) and repo-update (priority 90)
"""

from pathlib import Path

import pytest
from ostatus.core.paths import SystemPaths

OS_RELEASE = """NAME="openSUSE Tumbleweed"
# VERSION="20240101"
ID="opensuse-tumbleweed"
ID_LIKE="opensuse suse"
VERSION_ID="20240101"
PRETTY_NAME="openSUSE Tumbleweed"
"""

BASEPRODUCT = """<?xml version="1.0" encoding="UTF-8"?>
<product schemeversion="0">
  <vendor>openSUSE</vendor>
  <name>openSUSE</name>
  <version>20240101</version>
  <arch>x86_64</arch>
</product>
"""

SYSTEM_INDEX = """product:openSUSE 20240101-0 x86_64
pattern:base 20200505-1.1 x86_64
pattern:minimal_base 20200505-1.1 x86_64
pattern:devel 1-1 x86_64
bash 5.2.15-1.1 x86_64
vim 9.0-1.1 x86_64
grub2 2.06-1.1 x86_64
glibc 2.38-1.1 x86_64
"""

ROLES_CONFIG = """[default]
packages_opt = grub2 snapper

[server]
patterns = base minimal_base

[web]
patterns = base apache
"""

REPO_OSS = """[repo-oss]
name=Main Repository
enabled=1
autorefresh=1
baseurl=http://download.opensuse.org/tumbleweed/repo/oss/
type=rpm-md
keeppackages=0
"""

REPO_UPDATE = """[repo-update]
name=Main Update Repository
enabled=1
priority=90
baseurl=http://download.opensuse.org/update/tumbleweed/
"""

ZYPP_CONF = """[main]
## solver.onlyRequires = false
solver.onlyRequires = true
"""


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    """Create a fake installed system below tmp_path."""
    root = tmp_path / "root"

    files = {
        "etc/os-release": OS_RELEASE,
        "etc/products.d/baseproduct": BASEPRODUCT,
        "etc/ostatus.cfg": ROLES_CONFIG,
        "etc/zypp/zypp.conf": ZYPP_CONF,
        "etc/zypp/repos.d/repo-oss.repo": REPO_OSS,
        "etc/zypp/repos.d/repo-update.repo": REPO_UPDATE,
        "var/cache/zypp/solv/@System/solv.idx": SYSTEM_INDEX,
        "var/cache/zypp/solv/repo-oss/solv": "",
        "var/cache/zypp/solv/repo-update/solv": "",
        "var/lib/zypp/AutoInstalled": "# AutoInstalled packages\nglibc\n",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    return root


@pytest.fixture
def paths(system_root: Path) -> SystemPaths:
    """SystemPaths rooted at the fake system."""
    return SystemPaths(root=system_root)


@pytest.fixture
def testsolv_output() -> str:
    """testsolv result for the server role of the fake system."""
    return """result transaction,problems <inline>
#>install product:openSUSE-20240101-0.x86_64@repo-oss
#>install pattern:base-20200505-1.1.x86_64@repo-oss
#>install pattern:minimal_base-20200505-1.1.x86_64@repo-oss
#>install bash-5.2.15-1.1.x86_64@repo-oss
#>install glibc-2.38-1.1.x86_64@repo-update
#>install zypper-1.14.68-1.1.x86_64@repo-oss
"""


@pytest.fixture
def testsolv_problem_output() -> str:
    """testsolv result with one unsatisfiable job."""
    return """result transaction,problems <inline>
#>problem 4d4de423 info nothing provides pattern:apache needed by the job
#>problem 4d4de423 solution 1a2b3c4d deljob install name pattern:apache
"""


@pytest.fixture
def dumpsolv_output() -> str:
    """dumpsolv output of a repository with three packages."""
    return """repo 1:
solvables: 3
solvable 0 (2):
name: bash 5.2.15-1.1 x86_64
solvable:name: bash
solvable:arch: x86_64
solvable:evr: 5.2.15-1.1
solvable:buildtime: 1690000000
solvable 1 (3):
name: glibc 2.38-1.1 x86_64
solvable:name: glibc
solvable:arch: x86_64
solvable:evr: 2.38-1.1
solvable:buildtime: 1690000100
solvable 2 (4):
name: zypper 1.14.68-1.1 x86_64
solvable:name: zypper
solvable:arch: x86_64
solvable:evr: 1.14.68-1.1
solvable:buildtime: 1690000200
"""


@pytest.fixture
def rpm_output() -> str:
    """rpm -qa output with the ostatus query format."""
    return """bash-5.2.15-1.1.x86_64 1690000000
glibc-2.38-1.1.x86_64 1690000100
vim-9.0-1.1.x86_64 1690000300
grub2-2.06-1.1.x86_64 1690000400
gpg-pubkey-29b700a4-62b07e22.(none) 1655734818
"""


@pytest.fixture
def control_xml() -> str:
    """Product definition with two system roles."""
    return """<?xml version="1.0"?>
<productDefines xmlns="http://www.suse.com/1.0/yast2ns"
    xmlns:config="http://www.suse.com/1.0/configns">
  <software>
    <default_patterns>base enhanced_base</default_patterns>
  </software>
  <system_roles config:type="list">
    <system_role>
      <id>server_role</id>
      <software>
        <default_patterns>base minimal_base</default_patterns>
      </software>
    </system_role>
    <system_role>
      <id>kde_desktop_role</id>
      <software>
        <default_patterns>kde kde_plasma  x11</default_patterns>
      </software>
    </system_role>
  </system_roles>
</productDefines>
"""
