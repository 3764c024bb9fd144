"""Readers for the OS release and the base product.

Parses /etc/os-release and the base product definition in
/etc/products.d/baseproduct.
"""

import configparser
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from ostatus.core.errors import InventoryError
from ostatus.core.paths import SystemPaths

# Section injected in front of os-release so configparser accepts it
_OS_RELEASE_SECTION = "os-release"


@dataclass(frozen=True, slots=True)
class OsRelease:
    """Identification of the running operating system.

    Attributes:
        name: NAME (e.g. 'openSUSE Tumbleweed').
        id: ID (e.g. 'opensuse-tumbleweed').
        version_id: VERSION_ID (e.g. '20240101').
        pretty_name: PRETTY_NAME.
    """

    name: str
    id: str
    version_id: str
    pretty_name: str


def read_os_release(paths: SystemPaths) -> OsRelease:
    """Read and parse the os-release file.

    Args:
        paths: System paths to read from.

    Returns:
        Parsed OsRelease.

    Raises:
        InventoryError: If the file is missing, malformed or lacks a key.
    """
    path = paths.os_release
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InventoryError(f"Cannot read {path}: {e}") from e

    parser = configparser.ConfigParser(interpolation=None, delimiters=("=",))
    try:
        parser.read_string(f"[{_OS_RELEASE_SECTION}]\n{text}", source=str(path))
    except configparser.Error as e:
        raise InventoryError(f"Malformed {path}: {e}") from e

    section = parser[_OS_RELEASE_SECTION]

    def value(key: str) -> str:
        raw = section.get(key)
        if raw is None:
            raise InventoryError(f"{key.upper()} not found in {path}")
        return raw.strip().strip('"').strip("'")

    return OsRelease(
        name=value("name"),
        id=value("id"),
        version_id=value("version_id"),
        pretty_name=value("pretty_name"),
    )


def read_baseproduct(paths: SystemPaths) -> str:
    """Read the name of the base product.

    Args:
        paths: System paths to read from.

    Returns:
        Product name (e.g. 'openSUSE').

    Raises:
        InventoryError: If the product file is missing or has no name.
    """
    path = paths.baseproduct
    try:
        root = ET.parse(path).getroot()
    except OSError as e:
        raise InventoryError(f"Cannot read {path}: {e}") from e
    except ET.ParseError as e:
        raise InventoryError(f"Malformed product file {path}: {e}") from e

    name = root.findtext("name")
    if not name or not name.strip():
        raise InventoryError(f"Product name not found in {path}")
    return name.strip()
