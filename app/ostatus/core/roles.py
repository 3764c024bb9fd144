"""Role configuration loading and rendering.

Roles come from two places: layered INI config files shipped by the
distribution and the administrator, or the product definition (control
XML) of the installer. Both produce the same Roles mapping, including a
'default' role whose fields fill the gaps of the others.
"""

import configparser
import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path

from ostatus.core.errors import ConfigError
from ostatus.core.paths import CONFIG_NAME, SystemPaths
from ostatus.models.role import DEFAULT_ROLE, INSTALLATION_FIELDS, ReferenceInstallation, Roles
from ostatus.scanners.release import read_os_release

logger = logging.getLogger(__name__)

# Optional packages of the default role for roles read from a product definition
CONTROL_DEFAULT_PACKAGES_OPT: tuple[str, ...] = (
    "kernel-default",
    "kernel-pae",
    "kernel-vanilla",
    "snapper",
    "grub2",
    "btrfsprogs",
)

# Section header of a role config, names are case-insensitive
_SECTION_RE = re.compile(r"^\[([^\]]+)\]", re.MULTILINE)


def find_configs(paths: SystemPaths) -> list[Path]:
    """Find the role config files of this system.

    Looks for <ID>.cfg, <ID>-<VERSION_ID>.cfg and ostatus.cfg in the
    vendor directory and then in /etc, so later files override earlier ones.

    Args:
        paths: System paths to search.

    Returns:
        Existing config files in override order.

    Raises:
        InventoryError: If os-release cannot be read.
    """
    release = read_os_release(paths)
    filenames = (f"{release.id}.cfg", f"{release.id}-{release.version_id}.cfg", CONFIG_NAME)

    configs = [
        config_dir / filename
        for config_dir in paths.config_dirs
        for filename in filenames
        if (config_dir / filename).exists()
    ]
    logger.debug("Found role configs: %s", [str(c) for c in configs])
    return configs


def _installation_from_section(
    parser: configparser.ConfigParser, section: str
) -> ReferenceInstallation:
    """Build a reference installation from one INI section."""
    if not parser.has_section(section):
        return ReferenceInstallation()
    return ReferenceInstallation(
        **{
            name: tuple(parser.get(section, name, fallback="").split())
            for name in INSTALLATION_FIELDS
        }
    )


def load_roles_from_config(config_paths: Sequence[Path]) -> Roles:
    """Load roles from layered INI config files.

    The files are concatenated in order and parsed as a single document,
    so a section or key defined again in a later file overrides the
    earlier definition. Section names are lower-cased and keys before the
    first section header belong to the default role.

    Args:
        config_paths: Config files, lowest precedence first.

    Returns:
        Roles including a (possibly empty) default role.

    Raises:
        ConfigError: If a file cannot be read or the result cannot be parsed.
    """
    texts: list[str] = []
    for path in config_paths:
        try:
            texts.append(Path(path).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read role config {path}: {e}") from e

    # Keys before the first section header belong to the default role
    document = _SECTION_RE.sub(
        lambda m: f"[{m.group(1).strip().lower()}]", f"[{DEFAULT_ROLE}]\n" + "\n".join(texts)
    )
    parser = configparser.ConfigParser(interpolation=None, strict=False, default_section="")
    try:
        parser.read_string(document)
    except configparser.Error as e:
        raise ConfigError(f"Invalid role config: {e}") from e

    roles = {DEFAULT_ROLE: _installation_from_section(parser, DEFAULT_ROLE)}
    for section in parser.sections():
        if section != DEFAULT_ROLE:
            roles[section] = _installation_from_section(parser, section)

    return Roles(roles)


def _default_patterns(element: ET.Element) -> tuple[str, ...]:
    """Read software/default_patterns below an element."""
    text = element.findtext("software/default_patterns")
    if text is None:
        return ()
    return tuple(pattern for pattern in text.split(" ") if pattern)


def load_roles_from_control(control_path: Path) -> Roles:
    """Load roles from a product definition (control XML).

    Every system_roles/system_role becomes a role with the patterns of
    its software/default_patterns. The default role carries the product
    wide default patterns and a fixed list of optional packages.

    Args:
        control_path: Path to the control XML file.

    Returns:
        Roles including the default role.

    Raises:
        ConfigError: If the file cannot be read or lacks the system roles.
    """
    try:
        root = ET.parse(control_path).getroot()
    except OSError as e:
        raise ConfigError(f"Cannot read product definition {control_path}: {e}") from e
    except ET.ParseError as e:
        raise ConfigError(f"Invalid product definition {control_path}: {e}") from e

    _strip_namespaces(root)

    system_roles = root.find("system_roles")
    if system_roles is None:
        raise ConfigError(f"No system_roles in product definition {control_path}")

    roles: dict[str, ReferenceInstallation] = {}
    for system_role in system_roles.findall("system_role"):
        role_id = system_role.findtext("id")
        if not role_id or not role_id.strip():
            raise ConfigError(f"system_role without id in {control_path}")
        roles[role_id.strip()] = ReferenceInstallation(patterns=_default_patterns(system_role))

    roles[DEFAULT_ROLE] = ReferenceInstallation(
        patterns=_default_patterns(root),
        packages_opt=CONTROL_DEFAULT_PACKAGES_OPT,
    )
    return Roles(roles)


def _strip_namespaces(root: ET.Element) -> None:
    """Drop XML namespaces so elements can be found by their local name.

    Control files declare a default namespace (http://www.suse.com/1.0/yast2ns).
    """
    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]


def roles_to_config(roles: Roles) -> str:
    """Render roles as an INI role config.

    Roles are sorted by name and empty fields are left out, so loading
    the result with load_roles_from_config gives back the same lists.

    Args:
        roles: Roles to render.

    Returns:
        Config text, one section per role followed by a blank line.
    """
    config: list[str] = []
    for role in sorted(roles):
        installation = roles[role]
        config.append(f"[{role}]\n")
        for name in INSTALLATION_FIELDS:
            values = getattr(installation, name)
            if values:
                config.append(f"{name} = {' '.join(values)}\n")
        config.append("\n")
    return "".join(config)
