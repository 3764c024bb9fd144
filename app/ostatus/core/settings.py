"""Application settings.

This module provides the settings model and I/O functions for the
tunables of an ostatus run: where the status is written, which package
prefixes are ignored as user additions, and which external tools are
driven.

Settings are stored in /etc/ostatus/settings.toml. A missing file means
all defaults.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ostatus.core.errors import ConfigError
from ostatus.core.paths import get_settings_path

# Packages that are part of every installation even if no role lists them
DEFAULT_ADDED_PACKAGES_EXCLUDE: tuple[str, ...] = (
    "patterns-",
    "kernel-",
    "snapper",
    "grub2",
    "btrfsprogs",
)


class Settings(BaseModel):
    """Settings of an ostatus run.

    Attributes:
        status_dir: Directory receiving the status files. None uses the
            system default below the root.
        added_packages_exclude: Name prefixes never reported as added packages.
        testsolv_command: Executable of the libsolv testcase solver.
        dumpsolv_command: Executable dumping libsolv solv files.
        rpm_command: Executable querying the rpm database.
    """

    model_config = ConfigDict(extra="forbid")

    status_dir: Annotated[
        Path | None,
        Field(description="Directory for the status files (None = system default)"),
    ] = None
    added_packages_exclude: Annotated[
        tuple[str, ...],
        Field(description="Prefixes ignored when listing added packages"),
    ] = DEFAULT_ADDED_PACKAGES_EXCLUDE
    testsolv_command: Annotated[str, Field(min_length=1, description="testsolv executable")] = (
        "testsolv"
    )
    dumpsolv_command: Annotated[str, Field(min_length=1, description="dumpsolv executable")] = (
        "dumpsolv"
    )
    rpm_command: Annotated[str, Field(min_length=1, description="rpm executable")] = "rpm"


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default settings path.

    Returns:
        Validated Settings; defaults when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings_to_dict(settings), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    TOML has no null, so an unset status directory is left out.

    Args:
        settings: The Settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {}
    if settings.status_dir is not None:
        result["status_dir"] = str(settings.status_dir)
    result["added_packages_exclude"] = list(settings.added_packages_exclude)
    result["testsolv_command"] = settings.testsolv_command
    result["dumpsolv_command"] = settings.dumpsolv_command
    result["rpm_command"] = settings.rpm_command
    return result
