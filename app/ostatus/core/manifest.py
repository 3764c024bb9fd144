"""Manifest building and writing.

A manifest lists every product, pattern and package of an installation,
packages with their buildtime, sorted so the same installation always
renders to the same text and digest.
"""

import gzip
import hashlib
import logging
import shutil
from collections.abc import Mapping
from pathlib import Path

from ostatus.core.errors import ManifestError
from ostatus.models.package import Installation

logger = logging.getLogger(__name__)

BASE_MANIFEST = "base.manifest"
SYSTEM_MANIFEST = "system.manifest"


def manifest_lines(
    installation: Installation,
    buildtimes: Mapping[str, int],
    strict: bool,
) -> list[str]:
    """Render the unsorted lines of a manifest.

    Args:
        installation: Installation to describe.
        buildtimes: Buildtime per full package name.
        strict: Fail on packages missing from buildtimes instead of
            writing the bare full name.

    Returns:
        One line per product, pattern and package.

    Raises:
        ManifestError: If strict and a package has no buildtime.
    """
    lines = [f"product:{product.full_name}" for product in installation.products]
    lines += [f"pattern:{pattern.full_name}" for pattern in installation.patterns]

    for package in installation.packages:
        full_name = package.full_name
        buildtime = buildtimes.get(full_name)
        if buildtime is not None:
            lines.append(f"{full_name} {buildtime}")
        elif strict:
            raise ManifestError(f"No buildtime known for {full_name}")
        else:
            lines.append(full_name)

    return lines


def build_manifest(
    installation: Installation,
    buildtimes: Mapping[str, int],
    strict: bool = True,
) -> str:
    """Build the manifest text of an installation.

    Args:
        installation: Installation to describe.
        buildtimes: Buildtime per full package name.
        strict: Fail on packages missing from buildtimes (repository
            metadata) instead of writing the bare name (rpm database).

    Returns:
        Sorted lines joined by newlines, without a trailing newline.

    Raises:
        ManifestError: If strict and a package has no buildtime.
    """
    return "\n".join(sorted(manifest_lines(installation, buildtimes, strict)))


def manifest_digest(text: str) -> str:
    """Compute the SHA-256 hex digest of a manifest text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def gzip_file(path: Path) -> Path:
    """Compress a file to <path>.gz and remove the original.

    Args:
        path: File to compress.

    Returns:
        Path of the compressed file.

    Raises:
        OSError: If reading, writing or removing fails.
    """
    gz_path = path.with_name(f"{path.name}.gz")
    with open(path, "rb") as src, gzip.open(gz_path, "wb") as dst:
        shutil.copyfileobj(src, dst)
    path.unlink()
    return gz_path


def write_manifest(path: Path, text: str) -> str:
    """Write a manifest, digest it and compress it.

    The digest covers the uncompressed text. Only <path>.gz is left on disk.

    Args:
        path: Manifest path without the .gz suffix.
        text: Manifest text.

    Returns:
        SHA-256 hex digest of the text.

    Raises:
        ManifestError: If the manifest cannot be written or compressed.
    """
    try:
        path.write_text(text, encoding="utf-8")
        digest = manifest_digest(path.read_text(encoding="utf-8"))
        gz_path = gzip_file(path)
    except OSError as e:
        raise ManifestError(f"Failed to write manifest {path}: {e}") from e

    logger.debug("Wrote %s (sha256 %s)", gz_path, digest)
    return digest
