"""Unit tests for manifest building and writing."""

import gzip
import hashlib
from pathlib import Path

import pytest
from ostatus.core.errors import ManifestError
from ostatus.core.manifest import build_manifest, manifest_digest, write_manifest
from ostatus.models.package import Installation, Package

SOLVABLES = [
    ("product:openSUSE", "20240101-0", "x86_64"),
    ("pattern:base", "1-1", "x86_64"),
    ("zypper", "1.14-1.1", "x86_64"),
    ("bash", "5.2-1.1", "x86_64"),
]

BUILDTIMES = {"bash-5.2-1.1.x86_64": 100, "zypper-1.14-1.1.x86_64": 200}


class TestBuildManifest:
    """Tests for build_manifest function."""

    def test_sorted_lines(self) -> None:
        """Products, patterns and packages are rendered and sorted."""
        text = build_manifest(Installation.from_solvables(SOLVABLES), BUILDTIMES)
        assert text.split("\n") == [
            "bash-5.2-1.1.x86_64 100",
            "pattern:base-1-1.x86_64",
            "product:openSUSE-20240101-0.x86_64",
            "zypper-1.14-1.1.x86_64 200",
        ]
        assert not text.endswith("\n")

    def test_order_independent(self) -> None:
        """The same installation in any order gives the same manifest."""
        forward = build_manifest(Installation.from_solvables(SOLVABLES), BUILDTIMES)
        backward = build_manifest(Installation.from_solvables(reversed(SOLVABLES)), BUILDTIMES)
        assert forward == backward
        assert manifest_digest(forward) == manifest_digest(backward)

    def test_strict_missing_buildtime(self) -> None:
        """Strict mode fails on a package without buildtime."""
        inst = Installation(packages=(Package("vim", "9.0-1.1", "x86_64"),))
        with pytest.raises(ManifestError, match="vim-9.0-1.1.x86_64"):
            build_manifest(inst, BUILDTIMES, strict=True)

    def test_lenient_missing_buildtime(self) -> None:
        """Lenient mode writes the bare full name."""
        inst = Installation(packages=(Package("vim", "9.0-1.1", "x86_64"),))
        assert build_manifest(inst, BUILDTIMES, strict=False) == "vim-9.0-1.1.x86_64"

    def test_empty_installation(self) -> None:
        """An empty installation gives an empty manifest."""
        assert build_manifest(Installation(), {}) == ""


class TestWriteManifest:
    """Tests for write_manifest function."""

    def test_writes_gzip_only(self, tmp_path: Path) -> None:
        """Only the compressed manifest is left on disk."""
        path = tmp_path / "base.manifest"
        write_manifest(path, "a 1\nb 2")
        assert not path.exists()
        assert (tmp_path / "base.manifest.gz").exists()

    def test_digest_of_uncompressed_text(self, tmp_path: Path) -> None:
        """The digest is the SHA-256 of the text, which the archive holds."""
        text = "bash-5.2-1.1.x86_64 100\npattern:base-1-1.x86_64"
        digest = write_manifest(tmp_path / "system.manifest", text)
        assert digest == hashlib.sha256(text.encode("utf-8")).hexdigest()
        with gzip.open(tmp_path / "system.manifest.gz", "rt", encoding="utf-8") as f:
            assert f.read() == text

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        """A missing directory raises ManifestError."""
        with pytest.raises(ManifestError, match="Failed to write"):
            write_manifest(tmp_path / "missing" / "base.manifest", "x")
