"""Tests for path construction (frcproj.paths)."""

from __future__ import annotations

from pathlib import Path

import pytest

from frcproj.paths import MAIN_SOURCE_ROOT, package_path, resolve

pytestmark = pytest.mark.unit


class TestResolve:
    def test_joins_segments(self, tmp_path: Path):
        assert resolve(tmp_path, "java", "src", "templates") == tmp_path / "java" / "src" / "templates"

    def test_no_filesystem_access(self, tmp_path: Path):
        result = resolve(tmp_path / "does-not-exist", "a")
        assert result == tmp_path / "does-not-exist" / "a"
        assert not result.exists()

    def test_skips_empty_segments(self, tmp_path: Path):
        assert resolve(tmp_path, "", "a", "") == tmp_path / "a"

    def test_segment_with_slash(self, tmp_path: Path):
        assert resolve(tmp_path, "a/b") == tmp_path / "a" / "b"

    def test_accepts_string_root(self):
        assert resolve("root", "x") == Path("root") / "x"

    def test_mirrored_sides_share_relative_structure(self, tmp_path: Path):
        source = resolve(tmp_path / "src-root", *MAIN_SOURCE_ROOT, "frc")
        dest = resolve(tmp_path / "dest-root", *MAIN_SOURCE_ROOT, "frc")
        assert source.relative_to(tmp_path / "src-root") == dest.relative_to(tmp_path / "dest-root")


class TestPackagePath:
    def test_default_package(self):
        assert package_path("frc.robot") == ("frc", "robot")

    def test_single_segment(self):
        assert package_path("robot") == ("robot",)

    def test_deep_package(self):
        assert package_path("org.team1778.robot.core") == ("org", "team1778", "robot", "core")
