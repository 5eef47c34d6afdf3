"""Unit tests for utility functions (frcproj.utils).

Tests cover:
- load_json_list
- ensure_dir / is_empty_dir / expand_home
- make_executable
- Rich output helpers
"""

from __future__ import annotations

import io
import json
import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from frcproj.errors import MissingSourcePath, PermissionDenied
from frcproj.utils import (
    ensure_dir,
    expand_home,
    is_empty_dir,
    load_json_list,
    make_executable,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)

pytestmark = pytest.mark.unit


class TestLoadJsonList:
    def test_array(self, tmp_path: Path):
        path = tmp_path / "a.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        assert load_json_list(path) == [1, 2]

    def test_object_wrapped(self, tmp_path: Path):
        path = tmp_path / "a.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert load_json_list(path) == [{"a": 1}]

    def test_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json_list(tmp_path / "missing.json")


class TestFileSystemHelpers:
    def test_ensure_dir_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert target.is_dir()
        ensure_dir(target)  # idempotent

    def test_ensure_dir_permission_error(self, tmp_path: Path):
        with patch.object(Path, "mkdir", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionDenied):
                ensure_dir(tmp_path / "x")

    def test_is_empty_dir(self, tmp_path: Path):
        assert is_empty_dir(tmp_path)
        (tmp_path / "f").write_text("", encoding="utf-8")
        assert not is_empty_dir(tmp_path)
        assert not is_empty_dir(tmp_path / "f")
        assert not is_empty_dir(tmp_path / "missing")

    def test_expand_home(self):
        assert "~" not in str(expand_home("~/wpilib"))


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
class TestMakeExecutable:
    def test_adds_execute_bits_keeps_others(self, tmp_path: Path):
        script = tmp_path / "gradlew"
        script.write_text("#!/bin/sh\n", encoding="utf-8")
        script.chmod(0o640)

        make_executable(script)

        assert stat.S_IMODE(script.stat().st_mode) == 0o751

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(MissingSourcePath):
            make_executable(tmp_path / "gradlew")

    def test_windows_warns_on_given_console(self, tmp_path: Path):
        script = tmp_path / "gradlew"
        script.write_text("", encoding="utf-8")
        out = Console(file=io.StringIO(), width=120)

        with patch("frcproj.utils.os") as fake_os:
            fake_os.name = "nt"
            make_executable(script, out=out)

        assert "Skipping chmod" in out.file.getvalue()
        assert stat.S_IMODE(script.stat().st_mode) & stat.S_IXUSR == 0

    def test_permission_error(self, tmp_path: Path):
        script = tmp_path / "gradlew"
        script.write_text("", encoding="utf-8")
        with patch.object(Path, "chmod", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionDenied):
                make_executable(script)


class TestRichHelpers:
    def test_print_step(self):
        out = Console(file=io.StringIO(), width=80)
        print_step(3, 9, "Copying build scaffold", out=out)
        assert out.file.getvalue().strip() == "[3/9] Copying build scaffold"

    def test_print_summary_table(self):
        out = Console(file=io.StringIO(), width=80)
        print_summary_table({"Project": "/tmp/robot"}, title="Project created", out=out)
        text = out.file.getvalue()
        assert "Project created" in text
        assert "/tmp/robot" in text

    def test_message_helpers(self, capsys):
        print_success("done")
        print_warning("careful")
        print_error("broken")
        out = capsys.readouterr().out
        assert "done" in out
        assert "careful" in out
        assert "broken" in out
