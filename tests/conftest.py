"""Shared pytest fixtures for the frcproj test suite.

Provides reusable fixtures for:
- A fake WPILib resource library built in ``tmp_path``
- Blueprint descriptors matching that library
- A request factory for generation runs
- A rich console that records output instead of printing it
"""

from __future__ import annotations

import io
import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from frcproj.models import BlueprintDescriptor, BlueprintKind, GenerationRequest

GRADLERIO_VERSION = "2025.3.2"

MAIN_JAVA = textwrap.dedent("""\
    // Copyright (c) FIRST and other WPILib contributors.

    package edu.wpi.first.wpilibj.templates.simple;

    import edu.wpi.first.wpilibj.RobotBase;

    public final class Main {
      private Main() {}

      public static void main(String... args) {
        RobotBase.startRobot(Robot::new);
      }
    }
""")

ROBOT_JAVA = textwrap.dedent("""\
    package edu.wpi.first.wpilibj.templates.simple;

    import edu.wpi.first.wpilibj.TimedRobot;

    public class Robot extends TimedRobot {}
""")

BUILD_GRADLE = textwrap.dedent("""\
    plugins {
        id "java"
        id "edu.wpi.first.GradleRIO" version "###GRADLERIOREPLACE###"
    }

    def ROBOT_MAIN_CLASS = "###ROBOTCLASSREPLACE###"
""")

PREFERENCES_JSON = textwrap.dedent("""\
    {
      "enableCppIntellisense": false,
      "currentLanguage": "java",
      "projectYear": "2025",
      "teamNumber": -1
    }
""")


def _write(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def build_resource_library(root: Path) -> Path:
    """Lay out a minimal resource library under *root* and return it."""
    java_src = root / "java" / "src"

    # Templates
    _write(java_src / "templates" / "simple" / "Main.java", MAIN_JAVA)
    _write(java_src / "templates" / "simple" / "Robot.java", ROBOT_JAVA)
    _write(java_src / "templates" / "simple" / "README.md", "simple template\n")

    tested = "package edu.wpi.first.wpilibj.templates.tested;\n\npublic final class Main {}\n"
    _write(java_src / "templates" / "tested" / "Main.java", tested)
    _write(
        java_src / "templates_test" / "tested" / "RobotTest.java",
        "package edu.wpi.first.wpilibj.templates.tested;\n\nclass RobotTest {}\n",
    )

    _write(
        java_src / "templates" / "templates.json",
        json.dumps([
            {
                "name": "Simple",
                "description": "A minimal robot",
                "tags": ["Basic"],
                "foldername": "simple",
                "gradlebase": "java",
                "mainclass": "Main",
                "commandversion": 2,
            },
            {
                "name": "Tested",
                "description": "Robot with unit tests",
                "tags": ["Basic"],
                "foldername": "tested",
                "gradlebase": "java",
                "hasunittests": True,
                "mainclass": "Main",
                "commandversion": 2,
            },
            {
                "name": "Legacy",
                "description": "Old command framework",
                "tags": [],
                "foldername": "legacy",
                "gradlebase": "java",
                "mainclass": "Main",
                "commandversion": 1,
            },
        ], indent=2),
    )

    # Examples
    _write(
        java_src / "examples" / "romidrive" / "Main.java",
        "package edu.wpi.first.wpilibj.examples.romidrive;\n\npublic final class Main {}\n",
    )
    _write(
        java_src / "examples" / "examples.json",
        json.dumps([
            {
                "name": "Romi Drive",
                "description": "Drive a Romi",
                "tags": ["Romi"],
                "foldername": "romidrive",
                "gradlebase": "javaromi",
                "mainclass": "Main",
                "commandversion": 2,
                "extravendordeps": ["romi"],
            },
        ]),
    )

    # Build scaffolding
    build = root / "build"
    _write(build / "version.txt", f"  {GRADLERIO_VERSION}\n")
    for variant in ("java", "javaromi"):
        _write(build / variant / "build.gradle", BUILD_GRADLE)
        _write(build / variant / "bin" / "stale.class", b"\xca\xfe\xba\xbe")
    _write(build / "javaromi" / "simgui.json", "{}\n")
    _write(build / "shared" / "gradlew", "#!/bin/sh\nexec java -jar gradle-wrapper.jar \"$@\"\n")
    _write(build / "shared" / "gradlew.bat", "@rem gradle startup script\r\n")
    _write(build / "shared" / "settings.gradle", "rootProject.name = 'robot'\n")
    _write(build / "shared" / "gradle" / "wrapper" / "gradle-wrapper.jar", b"PK\x03\x04binary")
    _write(build / "shared" / ".wpilib" / "wpilib_preferences.json", PREFERENCES_JSON)
    _write(build / "shared" / ".project", "<projectDescription/>\n")
    (build / "shared" / "gradlew").chmod(0o644)

    # Vendor dependencies
    for name in ("WPILibNewCommands.json", "RomiVendordep.json", "XRPVendordep.json"):
        _write(root / "vendordeps" / name, json.dumps({"fileName": name}) + "\n")

    return root


# ---------------------------------------------------------------------------
# Resource library
# ---------------------------------------------------------------------------


@pytest.fixture
def resource_library(tmp_path: Path) -> Path:
    """A populated fake resource library."""
    return build_resource_library(tmp_path / "resources")


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    """Destination path for the generated project (not yet created)."""
    return tmp_path / "robot"


# ---------------------------------------------------------------------------
# Blueprints and requests
# ---------------------------------------------------------------------------


@pytest.fixture
def simple_blueprint() -> BlueprintDescriptor:
    return BlueprintDescriptor(
        name="simple",
        kind=BlueprintKind.TEMPLATE,
        build_variant="java",
        description="A minimal robot",
    )


@pytest.fixture
def make_request(
    resource_library: Path, destination: Path, simple_blueprint: BlueprintDescriptor
) -> Callable[..., GenerationRequest]:
    """Factory for ``GenerationRequest`` with sensible defaults.

    Keyword arguments override any field of the request.
    """

    def _make(**overrides: Any) -> GenerationRequest:
        fields: dict[str, Any] = {
            "resources_path": resource_library,
            "destination": destination,
            "blueprint": simple_blueprint,
            "team_number": 1778,
        }
        fields.update(overrides)
        return GenerationRequest(**fields)

    return _make


@pytest.fixture
def quiet_console() -> Console:
    """A console that records output without writing to the terminal."""
    return Console(file=io.StringIO(), width=120)
