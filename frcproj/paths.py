"""Path construction for the resource library and the generated project.

Both sides of a copy are built with the same helper so that mirrored
relative structure holds by construction.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

# Output locations inside the generated project.
MAIN_SOURCE_ROOT = ("src", "main", "java")
TEST_SOURCE_ROOT = ("src", "test", "java")
DEPLOY_DIR = ("src", "main", "deploy")
PREFERENCES_FILE = (".wpilib", "wpilib_preferences.json")
BUILD_FILE = "build.gradle"
WRAPPER_SCRIPT = "gradlew"


def resolve(root: str | Path, *segments: str) -> Path:
    """Join *segments* onto *root* without touching the filesystem.

    Empty segments are ignored and a segment may itself contain ``/``.
    """
    path = Path(root)
    for segment in segments:
        if not segment:
            continue
        path = path.joinpath(*PurePosixPath(segment).parts)
    return path


def package_path(package: str) -> tuple[str, ...]:
    """Split a dotted package name into directory segments.

    Examples::

        package_path("frc.robot") -> ("frc", "robot")
    """
    return tuple(part for part in package.split(".") if part)
