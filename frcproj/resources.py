"""Discovery and validation of installed resource libraries.

WPILib installs one release per year under ``~/wpilib/<year>/`` and keeps
the templates, examples and build scaffolding in
``utility/resources/app/resources`` inside it.
"""

from __future__ import annotations

from pathlib import Path

from .models import ResourceLayout
from .paths import resolve

INSTALLED_RESOURCES = ("utility", "resources", "app", "resources")
# Build scaffolding directory names, in lookup order.
BUILD_DIR_CANDIDATES = ("gradle", "build")


def discover_resource_paths(wpilib_home: str | Path) -> list[Path]:
    """Return resource libraries found under *wpilib_home*, newest year first.

    Only subdirectories whose name is an integer year are considered.
    """
    home = Path(wpilib_home)
    if not home.is_dir():
        return []

    found: list[tuple[int, Path]] = []
    for subdir in home.iterdir():
        if not subdir.is_dir() or not subdir.name.isdigit():
            continue
        candidate = resolve(subdir, *INSTALLED_RESOURCES)
        if candidate.exists():
            found.append((int(subdir.name), candidate))

    return [path for _, path in sorted(found, key=lambda item: item[0], reverse=True)]


def detect_layout(resources_path: str | Path) -> ResourceLayout:
    """Work out which build directory name a resource library uses.

    Falls back to the default layout when no version file is found; the
    generator then reports the missing file.
    """
    root = Path(resources_path)
    default = ResourceLayout()
    for build_dir in BUILD_DIR_CANDIDATES:
        if resolve(root, build_dir, default.version_file).is_file():
            return default.model_copy(update={"build_dir": build_dir})
    return default


def validate_resource_path(path: str | Path) -> str | None:
    """Return a human-readable problem with *path*, or ``None`` if it looks valid."""
    root = Path(path)
    if not root.exists():
        return "that path doesn't exist!"
    if not root.is_dir():
        return "that path isn't a directory"
    layout = detect_layout(root)
    if not resolve(root, layout.build_dir, layout.version_file).is_file():
        names = " or ".join(f"{d}/{layout.version_file}" for d in BUILD_DIR_CANDIDATES)
        return f"that doesn't look valid (no {names})"
    return None
