"""Main generation orchestrator.

Takes a :class:`~frcproj.models.GenerationRequest` and assembles a complete
robot project from the resource library in nine fixed steps:

1. main code tree (package declarations rewritten)
2. unit-test tree, when the blueprint has one
3. build scaffold for the blueprint's variant
4. shared build scaffold
5. executable bit on the Gradle wrapper
6. ``build.gradle`` placeholders (main class, GradleRIO version)
7. deploy directory stub
8. vendor dependency manifests
9. team number in ``.wpilib/wpilib_preferences.json``

The first failure propagates immediately.  By default files written by
earlier steps stay on disk; with ``request.staged`` the project is built in a
scratch directory next to the destination and only moved into place once
every step has succeeded.
"""

from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path

from rich.console import Console

from . import utils
from .copier import CopyStats, build_scaffold_rule, code_tree_rule, copy_tree
from .errors import GenerationError, MalformedVersionFile, MissingSourcePath, PermissionDenied
from .models import GenerationRequest, GenerationResult
from .paths import (
    BUILD_FILE,
    DEPLOY_DIR,
    MAIN_SOURCE_ROOT,
    PREFERENCES_FILE,
    TEST_SOURCE_ROOT,
    WRAPPER_SCRIPT,
    package_path,
    resolve,
)
from .patcher import (
    package_substitution,
    patch_file,
    placeholder_substitutions,
    team_number_substitution,
)
from .vendordeps import copy_vendor_files, resolve_vendor_files

TOTAL_STEPS = 9

DEPLOY_README_NAME = "example.txt"
DEPLOY_README = (
    "Files placed in this directory will be deployed to the RoboRIO into the\n"
    "'deploy' directory in the home folder. Use the 'Filesystem.getDeployDirectory' wpilib function\n"
    "to get a proper path relative to the deploy directory.\n"
)


class ProjectGenerator:
    """Assembles one project from one resolved blueprint.

    Attributes:
        request: The validated generation request.
        console: Rich console that receives per-step progress lines.
    """

    def __init__(self, request: GenerationRequest, console: Console | None = None) -> None:
        self.request = request
        self.console = console or utils.console

    # -- Public API --------------------------------------------------------

    def generate(self) -> GenerationResult:
        """Run all nine steps and return a summary of what was written."""
        if self.request.staged:
            return self._generate_staged(self.request.destination)
        utils.ensure_dir(self.request.destination)
        return self._build(self.request.destination)

    # -- Staging -----------------------------------------------------------

    def _generate_staged(self, destination: Path) -> GenerationResult:
        """Build into a sibling scratch directory, then rename it into place."""
        if destination.exists() and not utils.is_empty_dir(destination):
            raise GenerationError(
                f"Destination is not an empty directory: {destination}",
                operation="generate", destination=destination,
            )
        utils.ensure_dir(destination.parent)
        scratch = destination.parent / f".{destination.name}.{uuid.uuid4().hex[:8]}.staging"
        utils.ensure_dir(scratch)

        try:
            result = self._build(scratch)
            if destination.exists():
                destination.rmdir()
            os.replace(scratch, destination)
        except BaseException:
            shutil.rmtree(scratch, ignore_errors=True)
            raise

        return result.model_copy(update={"project_root": destination})

    # -- Steps -------------------------------------------------------------

    def _build(self, root: Path) -> GenerationResult:
        request = self.request
        blueprint = request.blueprint
        layout = request.layout
        resources = request.resources_path
        package_dirs = package_path(request.package)
        code_substitutions = [package_substitution(request.package)]
        stats = CopyStats()

        self._step(1, f"Copying {blueprint.kind.label} [bold]{blueprint.name}[/bold]")
        stats += copy_tree(
            resolve(resources, layout.lang, "src", blueprint.kind.code_dir, blueprint.name),
            resolve(root, *MAIN_SOURCE_ROOT, *package_dirs),
            code_tree_rule,
            code_substitutions,
        )

        if blueprint.has_unit_tests:
            self._step(2, "Copying unit tests")
            stats += copy_tree(
                resolve(resources, layout.lang, "src", blueprint.kind.test_dir, blueprint.name),
                resolve(root, *TEST_SOURCE_ROOT, *package_dirs),
                code_tree_rule,
                code_substitutions,
            )
        else:
            self._step(2, "[dim]No unit tests for this blueprint[/dim]")

        self._step(3, f"Copying build scaffold [bold]{blueprint.build_variant}[/bold]")
        stats += copy_tree(
            resolve(resources, layout.build_dir, blueprint.build_variant),
            root,
            build_scaffold_rule,
        )

        self._step(4, "Copying shared build scaffold")
        stats += copy_tree(
            resolve(resources, layout.build_dir, layout.shared_dir),
            root,
            build_scaffold_rule,
        )

        self._step(5, f"Marking {WRAPPER_SCRIPT} executable")
        utils.make_executable(resolve(root, WRAPPER_SCRIPT), out=self.console)

        self._step(6, f"Patching {BUILD_FILE}")
        version = read_version_file(resolve(resources, layout.build_dir, layout.version_file))
        build_file = resolve(root, BUILD_FILE)
        if patch_file(
            build_file,
            build_file,
            placeholder_substitutions(request.main_class, version),
            per_line=False,
        ):
            stats.changed += 1
        stats.patched += 1

        self._step(7, "Creating deploy directory")
        create_deploy_directory(resolve(root, *DEPLOY_DIR))

        self._step(8, "Copying vendor dependencies")
        vendordeps = resolve_vendor_files(blueprint.extra_vendordeps)
        stats.copied += len(copy_vendor_files(
            resolve(resources, layout.vendordeps_dir),
            resolve(root, "vendordeps"),
            vendordeps,
        ))

        self._step(9, f"Setting team number to {request.team_number}")
        preferences = resolve(root, *PREFERENCES_FILE)
        if patch_file(
            preferences,
            preferences,
            [team_number_substitution(request.team_number)],
            per_line=False,
        ):
            stats.changed += 1
        stats.patched += 1

        return GenerationResult(
            project_root=root,
            files_copied=stats.copied,
            files_patched=stats.patched,
            files_changed=stats.changed,
            vendordeps=vendordeps,
        )

    def _step(self, step: int, message: str) -> None:
        utils.print_step(step, TOTAL_STEPS, message, out=self.console)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def generate(request: GenerationRequest, console: Console | None = None) -> GenerationResult:
    """Generate the project described by *request*."""
    return ProjectGenerator(request, console=console).generate()


def read_version_file(path: Path) -> str:
    """Return the trimmed GradleRIO version string stored at *path*.

    Raises:
        MissingSourcePath: If the file does not exist.
        MalformedVersionFile: If it is unreadable as text or blank.
    """
    if not path.exists():
        raise MissingSourcePath(
            f"Build tooling version file not found: {path}",
            operation="read_version_file", source=path,
        )
    try:
        version = path.read_text(encoding="utf-8").strip()
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot read {path}", operation="read_version_file", source=path
        ) from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise MalformedVersionFile(
            f"Cannot read build tooling version from {path}: {exc}",
            operation="read_version_file", source=path,
        ) from exc
    if not version:
        raise MalformedVersionFile(
            f"Build tooling version file is empty: {path}",
            operation="read_version_file", source=path,
        )
    return version


def create_deploy_directory(deploy_dir: Path) -> Path:
    """Create the deploy directory with its explanatory ``example.txt``."""
    utils.ensure_dir(deploy_dir)
    readme = deploy_dir / DEPLOY_README_NAME
    try:
        readme.write_text(DEPLOY_README, encoding="utf-8")
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot write {readme}", operation="create_deploy_directory", destination=readme
        ) from exc
    return readme
