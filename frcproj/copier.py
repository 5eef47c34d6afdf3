"""Recursive tree copy with per-entry classification.

:func:`copy_tree` mirrors a source directory into a destination.  A copy rule
decides for every entry whether it is copied byte for byte, routed through
:func:`frcproj.patcher.patch_file`, or pruned.  Directories are classified
once when they are entered, so pruning a directory skips its whole subtree.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from .errors import GenerationError, MissingSourcePath, PermissionDenied, UnsupportedFileType
from .patcher import Substitution, patch_file
from .utils import ensure_dir


class CopyAction(Enum):
    COPY = "copy"
    PATCH = "patch"
    PRUNE = "prune"


# (path relative to the copy root, is_dir) -> action
CopyRule = Callable[[PurePosixPath, bool], CopyAction]

PATCHED_EXTENSIONS: tuple[str, ...] = (".java", ".gradle")


def copy_all(rel_path: PurePosixPath, is_dir: bool) -> CopyAction:
    """Copy every entry verbatim."""
    return CopyAction.COPY


def code_tree_rule(rel_path: PurePosixPath, is_dir: bool) -> CopyAction:
    """Patch Java sources and Gradle scripts, copy everything else."""
    if not is_dir and rel_path.name.endswith(PATCHED_EXTENSIONS):
        return CopyAction.PATCH
    return CopyAction.COPY


def build_scaffold_rule(rel_path: PurePosixPath, is_dir: bool) -> CopyAction:
    """Skip ``bin`` directories and anything with ``.project`` in its path.

    The ``.project`` test is a substring match on the relative path, so it
    also catches names like ``choreo.project``.
    """
    if is_dir and rel_path.name == "bin":
        return CopyAction.PRUNE
    if ".project" in rel_path.as_posix():
        return CopyAction.PRUNE
    return CopyAction.COPY


@dataclass
class CopyStats:
    """Counts collected by one :func:`copy_tree` call."""

    copied: int = 0
    patched: int = 0
    changed: int = 0

    def __add__(self, other: CopyStats) -> CopyStats:
        return CopyStats(
            copied=self.copied + other.copied,
            patched=self.patched + other.patched,
            changed=self.changed + other.changed,
        )


def copy_tree(
    source_dir: str | Path,
    dest_dir: str | Path,
    classify: CopyRule = copy_all,
    substitutions: Sequence[Substitution] = (),
) -> CopyStats:
    """Copy *source_dir* into *dest_dir* according to *classify*.

    Entries are visited depth-first in sorted name order.  Existing
    destination directories are reused and existing files are overwritten.

    Args:
        source_dir: Root of the tree to copy.
        dest_dir: Destination root, created if missing.
        classify: Copy rule applied to each entry's relative path.
        substitutions: Applied line by line to files classified ``PATCH``.

    Returns:
        Counts of verbatim copies, patched files and patched files whose
        content actually changed.

    Raises:
        MissingSourcePath: If *source_dir* is not a directory.
        UnsupportedFileType: On a symlink or special file.
        PermissionDenied: If the filesystem refuses a read or write.
    """
    source_root = Path(source_dir)
    dest_root = Path(dest_dir)
    if not source_root.is_dir():
        raise MissingSourcePath(
            f"Source tree not found: {source_root}",
            operation="copy_tree", source=source_root, destination=dest_root,
        )

    stats = CopyStats()
    ensure_dir(dest_root)
    _copy_dir(source_root, dest_root, PurePosixPath(), classify, substitutions, stats)
    return stats


def _copy_dir(
    source_root: Path,
    dest_root: Path,
    rel_dir: PurePosixPath,
    classify: CopyRule,
    substitutions: Sequence[Substitution],
    stats: CopyStats,
) -> None:
    source_dir = source_root.joinpath(*rel_dir.parts)
    try:
        entries = sorted(source_dir.iterdir(), key=lambda entry: entry.name)
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot list {source_dir}", operation="copy_tree", source=source_dir
        ) from exc

    for entry in entries:
        rel_path = rel_dir / entry.name
        target = dest_root.joinpath(*rel_path.parts)

        if entry.is_symlink():
            raise UnsupportedFileType(
                f"Symlinks are not supported: {entry}",
                operation="copy_tree", source=entry, destination=target,
            )

        if entry.is_dir():
            if classify(rel_path, True) is CopyAction.PRUNE:
                continue
            ensure_dir(target)
            _copy_dir(source_root, dest_root, rel_path, classify, substitutions, stats)
        elif entry.is_file():
            action = classify(rel_path, False)
            if action is CopyAction.PRUNE:
                continue
            if action is CopyAction.PATCH:
                if patch_file(entry, target, substitutions):
                    stats.changed += 1
                stats.patched += 1
            else:
                _copy_file(entry, target)
                stats.copied += 1
        else:
            raise UnsupportedFileType(
                f"Special files are not supported: {entry}",
                operation="copy_tree", source=entry, destination=target,
            )


def _copy_file(source: Path, dest: Path) -> None:
    """Copy bytes only, overwriting *dest*; permission bits are not carried over."""
    try:
        ensure_dir(dest.parent)
        shutil.copyfile(source, dest)
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot copy {source} to {dest}",
            operation="copy_file", source=source, destination=dest,
        ) from exc
    except OSError as exc:
        raise GenerationError(
            f"Failed to copy {source} to {dest}: {exc}",
            operation="copy_file", source=source, destination=dest,
        ) from exc
