"""Text patching for copied source and build files.

A :class:`Substitution` is a compiled pattern plus a literal replacement.
:func:`patch_file` applies an ordered list of them to a file, either per line
or to the whole content, and writes the result atomically.  Output always
uses ``\\n`` line terminators.

The module also provides the three substitution sets used when generating a
project: package renaming, build-file placeholders and the team number.
"""

from __future__ import annotations

import os
import re
import shutil
import tempfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import GenerationError, MissingSourcePath, PermissionDenied

# Package declarations in the resource library look like
# ``edu.wpi.first.wpilibj.examples.<name>`` or ``...templates.<name>``.
PACKAGE_PATTERN = re.compile(r"edu\.wpi\.first\.wpilibj\.(?:examples|templates)\.[^.;]+")
MAIN_CLASS_TOKEN = "###ROBOTCLASSREPLACE###"
VERSION_TOKEN = "###GRADLERIOREPLACE###"
# The sentinel must end the line and must not be the tail of a larger number.
TEAM_NUMBER_PATTERN = re.compile(r"(?<!\d)-1$", re.MULTILINE)

# Read and write with surrogateescape so that bytes which are not valid UTF-8
# pass through unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Substitution:
    """A compiled matcher and the literal text that replaces each match."""

    pattern: re.Pattern[str]
    replacement: str

    @classmethod
    def literal(cls, token: str, replacement: str) -> Substitution:
        return cls(re.compile(re.escape(token)), replacement)

    def apply(self, text: str) -> str:
        # A callable keeps backslashes in the replacement literal.
        return self.pattern.sub(lambda _match: self.replacement, text)


# ---------------------------------------------------------------------------
# Substitution sets
# ---------------------------------------------------------------------------


def package_substitution(package: str) -> Substitution:
    """Rewrite resource-library package names to *package*."""
    return Substitution(PACKAGE_PATTERN, package)


def placeholder_substitutions(main_class: str, version: str) -> list[Substitution]:
    """Fill the main-class and build-tooling version placeholders."""
    return [
        Substitution.literal(MAIN_CLASS_TOKEN, main_class),
        Substitution.literal(VERSION_TOKEN, version),
    ]


def team_number_substitution(team_number: int) -> Substitution:
    """Replace end-of-line ``-1`` sentinels with *team_number*."""
    return Substitution(TEAM_NUMBER_PATTERN, str(team_number))


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def apply_substitutions(
    text: str, substitutions: Iterable[Substitution]
) -> tuple[str, bool]:
    """Apply *substitutions* in order and report whether *text* changed."""
    result = text
    for substitution in substitutions:
        result = substitution.apply(result)
    return result, result != text


def patch_file(
    source: str | Path,
    dest: str | Path,
    substitutions: Sequence[Substitution],
    *,
    per_line: bool = True,
) -> bool:
    """Patch *source* into *dest* and return whether any substitution matched.

    In per-line mode every physical line is patched on its own and written
    back with a trailing ``\\n``.  Otherwise the substitutions see the whole
    content at once, which is what ``MULTILINE`` patterns expect.  *source*
    and *dest* may be the same file.

    The result is written to a temporary file beside *dest* and moved into
    place with :func:`os.replace`, so a failure never leaves a half-written
    destination behind.

    Raises:
        MissingSourcePath: If *source* does not exist.
        PermissionDenied: If reading or writing is refused.
        GenerationError: For any other I/O failure.
    """
    source_path = Path(source)
    dest_path = Path(dest)

    try:
        with open(source_path, encoding=_ENCODING, errors=_ERRORS) as handle:
            text = handle.read()
    except FileNotFoundError as exc:
        raise MissingSourcePath(
            f"Cannot patch missing file: {source_path}",
            operation="patch_file", source=source_path, destination=dest_path,
        ) from exc
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot read {source_path}",
            operation="patch_file", source=source_path, destination=dest_path,
        ) from exc

    if per_line:
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        changed = False
        patched_lines: list[str] = []
        for line in lines:
            patched, line_changed = apply_substitutions(line, substitutions)
            changed = changed or line_changed
            patched_lines.append(patched)
        content = "".join(f"{line}\n" for line in patched_lines)
    else:
        content, changed = apply_substitutions(text, substitutions)

    _atomic_write(content, dest_path, mode_from=dest_path if dest_path.exists() else None)
    return changed


def _atomic_write(content: str, dest: Path, *, mode_from: Path | None) -> None:
    """Write *content* to a sibling temp file, then rename it onto *dest*.

    The result takes the mode of *mode_from*, or the default mode for new
    files (``0o666`` less the umask) when it is ``None``.
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=_ENCODING,
            errors=_ERRORS,
            newline="\n",
            dir=dest.parent,
            prefix=f".{dest.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_path = Path(handle.name)
            try:
                handle.write(content)
            except BaseException:
                handle.close()
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            if mode_from is not None:
                shutil.copymode(mode_from, tmp_path)
            else:
                tmp_path.chmod(_default_file_mode())
            os.replace(tmp_path, dest)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
    except PermissionError as exc:
        raise PermissionDenied(
            f"Cannot write {dest}", operation="patch_file", destination=dest
        ) from exc
    except OSError as exc:
        raise GenerationError(
            f"Failed to write {dest}: {exc}", operation="patch_file", destination=dest
        ) from exc


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
