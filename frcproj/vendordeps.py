"""Vendor dependency manifests.

Every generated project gets the command-based framework manifest.  Blueprints
for the Romi and XRP platforms list extra short keys that map to their own
manifest files.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path

from .errors import GenerationError, MissingSourcePath, PermissionDenied, UnknownVendorKey
from .utils import ensure_dir

BASELINE_VENDORDEP = "WPILibNewCommands.json"

VENDORDEP_FILES: dict[str, str] = {
    "romi": "RomiVendordep.json",
    "xrp": "XRPVendordep.json",
}


def resolve_vendor_files(keys: Iterable[str]) -> list[str]:
    """Map vendor dependency *keys* to manifest filenames.

    The baseline manifest always comes first, followed by one file per key in
    the order given.

    Raises:
        UnknownVendorKey: If a key is not in :data:`VENDORDEP_FILES`.
    """
    filenames = [BASELINE_VENDORDEP]
    for key in keys:
        try:
            filenames.append(VENDORDEP_FILES[key])
        except KeyError:
            raise UnknownVendorKey(key) from None
    return filenames


def copy_vendor_files(
    source_dir: str | Path,
    dest_dir: str | Path,
    filenames: Sequence[str],
) -> list[Path]:
    """Copy each manifest in *filenames* from *source_dir* to *dest_dir*.

    All sources are checked before anything is copied, so a missing manifest
    leaves no partial vendor set behind.

    Returns:
        The written destination paths, in *filenames* order.

    Raises:
        MissingSourcePath: If a manifest is absent from *source_dir*.
        PermissionDenied: If a copy is refused.
    """
    source_root = Path(source_dir)
    dest_root = Path(dest_dir)

    for name in filenames:
        source = source_root / name
        if not source.is_file():
            raise MissingSourcePath(
                f"Vendor dependency manifest not found: {source}",
                operation="copy_vendor_files", source=source, destination=dest_root / name,
            )

    ensure_dir(dest_root)
    written: list[Path] = []
    for name in filenames:
        source = source_root / name
        target = dest_root / name
        try:
            shutil.copyfile(source, target)
        except PermissionError as exc:
            raise PermissionDenied(
                f"Cannot copy {source} to {target}",
                operation="copy_vendor_files", source=source, destination=target,
            ) from exc
        except OSError as exc:
            raise GenerationError(
                f"Failed to copy {source} to {target}: {exc}",
                operation="copy_vendor_files", source=source, destination=target,
            ) from exc
        written.append(target)
    return written
