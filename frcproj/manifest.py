"""Blueprint manifests (``templates.json`` / ``examples.json``).

The resource library describes its templates and examples in a JSON array
next to the blueprint folders.  Entries are validated with a Pydantic schema
before being turned into :class:`~frcproj.models.BlueprintDescriptor`
instances, so the generator never handles raw JSON.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ManifestError
from .models import BlueprintDescriptor, BlueprintKind, ResourceLayout, check_folder_name
from .paths import resolve
from .utils import load_json_list

SUPPORTED_MAIN_CLASS = "Main"
SUPPORTED_COMMAND_VERSION = 2


class ManifestEntry(BaseModel):
    """One entry of a blueprint manifest, as written by WPILib."""

    model_config = ConfigDict(extra="ignore")

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    foldername: str = Field(..., min_length=1)
    gradlebase: str = Field(..., min_length=1)
    hasunittests: bool = False
    mainclass: str = SUPPORTED_MAIN_CLASS
    commandversion: int = SUPPORTED_COMMAND_VERSION
    extravendordeps: list[str] = Field(default_factory=list)

    @field_validator("foldername", "gradlebase")
    @classmethod
    def _plain_folder_names(cls, value: str) -> str:
        return check_folder_name(value)

    @property
    def is_supported(self) -> bool:
        """Whether the generator can build this entry as-is."""
        return (
            self.mainclass == SUPPORTED_MAIN_CLASS
            and self.commandversion == SUPPORTED_COMMAND_VERSION
        )

    def to_descriptor(self, kind: BlueprintKind) -> BlueprintDescriptor:
        """Convert to a descriptor.

        Raises:
            ManifestError: If the entry uses a main class other than ``Main``
                or an older command-framework version.
        """
        if not self.is_supported:
            raise ManifestError(
                f"Blueprint '{self.foldername}' is not supported "
                f"(mainclass={self.mainclass}, commandversion={self.commandversion})"
            )
        return BlueprintDescriptor(
            name=self.foldername,
            kind=kind,
            build_variant=self.gradlebase,
            has_unit_tests=self.hasunittests,
            extra_vendordeps=self.extravendordeps,
            description=self.description,
        )


def manifest_path(
    resources_path: str | Path,
    kind: BlueprintKind,
    layout: ResourceLayout | None = None,
) -> Path:
    """Return the manifest location for *kind*, e.g. ``java/src/templates/templates.json``."""
    layout = layout or ResourceLayout()
    return resolve(resources_path, layout.lang, "src", kind.code_dir, f"{kind.code_dir}.json")


def load_manifest(path: str | Path) -> list[ManifestEntry]:
    """Read and validate every entry of the manifest at *path*.

    Raises:
        ManifestError: If the file is missing, is not JSON, or an entry does
            not match the schema.
    """
    manifest = Path(path)
    try:
        raw_entries = load_json_list(manifest)
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {manifest}", path=manifest) from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Manifest is not valid JSON: {manifest}: {exc}", path=manifest) from exc

    entries: list[ManifestEntry] = []
    for index, raw in enumerate(raw_entries):
        try:
            entries.append(ManifestEntry.model_validate(raw))
        except ValidationError as exc:
            raise ManifestError(
                f"Invalid entry #{index} in {manifest}: {exc}", path=manifest
            ) from exc
    return entries


def load_blueprints(
    resources_path: str | Path,
    kind: BlueprintKind = BlueprintKind.TEMPLATE,
    layout: ResourceLayout | None = None,
) -> list[BlueprintDescriptor]:
    """Load the supported blueprints of one kind, sorted by folder name.

    Entries this tool cannot generate (see :attr:`ManifestEntry.is_supported`)
    are left out.
    """
    entries = load_manifest(manifest_path(resources_path, kind, layout))
    return [
        entry.to_descriptor(kind)
        for entry in sorted(entries, key=lambda e: e.foldername)
        if entry.is_supported
    ]


def find_blueprint(
    blueprints: Sequence[BlueprintDescriptor], query: str
) -> BlueprintDescriptor | None:
    """Find a blueprint by exact name, else by the first name starting with *query*.

    Returns ``None`` when nothing matches or *query* is empty.
    """
    if not query:
        return None
    for blueprint in blueprints:
        if blueprint.name == query:
            return blueprint
    for blueprint in blueprints:
        if blueprint.name.startswith(query):
            return blueprint
    return None
