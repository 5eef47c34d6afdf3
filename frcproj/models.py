"""Typed data model for a generation run.

All models are Pydantic v2 so that collaborator input (manifest JSON, CLI
answers, config files) is validated at construction time and the generator
only ever sees well-formed values.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PACKAGE = "frc.robot"
UNSET_TEAM_NUMBER = -1


def check_folder_name(value: str) -> str:
    """Reject names that would not stay a single directory below their parent."""
    if "/" in value or "\\" in value or ".." in value:
        raise ValueError(f"'{value}' must be a plain directory name")
    return value


class BlueprintKind(Enum):
    """Whether a blueprint is a template or an example.

    Each member carries the resource subdirectory names for its main code
    and its unit tests.
    """

    TEMPLATE = ("templates", "templates_test")
    EXAMPLE = ("examples", "examples_test")

    def __init__(self, code_dir: str, test_dir: str) -> None:
        self.code_dir = code_dir
        self.test_dir = test_dir

    @property
    def label(self) -> str:
        return self.name.lower()


class BlueprintDescriptor(BaseModel):
    """One buildable template or example from the resource library."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Folder name of the blueprint")
    kind: BlueprintKind = Field(default=BlueprintKind.TEMPLATE)
    build_variant: str = Field(..., min_length=1, description="Build scaffold subdirectory")
    has_unit_tests: bool = Field(default=False)
    extra_vendordeps: tuple[str, ...] = Field(default=())
    description: str = Field(default="")

    @field_validator("name", "build_variant")
    @classmethod
    def _plain_folder_names(cls, value: str) -> str:
        return check_folder_name(value)

    @field_validator("extra_vendordeps", mode="before")
    @classmethod
    def _dedupe_vendordeps(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return tuple(dict.fromkeys(value))
        return value


class ResourceLayout(BaseModel):
    """Directory names inside a resource library.

    Installed WPILib releases keep their build scaffolding under ``gradle``;
    :func:`frcproj.resources.detect_layout` picks that up.
    """

    model_config = ConfigDict(frozen=True)

    lang: str = Field(default="java")
    build_dir: str = Field(default="build")
    shared_dir: str = Field(default="shared")
    version_file: str = Field(default="version.txt")
    vendordeps_dir: str = Field(default="vendordeps")


class GenerationRequest(BaseModel):
    """Validated input for a single generation run."""

    model_config = ConfigDict(frozen=True)

    resources_path: Path
    destination: Path
    blueprint: BlueprintDescriptor
    team_number: int = Field(default=UNSET_TEAM_NUMBER, ge=UNSET_TEAM_NUMBER)
    package: str = Field(default=DEFAULT_PACKAGE, pattern=r"^[A-Za-z0-9_.]+$")
    layout: ResourceLayout = Field(default_factory=ResourceLayout)
    staged: bool = Field(
        default=False,
        description="Build in a scratch directory and publish with one rename",
    )

    @field_validator("package")
    @classmethod
    def _package_segments(cls, value: str) -> str:
        if any(not segment for segment in value.split(".")):
            raise ValueError(f"Package '{value}' contains an empty segment")
        return value

    @property
    def main_class(self) -> str:
        """Fully-qualified main class written into ``build.gradle``."""
        return f"{self.package}.Main"


class GenerationResult(BaseModel):
    """Summary of a completed generation run."""

    project_root: Path
    files_copied: int = 0
    files_patched: int = 0
    files_changed: int = 0
    vendordeps: list[str] = Field(default_factory=list)

    def as_dict(self) -> dict[str, str]:
        """Return a plain ``{label: value}`` mapping for summary tables."""
        return {
            "Project": str(self.project_root),
            "Files copied": str(self.files_copied),
            "Files patched": f"{self.files_patched} ({self.files_changed} changed)",
            "Vendor deps": ", ".join(self.vendordeps) or "-",
        }
