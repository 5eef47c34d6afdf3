"""frcproj -- creates WPILib robot projects from installed templates.

The generator copies a template or example out of a WPILib resource library,
rewrites its package declarations, lays down the Gradle build scaffold and
vendor dependency manifests, and sets the team number.

Quick usage::

    from frcproj import BlueprintDescriptor, GenerationRequest, generate

    request = GenerationRequest(
        resources_path=Path("~/wpilib/2025/utility/resources/app/resources").expanduser(),
        destination=Path("/tmp/robot"),
        blueprint=BlueprintDescriptor(name="timed", build_variant="java"),
        team_number=1778,
    )
    result = generate(request)
"""

from frcproj.errors import (
    GenerationError,
    MalformedVersionFile,
    ManifestError,
    MissingSourcePath,
    PermissionDenied,
    UnknownVendorKey,
    UnsupportedFileType,
)
from frcproj.generator import ProjectGenerator, generate
from frcproj.models import (
    BlueprintDescriptor,
    BlueprintKind,
    GenerationRequest,
    GenerationResult,
    ResourceLayout,
)

__version__ = "0.1.0"

__all__ = [
    "BlueprintDescriptor",
    "BlueprintKind",
    "GenerationError",
    "GenerationRequest",
    "GenerationResult",
    "MalformedVersionFile",
    "ManifestError",
    "MissingSourcePath",
    "PermissionDenied",
    "ProjectGenerator",
    "ResourceLayout",
    "UnknownVendorKey",
    "UnsupportedFileType",
    "generate",
]
