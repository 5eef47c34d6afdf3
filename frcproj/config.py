"""frcproj configuration.

User-level defaults for the command line tool.  The generator itself takes
everything it needs from a :class:`~frcproj.models.GenerationRequest`; this
module only decides where resource libraries are looked up and which values
the CLI falls back to.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from .models import DEFAULT_PACKAGE

DEFAULT_CONFIG_PATH = Path("~/.config/frcproj/config.json")


class Config(BaseModel):
    """Command-line defaults.

    Instances are normally built with :meth:`from_env` or :meth:`load` by the
    CLI entry point.
    """

    wpilib_home: Path = Field(default=Path("~/wpilib"))
    resources_path: Path | None = Field(
        default=None, description="Skip discovery and always use this resource library"
    )
    default_package: str = Field(default=DEFAULT_PACKAGE, pattern=r"^[A-Za-z0-9_.]+$")
    staged: bool = Field(default=False)

    @property
    def wpilib_home_path(self) -> Path:
        """``wpilib_home`` with ``~`` expanded."""
        return self.wpilib_home.expanduser()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = (path or DEFAULT_CONFIG_PATH).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).expanduser().read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FRCPROJ_WPILIB_HOME, FRCPROJ_RESOURCES, FRCPROJ_PACKAGE,
            FRCPROJ_STAGED.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("FRCPROJ_WPILIB_HOME"):
            kwargs["wpilib_home"] = Path(os.environ["FRCPROJ_WPILIB_HOME"])
        if os.environ.get("FRCPROJ_RESOURCES"):
            kwargs["resources_path"] = Path(os.environ["FRCPROJ_RESOURCES"]).expanduser()
        if os.environ.get("FRCPROJ_PACKAGE"):
            kwargs["default_package"] = os.environ["FRCPROJ_PACKAGE"]
        if os.environ.get("FRCPROJ_STAGED"):
            kwargs["staged"] = os.environ["FRCPROJ_STAGED"].strip().lower() in ("1", "true", "yes")
        return cls(**kwargs)
