"""featuregen configuration.

Typed, centralised description of the target project's layout. All settings
use Pydantic v2 models so they are validated at construction time. The core
never reads environment variables or config files: every path below is a
fixed relative location inside the Flutter project root.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from featuregen.naming import ModuleIdentifier


class Config(BaseModel):
    """Layout of the project that modules are generated into.

    Instances are typically created once by the CLI entry point and then
    passed through the scaffolder and both registrars.
    """

    project_root: Path = Field(default=Path("."))
    marker_file: str = Field(
        default="pubspec.yaml",
        description="File whose presence marks a valid project root",
    )
    features_dir: str = Field(default="lib/features")
    router_file: str = Field(default="lib/app/routes/app_router.dart")
    constants_file: str = Field(default="lib/core/constants/route_constants.dart")
    registration_root: str = Field(default="lib/main.dart")
    screen_suffix: str = Field(
        default="Screen",
        description="Trailing literal stripped from the module display token",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def marker_path(self) -> Path:
        """Path to the project marker (``pubspec.yaml``)."""
        return self.project_root / self.marker_file

    @property
    def features_path(self) -> Path:
        """Directory holding one sub-directory per generated module."""
        return self.project_root / self.features_dir

    @property
    def router_path(self) -> Path:
        """Path to the central route table."""
        return self.project_root / self.router_file

    @property
    def constants_path(self) -> Path:
        """Path to the named route-constants table."""
        return self.project_root / self.constants_file

    @property
    def registration_path(self) -> Path:
        """Path to the dependency-registration root."""
        return self.project_root / self.registration_root

    def feature_path(self, identifier: ModuleIdentifier) -> Path:
        """Root directory of a single generated module."""
        return self.features_path / identifier.directory_token
