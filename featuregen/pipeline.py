"""featuregen pipeline orchestrator.

Runs one generation request as a strict sequence of stages:

Stage 1: SCAFFOLD      -- create the module directories and files.
Stage 2: ROUTES        -- register the page in the route table and constants.
Stage 3: DEPENDENCIES  -- register the providers in ``lib/main.dart``.

Each stage reports its own outcomes and never rolls back an earlier one.

Usage::

    featuregen HomeScreen
    featuregen ProductScreen --list
    featuregen-init
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import BaseModel, Field

from featuregen.config import Config
from featuregen.naming import ModuleIdentifier, derive_identifier
from featuregen.reporting import Reporter
from featuregen.scaffolder import (
    ModuleScaffolder,
    ProjectBootstrapper,
    ResponseShape,
    TemplateCatalog,
)
from featuregen.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)
from featuregen.wiring import DependencyRegistrar, PatchOutcome, RouteRegistrar

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FeaturegenError(Exception):
    """Base class for featuregen errors."""


class PreconditionError(FeaturegenError):
    """Raised when the working directory does not look like a project root."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Outcome of one generation run."""

    identifier: ModuleIdentifier
    shape: ResponseShape = ResponseShape.SINGLE
    files_created: list[Path] = Field(default_factory=list)
    routes: dict[Path, PatchOutcome] = Field(default_factory=dict)
    dependencies: PatchOutcome = PatchOutcome.FAILED
    failures: int = Field(default=0, description="Outcomes reported as failed during the run")

    @property
    def success(self) -> bool:
        """True when no stage reported a hard failure."""
        if self.failures or self.dependencies is PatchOutcome.FAILED:
            return False
        return all(
            outcome is not PatchOutcome.FAILED for outcome in self.routes.values()
        )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives scaffolding and wiring for one module.

    Attributes:
        config: Project layout.
        catalog: Template catalog shared by every stage.
        reporter: Sink for per-file outcomes.
    """

    def __init__(
        self,
        config: Config,
        catalog: TemplateCatalog | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config
        self.catalog = catalog or TemplateCatalog()
        self.reporter = reporter or Reporter(root=config.project_root)
        self.scaffolder = ModuleScaffolder(config, self.catalog, self.reporter)
        self.routes = RouteRegistrar(config, self.catalog, self.reporter)
        self.dependencies = DependencyRegistrar(config, self.catalog, self.reporter)

    # ------------------------------------------------------------------
    # Pre-flight checks
    # ------------------------------------------------------------------

    def preflight(self) -> None:
        """Refuse to run outside a project root.

        Raises:
            PreconditionError: If the marker file (``pubspec.yaml``) is absent.
        """
        if not self.config.marker_path.is_file():
            raise PreconditionError(
                self.config.marker_path,
                f"{self.config.marker_file} not found; run this command from the project root",
            )

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, raw_token: str, shape: ResponseShape = ResponseShape.SINGLE) -> GenerationResult:
        """Generate and wire the module named by *raw_token*.

        The identifier is derived once here and passed to every stage.
        """
        self.preflight()
        failed_before = self._failure_count()
        identifier = derive_identifier(raw_token, self.config.screen_suffix)

        print_header(f"Module {identifier.directory_token} ({raw_token})")
        files = self.scaffolder.generate(identifier, shape)

        print_header("Routes", color="bright_cyan")
        routes = self.routes.register(identifier, shape)

        print_header("Dependencies", color="bright_magenta")
        dependencies = self.dependencies.register(identifier, shape)

        return GenerationResult(
            identifier=identifier,
            shape=shape,
            files_created=files,
            routes=routes,
            dependencies=dependencies,
            failures=self._failure_count() - failed_before,
        )

    def init_project(self) -> list[Path]:
        """Lay down the base project structure (``featuregen-init``)."""
        self.preflight()
        print_header("Project structure")
        return ProjectBootstrapper(self.config, self.catalog, self.reporter).generate()

    def _failure_count(self) -> int:
        return self.reporter.counts()[PatchOutcome.FAILED.value]

    def print_summary(self) -> None:
        """Print per-outcome counts for everything reported in this run."""
        print_summary_table(
            {outcome: str(count) for outcome, count in self.reporter.counts().items()},
            title="Outcomes",
        )


# ---------------------------------------------------------------------------
# CLI entry points
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="featuregen",
        description="featuregen -- scaffold a feature module and wire it into the app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  featuregen HomeScreen\n"
            "  featuregen ProductScreen --list\n"
        ),
    )
    parser.add_argument(
        "module",
        nargs="?",
        help="Screen name, e.g. HomeScreen or UserProfileScreen",
    )
    parser.add_argument(
        "--list", "-l",
        dest="collection",
        action="store_true",
        help="Model the data layer as a collection instead of a single item",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``featuregen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.module:
        print_warning("Please provide a screen name.")
        parser.print_usage()
        return

    shape = ResponseShape.COLLECTION if args.collection else ResponseShape.SINGLE
    pipeline = Pipeline(Config(project_root=Path.cwd()))

    try:
        result = pipeline.run(args.module, shape)
    except PreconditionError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    pipeline.print_summary()
    if result.success:
        print_success(f'Feature "{result.identifier.directory_token}" created successfully!')
        console.print("Next steps:")
        console.print("  1. Run: flutter pub get")
        console.print("  2. Perform a hot restart (not hot reload)")
    else:
        print_warning("Feature generated with problems; see the messages above.")


def init_main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``featuregen-init``."""
    parser = argparse.ArgumentParser(
        prog="featuregen-init",
        description="Create the base Provider + Clean Architecture project structure",
    )
    parser.parse_args(argv)

    pipeline = Pipeline(Config(project_root=Path.cwd()))
    try:
        pipeline.init_project()
    except PreconditionError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    pipeline.print_summary()
    if pipeline.reporter.failed:
        print_warning("Project structure created with problems; see the messages above.")
        return
    print_success("Project structure created successfully!")
    console.print("Next steps:")
    console.print("  1. Add provider, go_router, dartz and connectivity_plus to pubspec.yaml")
    console.print("  2. Run: featuregen HomeScreen")


if __name__ == "__main__":
    main()
