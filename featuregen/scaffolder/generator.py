"""Per-module scaffolding.

Creates the layered directory skeleton for one module under
``lib/features/<module>/`` and writes the brand-new per-module files
rendered by the :class:`TemplateCatalog`. Files that already exist are left
alone, so re-running the generator for the same module changes nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from featuregen.config import Config
from featuregen.naming import ModuleIdentifier
from featuregen.utils import ensure_dir, write_text
from featuregen.wiring.models import PatchOutcome

from .templates import ResponseShape, TemplateCatalog

if TYPE_CHECKING:
    from featuregen.reporting import Reporter


# ---------------------------------------------------------------------------
# Module layout
# ---------------------------------------------------------------------------

MODULE_DIRECTORIES: tuple[str, ...] = (
    "data/datasources",
    "data/models",
    "data/repositories",
    "domain/entities",
    "domain/repositories",
    "domain/usecases",
    "domain/providers",
    "presentation/providers",
    "presentation/pages",
    "presentation/widgets",
    "presentation/state",
)

# Template id -> output path inside the module directory. ``{segment}`` is
# replaced by the path-segment token.
MODULE_FILES: dict[str, str] = {
    # Data layer
    "module/model.dart": "data/models/{segment}_model.dart",
    "module/remote_data_source.dart": "data/datasources/{segment}_remote_data_source.dart",
    "module/repository_impl.dart": "data/repositories/{segment}_repository_impl.dart",
    # Domain layer
    "module/entity.dart": "domain/entities/{segment}_entity.dart",
    "module/repository.dart": "domain/repositories/{segment}_repository.dart",
    "module/usecase.dart": "domain/usecases/get_{segment}_usecase.dart",
    # Presentation layer
    "module/state.dart": "presentation/state/{segment}_state.dart",
    "module/provider.dart": "presentation/providers/{segment}_provider.dart",
    "module/page.dart": "presentation/pages/{segment}_page.dart",
    # Dependency injection
    "module/providers.dart": "domain/providers/{segment}_providers.dart",
}


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class ModuleScaffolder:
    """Writes the on-disk skeleton and files of a single module."""

    def __init__(self, config: Config, catalog: TemplateCatalog, reporter: Reporter) -> None:
        self.config = config
        self.catalog = catalog
        self.reporter = reporter

    def generate(
        self,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> list[Path]:
        """Create the module directories and files.

        Args:
            identifier: Module being generated.
            shape: Selects the single-item or collection template variants.

        Returns:
            Paths of the files written in this run (existing files are not
            included).
        """
        root = self.config.feature_path(identifier)
        self._create_directory_structure(root)

        written: list[Path] = []
        for template_id, relative in module_files(identifier).items():
            path = root / relative
            content = self.catalog.render(template_id, identifier, shape)
            if create_file(path, content, self.reporter) is PatchOutcome.CREATED:
                written.append(path)
        return written

    def _create_directory_structure(self, root: Path) -> None:
        """Create the layered module directory tree."""
        for relative in MODULE_DIRECTORIES:
            make_directory(root / relative, self.reporter)


def module_files(identifier: ModuleIdentifier) -> dict[str, str]:
    """Map each module template id to its path relative to the module root."""
    return {
        template_id: pattern.format(segment=identifier.path_segment_token)
        for template_id, pattern in MODULE_FILES.items()
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_directory(path: Path, reporter: Reporter) -> bool:
    """Create *path* with parents, reporting (not raising) on failure."""
    try:
        ensure_dir(path)
    except OSError as exc:
        reporter.emit(PatchOutcome.FAILED, path, f"could not create directory: {exc}")
        return False
    return True


def create_file(path: Path, content: str, reporter: Reporter) -> PatchOutcome:
    """Write a brand-new file unless one already exists at *path*.

    Returns:
        ``CREATED``, ``SKIPPED_DUPLICATE`` when the file was already there,
        or ``FAILED`` when the write raised an ``OSError``.
    """
    try:
        if path.exists():
            reporter.emit(PatchOutcome.SKIPPED_DUPLICATE, path)
            return PatchOutcome.SKIPPED_DUPLICATE
        write_text(path, content)
    except OSError as exc:
        reporter.emit(PatchOutcome.FAILED, path, f"could not write: {exc}")
        return PatchOutcome.FAILED
    reporter.emit(PatchOutcome.CREATED, path)
    return PatchOutcome.CREATED
