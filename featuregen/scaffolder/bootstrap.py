"""Base project generation for ``featuregen-init``.

Lays down the core directory skeleton and the shared files every module
relies on (error types, network info, themes, the route table and a
``main.dart`` with an empty ``MultiProvider``). Existing files are skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from featuregen.config import Config
from featuregen.wiring.models import PatchOutcome

from .generator import create_file, make_directory
from .templates import TemplateCatalog

if TYPE_CHECKING:
    from featuregen.reporting import Reporter


PROJECT_DIRECTORIES: tuple[str, ...] = (
    "lib/core/constants",
    "lib/core/errors",
    "lib/core/network",
    "lib/core/themes",
    "lib/core/utils",
    "lib/core/widgets",
    "lib/features",
    "lib/app/routes",
    "lib/app/providers",
    "test/features",
    "test/core",
)

_PROJECT_PREFIX = "project"


class ProjectBootstrapper:
    """Creates the base Provider + Clean Architecture project layout."""

    def __init__(self, config: Config, catalog: TemplateCatalog, reporter: Reporter) -> None:
        self.config = config
        self.catalog = catalog
        self.reporter = reporter

    def generate(self) -> list[Path]:
        """Create every core directory and render every ``project/`` template.

        Returns:
            Paths of the files written in this run.
        """
        root = self.config.project_root
        for relative in PROJECT_DIRECTORIES:
            make_directory(root / relative, self.reporter)

        written: list[Path] = []
        for template_id in self.catalog.list_templates(_PROJECT_PREFIX):
            relative = template_id[len(_PROJECT_PREFIX) + 1 :]
            path = root / relative
            content = self.catalog.render(template_id)
            if create_file(path, content, self.reporter) is PatchOutcome.CREATED:
                written.append(path)
        return written
