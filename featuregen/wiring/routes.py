"""Route table and route-constant registration.

Wires a module's page into ``lib/app/routes/app_router.dart`` (an import
plus a ``GoRoute`` entry at the head of the ``routes: [`` list) and adds a
named constant to ``lib/core/constants/route_constants.dart``. Both files
are synthesised from a minimal template when they do not exist yet.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from featuregen.config import Config
from featuregen.naming import ModuleIdentifier
from featuregen.scaffolder.templates import ResponseShape, TemplateCatalog

from .guard import apply_once
from .models import InjectionTarget, InsertPosition, PatchOutcome, Splice
from .targets import apply_splices, apply_target

if TYPE_CHECKING:
    from featuregen.reporting import Reporter


ROUTES_LIST_ANCHOR = r"routes:\s*\["
IMPORT_ANCHOR = r"^import '"
CLOSING_BRACE_ANCHOR = r"\}"


class RouteRegistrar:
    """Registers a module in the route table and the route-constants file."""

    def __init__(self, config: Config, catalog: TemplateCatalog, reporter: Reporter) -> None:
        self.config = config
        self.catalog = catalog
        self.reporter = reporter

    # -- Public API --------------------------------------------------------

    def register(
        self,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> dict[Path, PatchOutcome]:
        """Patch (or create) the route table, then the constants file.

        The constants file is patched whatever happened to the route table,
        so a change in one file's shape never blocks the other.

        Returns:
            Mapping of target path to the outcome of its patch attempt.
        """
        results: dict[Path, PatchOutcome] = {}
        for target in (
            self.route_table_target(identifier, shape),
            self.constants_target(identifier, shape),
        ):
            results[target.path] = apply_target(target, self.reporter)
        return results

    # -- Targets -----------------------------------------------------------

    def route_table_target(
        self,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> InjectionTarget:
        """Build the route-table target: route entry first, then the import."""
        entry = self.catalog.render("wiring/route_entry.dart", identifier, shape)
        page_import = self.catalog.render("wiring/route_import.dart", identifier, shape)
        return InjectionTarget(
            path=self.config.router_path,
            marker=route_marker(identifier),
            splices=[
                Splice(
                    anchor=ROUTES_LIST_ANCHOR,
                    fragment="\n" + entry.rstrip("\n"),
                    position=InsertPosition.AFTER_OPEN_BRACKET,
                ),
                Splice(
                    anchor=IMPORT_ANCHOR,
                    fragment=page_import,
                    position=InsertPosition.AFTER_LAST_MATCH_LINE,
                    skip_if_present=True,
                    prepend_if_missing=True,
                ),
            ],
            fallback_content=self.catalog.render("wiring/app_router.dart", identifier, shape),
        )

    def constants_target(
        self,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> InjectionTarget:
        """Build the route-constants target, keyed on the constant's name."""
        constant = self.catalog.render("wiring/route_constant.dart", identifier, shape)
        return InjectionTarget(
            path=self.config.constants_path,
            marker=constant_marker(identifier),
            splices=[
                Splice(
                    anchor=CLOSING_BRACE_ANCHOR,
                    fragment=constant,
                    position=InsertPosition.BEFORE_LAST_MATCH,
                ),
            ],
            fallback_content=self.catalog.render("wiring/route_constants.dart", identifier, shape),
        )

    # -- In-memory variants ------------------------------------------------

    def patch_route_table(
        self,
        text: str,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> tuple[str, PatchOutcome]:
        """Apply the route-table patch to *text* without touching the disk."""
        target = self.route_table_target(identifier, shape)
        return apply_once(text, target.marker, lambda t: apply_splices(t, target.splices))

    def patch_constants(
        self,
        text: str,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> tuple[str, PatchOutcome]:
        """Apply the route-constant patch to *text* without touching the disk."""
        target = self.constants_target(identifier, shape)
        return apply_once(text, target.marker, lambda t: apply_splices(t, target.splices))


def route_marker(identifier: ModuleIdentifier) -> str:
    """Literal left in the route table once the module's route is registered."""
    return f"path: '{identifier.route_path}'"


def constant_marker(identifier: ModuleIdentifier) -> str:
    """Literal left in the constants file once the module's constant exists."""
    return f"static const String {identifier.constant_name} ="
