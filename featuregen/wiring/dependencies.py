"""Dependency registration in ``lib/main.dart``.

A module's data source, repository, use case and change notifier are
registered as one pre-assembled block at the head of the ``providers: [``
list of the root ``MultiProvider``. Depending on what the root file looks
like, the registrar:

* reports a failure and writes nothing when the file is absent;
* patches the container when a ``MultiProvider(`` with a providers list
  exists;
* rewrites the whole file around a fresh ``MultiProvider`` when only the
  ``runApp(`` bootstrap call is found;
* reports that manual setup is required when neither is present.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from featuregen.config import Config
from featuregen.naming import ModuleIdentifier
from featuregen.scaffolder.templates import ResponseShape, TemplateCatalog
from featuregen.utils import read_text, write_text

from .guard import apply_once
from .models import AnchorNotFound, InjectionTarget, InsertPosition, PatchOutcome, Splice
from .routes import IMPORT_ANCHOR
from .targets import apply_splices

if TYPE_CHECKING:
    from featuregen.reporting import Reporter


CONTAINER_ANCHOR = r"MultiProvider\s*\("
PROVIDERS_LIST_ANCHOR = r"(?s)MultiProvider\s*\(.*?providers\s*:\s*\["
BOOTSTRAP_ANCHOR = r"runApp\s*\("

INIT_HINT = "run featuregen-init to create the base project first"


class DependencyRegistrar:
    """Registers a module's providers in the dependency-registration root."""

    def __init__(self, config: Config, catalog: TemplateCatalog, reporter: Reporter) -> None:
        self.config = config
        self.catalog = catalog
        self.reporter = reporter

    # -- Public API --------------------------------------------------------

    def register(
        self,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> PatchOutcome:
        """Wire *identifier* into the registration root and report the outcome."""
        path = self.config.registration_path

        try:
            if not path.exists():
                self.reporter.emit(PatchOutcome.FAILED, path, f"not found; {INIT_HINT}")
                return PatchOutcome.FAILED
            text = read_text(path)
        except OSError as exc:
            self.reporter.emit(PatchOutcome.FAILED, path, f"could not read: {exc}")
            return PatchOutcome.FAILED

        patched, outcome = self.patch_registration_root(text, identifier, shape)

        if outcome in (PatchOutcome.INSERTED, PatchOutcome.CREATED):
            try:
                write_text(path, patched)
            except OSError as exc:
                self.reporter.emit(PatchOutcome.FAILED, path, f"could not write: {exc}")
                return PatchOutcome.FAILED

        self.reporter.emit(outcome, path, self._describe(outcome, identifier))
        return outcome

    def patch_registration_root(
        self,
        text: str,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> tuple[str, PatchOutcome]:
        """Compute the new registration-root content entirely in memory.

        Returns:
            ``(text, outcome)``. ``CREATED`` means the whole file was
            synthesised around the bootstrap call; ``FAILED`` means neither
            a container nor a bootstrap call was found and *text* is
            returned unchanged.
        """
        target = self.registration_target(identifier, shape)

        def _patch(current: str) -> str | AnchorNotFound:
            if not has_container(current):
                return AnchorNotFound(anchor=CONTAINER_ANCHOR)
            return apply_splices(current, target.splices)

        patched, outcome = apply_once(text, target.marker, _patch)

        if outcome is PatchOutcome.SKIPPED_ANCHOR_MISSING and not has_container(text):
            if has_bootstrap(text):
                rebuilt = self.catalog.render("wiring/main_with_providers.dart", identifier, shape)
                return rebuilt, PatchOutcome.CREATED
            return text, PatchOutcome.FAILED

        return patched, outcome

    # -- Targets -----------------------------------------------------------

    def registration_target(
        self,
        identifier: ModuleIdentifier,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> InjectionTarget:
        """Build the target: one registration block, then one splice per import."""
        block = self.catalog.render("wiring/registration_block.dart", identifier, shape)
        imports = self.catalog.render("wiring/registration_imports.dart", identifier, shape)

        splices = [
            Splice(
                anchor=PROVIDERS_LIST_ANCHOR,
                fragment="\n\n" + block.rstrip("\n"),
                position=InsertPosition.AFTER_OPEN_BRACKET,
            ),
        ]
        splices.extend(
            Splice(
                anchor=IMPORT_ANCHOR,
                fragment=line + "\n",
                position=InsertPosition.AFTER_LAST_MATCH_LINE,
                skip_if_present=True,
                prepend_if_missing=True,
            )
            for line in imports.splitlines()
            if line.strip()
        )

        return InjectionTarget(
            path=self.config.registration_path,
            marker=registration_marker(identifier),
            splices=splices,
        )

    def _describe(self, outcome: PatchOutcome, identifier: ModuleIdentifier) -> str:
        if outcome is PatchOutcome.SKIPPED_DUPLICATE:
            return f"{identifier.class_name} providers already registered"
        if outcome is PatchOutcome.SKIPPED_ANCHOR_MISSING:
            return "MultiProvider has no providers list, file left untouched"
        if outcome is PatchOutcome.CREATED:
            return "no MultiProvider found, rebuilt around runApp()"
        if outcome is PatchOutcome.FAILED:
            return "no MultiProvider or runApp() found, manual setup required"
        return f"added {identifier.class_name} providers"


def registration_marker(identifier: ModuleIdentifier) -> str:
    """Literal used only once per module inside its registration block."""
    return f"ChangeNotifierProvider<{identifier.class_name}Provider>"


def has_container(text: str) -> bool:
    return re.search(CONTAINER_ANCHOR, text) is not None


def has_bootstrap(text: str) -> bool:
    return re.search(BOOTSTRAP_ANCHOR, text) is not None
