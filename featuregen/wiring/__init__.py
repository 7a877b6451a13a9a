r"""featuregen wiring -- idempotent, anchor-based patching of existing files.

Quick usage::

    from featuregen.wiring import InsertPosition, apply_once, patch

    text, outcome = apply_once(
        text,
        "path: '/home'",
        lambda t: patch(t, r"routes:\s*\[", entry, InsertPosition.AFTER_OPEN_BRACKET),
    )
"""

from featuregen.wiring.models import (
    AnchorNotFound,
    InjectionTarget,
    InsertPosition,
    PatchOutcome,
    PatchRecord,
    Splice,
)
from featuregen.wiring.anchor import literal, patch, prepend
from featuregen.wiring.guard import apply_once
from featuregen.wiring.targets import apply_splices, apply_target
from featuregen.wiring.routes import RouteRegistrar
from featuregen.wiring.dependencies import DependencyRegistrar

__all__ = [
    "AnchorNotFound",
    "DependencyRegistrar",
    "InjectionTarget",
    "InsertPosition",
    "PatchOutcome",
    "PatchRecord",
    "RouteRegistrar",
    "Splice",
    "apply_once",
    "apply_splices",
    "apply_target",
    "literal",
    "patch",
    "prepend",
]
