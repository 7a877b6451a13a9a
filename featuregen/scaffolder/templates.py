"""Jinja2 template catalog for module scaffolding.

Provides the TemplateCatalog class which loads Jinja2 templates from the
``featuregen/scaffolder/templates/`` directory and renders them for one
module identifier and response shape. Rendering is pure: identical inputs
always give identical text, which the idempotency checks rely on.

Template groups:

* ``module/``  -- the per-module files written by the scaffolder;
* ``wiring/``  -- fragments and fallback files used by the registrars;
* ``project/`` -- the base project written by ``featuregen-init``.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from featuregen.naming import ModuleIdentifier


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_SUFFIX = ".j2"


class ResponseShape(str, Enum):
    """Whether a module's data layer models one item or a collection."""
    SINGLE = "single"
    COLLECTION = "collection"


# ---------------------------------------------------------------------------
# TemplateCatalog
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Renders Jinja2 templates for module scaffolding and wiring.

    Templates are addressed by their path relative to the template directory
    without the ``.j2`` extension, e.g. ``"module/model.dart"``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["camel_case"] = _camel_case_filter

    # -- Rendering ---------------------------------------------------------

    def render(
        self,
        template_id: str,
        identifier: ModuleIdentifier | None = None,
        shape: ResponseShape = ResponseShape.SINGLE,
    ) -> str:
        """Render one template for *identifier* and *shape*.

        Args:
            template_id: Path relative to the template directory, without
                the ``.j2`` extension (e.g. ``"wiring/route_entry.dart"``).
            identifier: Module the text is generated for. Project-level
                templates take ``None``.
            shape: Response shape selecting single-item or collection
                variants.

        Returns:
            The rendered text.
        """
        template = self.env.get_template(_template_name(template_id))
        return template.render(**build_context(identifier, shape))

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return the sorted template ids under *prefix*.

        Ids are relative to the template root and carry no ``.j2`` suffix.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()[: -len(_SUFFIX)]
            for p in search_dir.rglob(f"*{_SUFFIX}")
        )


def build_context(
    identifier: ModuleIdentifier | None,
    shape: ResponseShape = ResponseShape.SINGLE,
) -> dict[str, Any]:
    """Build the Jinja2 context for one module and response shape."""
    context: dict[str, Any] = {
        "module": identifier,
        "shape": shape.value,
        "collection": shape is ResponseShape.COLLECTION,
    }
    if identifier is not None:
        name = identifier.class_name
        collection = context["collection"]
        context.update(
            screen_name=identifier.display_token,
            class_name=name,
            feature=identifier.directory_token,
            segment=identifier.path_segment_token,
            route_path=identifier.route_path,
            constant_name=identifier.constant_name,
            fetch_method=f"get{name}List" if collection else f"get{name}Data",
            model_result=f"List<{name}Model>" if collection else f"{name}Model",
            entity_result=f"List<{name}Entity>" if collection else f"{name}Entity",
        )
    return context


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``SomeThing`` to ``someThing``."""
    parts = re.split(r"[-_\s]+", value)
    pascal = "".join(word[:1].upper() + word[1:] for word in parts if word)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _template_name(template_id: str) -> str:
    return template_id if template_id.endswith(_SUFFIX) else template_id + _SUFFIX
