"""featuregen scaffolder -- writes new module files and the base project.

This module renders the per-module Flutter files (data, domain and
presentation layers) from Jinja2 templates, and the base project laid down
by ``featuregen-init``.

Quick usage::

    from featuregen.scaffolder import ModuleScaffolder, TemplateCatalog

    scaffolder = ModuleScaffolder(config, TemplateCatalog(), reporter)
    scaffolder.generate(derive_identifier("HomeScreen"))
"""

from featuregen.scaffolder.templates import ResponseShape, TemplateCatalog
from featuregen.scaffolder.generator import ModuleScaffolder
from featuregen.scaffolder.bootstrap import ProjectBootstrapper

__all__ = [
    "ModuleScaffolder",
    "ProjectBootstrapper",
    "ResponseShape",
    "TemplateCatalog",
]
