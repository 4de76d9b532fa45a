"""nestgen scaffolder -- materializes NestJS module blueprints into a project.

Pipeline: load a blueprint set, rename and optionally strip ``@Auth()``,
write the files without overwriting anything, then register the new modules
in the project's ``app.module``.

Quick usage::

    from nestgen.scaffolder import ModuleGenerator

    generator = ModuleGenerator("/path/to/nest-app")
    report = generator.generate_crud("widget", include_auth=False)
    print(report.created, report.composition_patched)
"""

from nestgen.scaffolder.generator import ModuleGenerator, resolve_target
from nestgen.scaffolder.loader import load_templates
from nestgen.scaffolder.models import (
    GenerationReport,
    MaterializedFile,
    ModuleNameError,
    PatchNotApplicable,
    RegistrationEntry,
    RenameRequest,
    ScaffoldError,
    TemplateLoadError,
    WriteOutcome,
    WriteStatus,
)
from nestgen.scaffolder.patcher import merge_registrations, patch_composition_file
from nestgen.scaffolder.templates import TemplateRenderer
from nestgen.scaffolder.transform import materialize, transform_content, transform_path
from nestgen.scaffolder.writer import write_files

__all__ = [
    "GenerationReport",
    "MaterializedFile",
    "ModuleGenerator",
    "ModuleNameError",
    "PatchNotApplicable",
    "RegistrationEntry",
    "RenameRequest",
    "ScaffoldError",
    "TemplateLoadError",
    "TemplateRenderer",
    "WriteOutcome",
    "WriteStatus",
    "load_templates",
    "materialize",
    "merge_registrations",
    "patch_composition_file",
    "resolve_target",
    "transform_content",
    "transform_path",
    "write_files",
]
