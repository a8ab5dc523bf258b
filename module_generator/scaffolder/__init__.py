"""Module scaffolder -- generates the files for one CRUD entity.

Takes an entity name plus compact field and select specifications and
renders a model, migration, factory, controller, Blade views and route
registration, either into the application's shared directories or into a
self-contained ``Modules/<Entity>`` tree.

Quick usage::

    from module_generator.config import GeneratorConfig
    from module_generator.scaffolder import ModuleGenerator, ModuleRequest
    from module_generator.scaffolder import parse_fields, parse_selects

    config = GeneratorConfig(base_path="/srv/app")
    request = ModuleRequest.resolve(
        "task",
        config,
        fields=parse_fields("title:string,description:text"),
        selects=parse_selects("status:pending,in-progress,completed"),
    )
    report = ModuleGenerator(config).generate(request)
"""

from module_generator.scaffolder.generator import ModuleGenerator, StageError
from module_generator.scaffolder.models import (
    FieldKind,
    FieldSpec,
    GeneratedArtifact,
    GenerationReport,
    ModuleRequest,
    NamingSet,
    SelectFieldSpec,
    StyleFlags,
    WriteOutcome,
)
from module_generator.scaffolder.naming import derive_names
from module_generator.scaffolder.spec_parser import parse_fields, parse_selects
from module_generator.scaffolder.templates import MissingTemplateError, TemplateRenderer
from module_generator.scaffolder.writer import ArtifactWriter, FilesystemError

__all__ = [
    "ArtifactWriter",
    "FieldKind",
    "FieldSpec",
    "FilesystemError",
    "GeneratedArtifact",
    "GenerationReport",
    "MissingTemplateError",
    "ModuleGenerator",
    "ModuleRequest",
    "NamingSet",
    "SelectFieldSpec",
    "StageError",
    "StyleFlags",
    "TemplateRenderer",
    "WriteOutcome",
    "derive_names",
    "parse_fields",
    "parse_selects",
]
