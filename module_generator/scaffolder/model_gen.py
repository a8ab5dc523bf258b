"""Eloquent model generation.

Renders ``model.php.j2`` with the mass-assignable attribute list and one
``<NAME>_OPTIONS`` constant per select field.
"""

from __future__ import annotations

from .layout import ModuleLayout
from .models import FieldSpec, GeneratedArtifact, NamingSet, StyleFlags
from .spec_parser import select_specs
from .templates import TemplateRenderer


class ModelGenerator:
    """Generates the data model for one entity."""

    template = "model.php.j2"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def emit(
        self,
        names: NamingSet,
        fields: list[FieldSpec],
        selects: dict[str, list[str]],
        flags: StyleFlags,
    ) -> GeneratedArtifact:
        """Render the model file.

        Args:
            names: Derived naming set for the entity.
            fields: Plain fields, in input order.
            selects: Select field name -> ordered options.
            flags: Layout flags; module style changes namespace and path.

        Returns:
            The rendered model artifact.
        """
        layout = ModuleLayout(names, flags)
        context = {
            "entity": names.entity,
            "table": names.table,
            "namespace": layout.model_namespace,
            "factory_class": layout.factory_class,
            "module_style": flags.module_style,
            "fillable": fillable_attributes(fields, selects),
            "selects": select_specs(selects),
        }
        content = self.renderer.render(self.template, context)
        return GeneratedArtifact(relative_path=layout.model_path, content=content)


def fillable_attributes(
    fields: list[FieldSpec],
    selects: dict[str, list[str]],
) -> list[str]:
    """Field names in input order, then select names not already present.

    Each name appears exactly once even when the field list repeats it.
    """
    fillable: list[str] = []
    for name in [f.name for f in fields] + list(selects):
        if name not in fillable:
            fillable.append(name)
    return fillable
