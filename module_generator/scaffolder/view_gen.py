"""Blade view generation.

Builds per-field fragments from the partial templates under
``views/partials/`` and drops them into the slots of the four page
templates (``index``, ``create``, ``edit``, ``show``).  A page whose template,
or one of the partials it needs, cannot be found is skipped and recorded in
``ViewGenerator.skipped``; the other pages are still produced.
"""

from __future__ import annotations

from typing import Any

from .layout import ModuleLayout
from .models import FieldKind, FieldSpec, GeneratedArtifact, NamingSet, StyleFlags
from .templates import MissingTemplateError, TemplateRenderer

VIEWS = ("index", "create", "edit", "show")

_FORM_PARTIALS = frozenset({"input", "textarea", "checkbox", "select"})

# Partials whose output ends up in each page.
VIEW_PARTIALS: dict[str, frozenset[str]] = {
    "index": frozenset({"table-header", "table-cell"}),
    "create": _FORM_PARTIALS,
    "edit": _FORM_PARTIALS,
    "show": frozenset({"detail-row"}),
}

_INPUT_TYPES: dict[FieldKind, str] = {
    FieldKind.DATE: "date",
    FieldKind.TIME: "time",
    FieldKind.DATE_TIME: "datetime-local",
    FieldKind.TIMESTAMP: "datetime-local",
    FieldKind.EMAIL: "email",
    FieldKind.URL: "url",
    FieldKind.PASSWORD: "password",
}


class ViewGenerator:
    """Generates the CRUD views for one entity."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer
        self.skipped: list[str] = []
        self.missing_partials: list[str] = []

    def emit(
        self,
        names: NamingSet,
        fields: list[FieldSpec],
        selects: dict[str, list[str]],
        flags: StyleFlags,
    ) -> list[GeneratedArtifact]:
        """Render every available view.

        Args:
            names: Derived naming set.
            fields: Plain fields; those also in *selects* render as dropdowns.
            selects: Select field name -> ordered options.
            flags: Layout flags.

        Returns:
            One artifact per view whose templates were all found, in
            ``index, create, edit, show`` order.
        """
        self.skipped = []
        self.missing_partials = []
        layout = ModuleLayout(names, flags)
        slots = self._build_slots(names, fields, selects)

        artifacts: list[GeneratedArtifact] = []
        for view in VIEWS:
            if VIEW_PARTIALS[view].intersection(self.missing_partials):
                self.skipped.append(view)
                continue
            context = {
                "entity": names.entity,
                "variable": names.variable,
                "route_segment": names.route_segment,
                **slots,
            }
            try:
                content = self.renderer.render(f"views/{view}.blade.php.j2", context)
            except MissingTemplateError:
                self.skipped.append(view)
                continue
            artifacts.append(
                GeneratedArtifact(relative_path=layout.view_path(view), content=content)
            )
        return artifacts

    # -- Fragments ---------------------------------------------------------

    def _build_slots(
        self,
        names: NamingSet,
        fields: list[FieldSpec],
        selects: dict[str, list[str]],
    ) -> dict[str, Any]:
        form_fields: list[str] = []
        select_fields: list[str] = []
        headers: list[str] = []
        cells: list[str] = []
        details: list[str] = []

        listed: list[str] = []
        for field in fields:
            if field.name in selects or field.name in listed:
                continue
            listed.append(field.name)
            form_fields.append(self.form_input(field, names.variable))
        for name, options in selects.items():
            listed.append(name)
            select_fields.append(self.select_input(name, options, names.variable))

        for name in listed:
            ctx = {"name": name, "variable": names.variable}
            headers.append(self._partial("table-header", ctx))
            cells.append(self._partial("table-cell", ctx))
            details.append(self._partial("detail-row", ctx))

        return {
            "form_fields": "".join(form_fields),
            "select_fields": "".join(select_fields),
            "table_headers": "".join(headers),
            "table_cells": "".join(cells),
            "detail_rows": "".join(details),
            "column_count": len(listed) + 2,
        }

    def form_input(self, field: FieldSpec, variable: str) -> str:
        """Render the form control matching the field's kind."""
        kind = field.kind
        ctx: dict[str, Any] = {"name": field.name, "variable": variable, "extra_attrs": ""}
        if kind is FieldKind.BOOLEAN:
            return self._partial("checkbox", ctx)
        if kind.is_long_text:
            return self._partial("textarea", ctx)
        if kind.is_integer or kind is FieldKind.YEAR:
            ctx["input_type"] = "number"
        elif kind.is_decimal:
            ctx["input_type"] = "number"
            ctx["extra_attrs"] = 'step="0.01"'
        else:
            ctx["input_type"] = _INPUT_TYPES.get(kind, "text")
        return self._partial("input", ctx)

    def select_input(self, name: str, options: list[str], variable: str) -> str:
        """Render a dropdown listing *options* in order."""
        return self._partial("select", {"name": name, "options": options, "variable": variable})

    def _partial(self, name: str, context: dict[str, Any]) -> str:
        try:
            return self.renderer.render(f"views/partials/{name}.blade.php.j2", context)
        except MissingTemplateError:
            if name not in self.missing_partials:
                self.missing_partials.append(name)
            return ""
