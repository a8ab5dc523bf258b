"""Controller generation.

Two templates are available: ``controller.php.j2`` returns Blade views and
redirects, ``api-controller.php.j2`` returns JSON.  Select fields fill named
slots in the template instead of being patched into rendered text:

* ``select_options``     -- ``$statusOptions = Task::STATUS_OPTIONS;`` lines
  for the ``create`` and ``edit`` actions
* ``create_view_params`` -- ``'statusOptions' => $statusOptions`` bindings
* ``edit_view_params``   -- names passed to ``compact()`` in ``edit``
* ``validation_rules``   -- ``(attribute, rule)`` pairs for store/update
"""

from __future__ import annotations

from .layout import ModuleLayout
from .models import FieldKind, FieldSpec, GeneratedArtifact, NamingSet, StyleFlags
from .spec_parser import select_specs
from .templates import TemplateRenderer

VIEW_KINDS = ("index", "create", "edit", "show")

_RULES_BY_KIND: dict[FieldKind, str] = {
    FieldKind.BOOLEAN: "boolean",
    FieldKind.EMAIL: "nullable|email",
    FieldKind.URL: "nullable|url",
    FieldKind.UUID: "nullable|uuid",
    FieldKind.IP_ADDRESS: "nullable|ip",
    FieldKind.MAC_ADDRESS: "nullable|mac_address",
    FieldKind.YEAR: "nullable|integer",
    FieldKind.STRING: "nullable|string|max:255",
    FieldKind.PASSWORD: "nullable|string|min:8",
    FieldKind.TEXT: "nullable|string",
    FieldKind.LONG_TEXT: "nullable|string",
}


class ControllerGenerator:
    """Generates the web or API controller for one entity."""

    web_template = "controller.php.j2"
    api_template = "api-controller.php.j2"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def emit(
        self,
        names: NamingSet,
        selects: dict[str, list[str]],
        is_api: bool,
        flags: StyleFlags,
        fields: list[FieldSpec] | None = None,
    ) -> GeneratedArtifact:
        """Render the controller file.

        Args:
            names: Derived naming set; ``route_segment`` is used for every
                named route and redirect.
            selects: Select field name -> ordered options.
            is_api: Use the JSON template instead of the view template.
            flags: Layout flags; module style changes namespaces, view names
                and path.
            fields: Plain fields, used for validation rules.

        Returns:
            The rendered controller artifact.
        """
        layout = ModuleLayout(names, flags)
        specs = select_specs(selects)
        context = {
            "entity": names.entity,
            "variable": names.variable,
            "route_segment": names.route_segment,
            "namespace": layout.controller_namespace,
            "model_class": layout.model_class,
            "module_style": flags.module_style,
            "views": {kind: layout.view_name(kind) for kind in VIEW_KINDS},
            "select_options": [
                f"${s.options_variable} = {names.entity}::{s.constant_name};" for s in specs
            ],
            "create_view_params": [
                f"'{s.options_variable}' => ${s.options_variable}" for s in specs
            ],
            "edit_view_params": [names.variable] + [s.options_variable for s in specs],
            "validation_rules": validation_rules(fields or [], selects),
        }
        template = self.api_template if is_api else self.web_template
        content = self.renderer.render(template, context)
        return GeneratedArtifact(relative_path=layout.controller_path, content=content)


def validation_rules(
    fields: list[FieldSpec],
    selects: dict[str, list[str]],
) -> list[tuple[str, str]]:
    """Rules for store/update: one per plain field, then one per select.

    Select fields must be one of their declared options.
    """
    rules: list[tuple[str, str]] = []
    seen: set[str] = set()
    for field in fields:
        if field.name in selects or field.name in seen:
            continue
        seen.add(field.name)
        rules.append((field.name, _rule_for_kind(field.kind)))
    for name, options in selects.items():
        rules.append((name, "required|in:" + ",".join(options)))
    return rules


def _rule_for_kind(kind: FieldKind) -> str:
    if kind.is_integer:
        return "nullable|integer"
    if kind.is_decimal:
        return "nullable|numeric"
    if kind is FieldKind.TIME:
        return "nullable|date_format:H:i"
    if kind.is_temporal:
        return "nullable|date"
    return _RULES_BY_KIND.get(kind, "nullable")
