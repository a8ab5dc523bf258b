"""Route registration for a generated controller.

Flat layout: a resource route is appended to the shared ``routes/web.php``
or ``routes/api.php`` unless the controller is already referenced there.

Module layout: a dedicated ``routes.php`` / ``api-routes.php`` is written
inside the module, and the module's service provider is created or patched
so it loads that file exactly once.

Registration is idempotent: running it twice leaves one declaration.
"""

from __future__ import annotations

import re

from .layout import ModuleLayout
from .models import GeneratedArtifact, NamingSet, StyleFlags, WriteOutcome
from .templates import MissingTemplateError, TemplateRenderer, php_str
from .writer import ArtifactWriter

ROUTE_FILE_HEADER = "<?php\n\nuse Illuminate\\Support\\Facades\\Route;\n"

_ENTRY_TEMPLATE = (
    "\n// {{ entity }} {{ 'API routes' if is_api else 'routes' }}\n"
    "Route::{{ 'apiResource' if is_api else 'resource' }}"
    "({{ resource_path|php_str }}, {{ controller_class }}::class);\n"
)

_LOAD_ROUTES_LINE = re.compile(r"^(?P<indent>[ \t]*)\$this->loadRoutesFrom\(.*\);[ \t]*$", re.MULTILINE)
_BOOT_OPENING = re.compile(r"public function boot\(\)[^{]*\{[ \t]*\n")

RouteResult = tuple[str, WriteOutcome]


class RouteRegistrar:
    """Registers resource routes for one entity's controller."""

    web_template = "routes.php.j2"
    api_template = "api-routes.php.j2"
    provider_template = "module-service-provider.php.j2"

    def __init__(self, renderer: TemplateRenderer, writer: ArtifactWriter) -> None:
        self.renderer = renderer
        self.writer = writer
        self.notices: list[str] = []

    def register(self, names: NamingSet, flags: StyleFlags, is_api: bool) -> list[RouteResult]:
        """Register web or API resource routes.

        Returns:
            ``(relative_path, outcome)`` for every file touched or checked.
        """
        self.notices = []
        layout = ModuleLayout(names, flags)
        if flags.module_style:
            return self._register_module(names, flags, layout, is_api)
        return [self._register_flat(names, flags, layout, is_api)]

    # -- Flat layout -------------------------------------------------------

    def _register_flat(
        self,
        names: NamingSet,
        flags: StyleFlags,
        layout: ModuleLayout,
        is_api: bool,
    ) -> RouteResult:
        route_file = layout.route_file(is_api)
        entry = self.renderer.render_string(_ENTRY_TEMPLATE, {
            "entity": names.entity,
            "is_api": is_api,
            "resource_path": resource_path(names, flags, is_api),
            "controller_class": layout.controller_class,
        })

        if not self.writer.exists(route_file):
            self.writer.put(route_file, ROUTE_FILE_HEADER + entry)
            return route_file, WriteOutcome.CREATED

        contents = self.writer.read(route_file)
        if references_controller(contents, names.entity):
            self.notices.append(f"Routes for {names.entity} already exist in {route_file}")
            return route_file, WriteOutcome.UNCHANGED

        self.writer.append(route_file, entry)
        return route_file, WriteOutcome.APPENDED

    # -- Module layout -----------------------------------------------------

    def _register_module(
        self,
        names: NamingSet,
        flags: StyleFlags,
        layout: ModuleLayout,
        is_api: bool,
    ) -> list[RouteResult]:
        route_file = layout.route_file(is_api)
        content = self.renderer.render(
            self.api_template if is_api else self.web_template,
            {
                "entity": names.entity,
                "controller_class": layout.controller_class,
                "resource_path": resource_path(names, flags, is_api),
            },
        )
        outcome = self.writer.write(GeneratedArtifact(relative_path=route_file, content=content))
        route_basename = route_file.rsplit("/", 1)[-1]
        return [
            (route_file, outcome),
            (layout.provider_path, self._ensure_provider(names, layout, route_basename)),
        ]

    def _ensure_provider(
        self,
        names: NamingSet,
        layout: ModuleLayout,
        route_basename: str,
    ) -> WriteOutcome:
        provider_path = layout.provider_path
        if not self.writer.exists(provider_path):
            self.writer.put(provider_path, self._render_provider(names, layout, route_basename))
            return WriteOutcome.CREATED

        current = self.writer.read(provider_path)
        if loads_route_file(current, route_basename):
            return WriteOutcome.UNCHANGED

        patched = add_route_reference(current, route_basename)
        if patched is None:
            self.notices.append(
                f"Could not find where to load {route_basename} in {provider_path}; "
                "add it to boot() by hand"
            )
            return WriteOutcome.UNCHANGED
        self.writer.put(provider_path, patched)
        return WriteOutcome.UPDATED

    def _render_provider(
        self,
        names: NamingSet,
        layout: ModuleLayout,
        route_basename: str,
    ) -> str:
        context = {
            "namespace": layout.provider_namespace,
            "entity": names.entity,
            "route_files": [route_basename],
        }
        try:
            return self.renderer.render(self.provider_template, context)
        except MissingTemplateError:
            self.notices.append("Service provider template not found, using a minimal provider")
            return _minimal_provider(context)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def resource_path(names: NamingSet, flags: StyleFlags, is_api: bool) -> str:
    """URI passed to ``Route::resource`` / ``Route::apiResource``."""
    if is_api and flags.api_version:
        return f"{flags.api_version}/{names.route_segment}"
    return names.route_segment


def references_controller(contents: str, entity: str) -> bool:
    return re.search(rf"\b{re.escape(entity)}Controller\b", contents) is not None


def loads_route_file(provider_source: str, route_basename: str) -> bool:
    return f"'/{route_basename}'" in provider_source


def add_route_reference(provider_source: str, route_basename: str) -> str | None:
    """Insert a ``loadRoutesFrom`` call for *route_basename*.

    The call goes after the last existing ``loadRoutesFrom`` line, or at the
    top of ``boot()`` when there is none.  Returns ``None`` if neither
    location exists.
    """
    statement = f"$this->loadRoutesFrom(__DIR__ . {php_str('/' + route_basename)});"

    matches = list(_LOAD_ROUTES_LINE.finditer(provider_source))
    if matches:
        last = matches[-1]
        insertion = f"\n{last.group('indent')}{statement}"
        return provider_source[: last.end()] + insertion + provider_source[last.end():]

    opening = _BOOT_OPENING.search(provider_source)
    if opening:
        insertion = f"        {statement}\n"
        return provider_source[: opening.end()] + insertion + provider_source[opening.end():]

    return None


def _minimal_provider(context: dict[str, object]) -> str:
    """Provider source used when the provider template is unavailable."""
    entity = context["entity"]
    lines = [
        "<?php",
        "",
        f"namespace {context['namespace']};",
        "",
        "use Illuminate\\Support\\ServiceProvider;",
        "",
        f"class {entity}ServiceProvider extends ServiceProvider",
        "{",
        "    public function register(): void",
        "    {",
        "        //",
        "    }",
        "",
        "    public function boot(): void",
        "    {",
    ]
    for route_file in context["route_files"]:  # type: ignore[union-attr]
        lines.append(f"        $this->loadRoutesFrom(__DIR__ . {php_str('/' + route_file)});")
    lines.extend([
        f"        $this->loadViewsFrom(__DIR__ . '/Resources/views', {php_str(entity)});",
        "        $this->loadMigrationsFrom(__DIR__ . '/Database/Migrations');",
        "    }",
        "}",
        "",
    ])
    return "\n".join(lines)
