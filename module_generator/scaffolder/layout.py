"""Output paths and PHP namespaces for both directory layouts.

The flat layout places files into the application's shared directories
(``app/Models``, ``database/migrations``, ``routes/web.php`` ...).  The
module layout keeps everything for one entity under ``Modules/<Entity>``.
All paths are POSIX strings relative to the application root.
"""

from __future__ import annotations

from .models import NamingSet, StyleFlags


class ModuleLayout:
    """Derives every path and namespace for one entity and layout."""

    def __init__(self, names: NamingSet, flags: StyleFlags) -> None:
        self.names = names
        self.module_style = flags.module_style

    # -- Roots -------------------------------------------------------------

    @property
    def module_root(self) -> str:
        """``Modules/<Entity>``; only meaningful for the module layout."""
        return f"Modules/{self.names.entity}"

    @property
    def module_directories(self) -> list[str]:
        """Directories created up front for the module layout."""
        root = self.module_root
        return [
            root,
            f"{root}/Http/Controllers",
            f"{root}/Models",
            f"{root}/Database/Migrations",
            f"{root}/Resources/views",
        ]

    # -- Namespaces --------------------------------------------------------

    @property
    def model_namespace(self) -> str:
        if self.module_style:
            return f"Modules\\{self.names.entity}\\Models"
        return "App\\Models"

    @property
    def model_class(self) -> str:
        """Fully-qualified model class name."""
        return f"{self.model_namespace}\\{self.names.entity}"

    @property
    def controller_namespace(self) -> str:
        if self.module_style:
            return f"Modules\\{self.names.entity}\\Http\\Controllers"
        return "App\\Http\\Controllers"

    @property
    def controller_class(self) -> str:
        return f"{self.controller_namespace}\\{self.names.entity}Controller"

    @property
    def factory_namespace(self) -> str:
        if self.module_style:
            return f"Modules\\{self.names.entity}\\Database\\Factories"
        return "Database\\Factories"

    @property
    def factory_class(self) -> str:
        return f"{self.factory_namespace}\\{self.names.entity}Factory"

    @property
    def provider_namespace(self) -> str:
        return f"Modules\\{self.names.entity}"

    # -- Files -------------------------------------------------------------

    @property
    def model_path(self) -> str:
        if self.module_style:
            return f"{self.module_root}/Models/{self.names.entity}.php"
        return f"app/Models/{self.names.entity}.php"

    @property
    def migrations_dir(self) -> str:
        if self.module_style:
            return f"{self.module_root}/Database/Migrations"
        return "database/migrations"

    def migration_path(self, migration_name: str) -> str:
        return f"{self.migrations_dir}/{migration_name}.php"

    @property
    def controller_path(self) -> str:
        if self.module_style:
            return f"{self.module_root}/Http/Controllers/{self.names.entity}Controller.php"
        return f"app/Http/Controllers/{self.names.entity}Controller.php"

    @property
    def factory_path(self) -> str:
        if self.module_style:
            return f"{self.module_root}/Database/Factories/{self.names.entity}Factory.php"
        return f"database/factories/{self.names.entity}Factory.php"

    def view_path(self, view: str) -> str:
        if self.module_style:
            return f"{self.module_root}/Resources/views/{view}.blade.php"
        return f"resources/views/{self.names.variable}/{view}.blade.php"

    def view_name(self, view: str) -> str:
        """The name a controller passes to ``view()`` for *view*."""
        if self.module_style:
            return f"{self.names.entity}::{view}"
        return f"{self.names.variable}.{view}"

    def route_file(self, is_api: bool) -> str:
        if self.module_style:
            return f"{self.module_root}/{'api-routes' if is_api else 'routes'}.php"
        return f"routes/{'api' if is_api else 'web'}.php"

    @property
    def provider_path(self) -> str:
        return f"{self.module_root}/{self.names.entity}ServiceProvider.php"
