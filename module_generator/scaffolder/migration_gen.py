"""Schema migration generation.

Renders ``migration.php.j2`` with one column statement per field.  File
names carry a second-precision timestamp issued by ``MigrationClock``, which
never hands out the same (or an earlier) second twice in one process.
"""

from __future__ import annotations

import glob
import re
from datetime import datetime, timedelta
from typing import Callable, Optional

from .layout import ModuleLayout
from .models import FieldKind, FieldSpec, GeneratedArtifact, NamingSet, StyleFlags
from .templates import TemplateRenderer, php_list, php_str


TIMESTAMP_FORMAT = "%Y_%m_%d_%H%M%S"

_SCHEMA_CREATE = re.compile(r"""Schema::create\(\s*['"]([^'"]+)['"]""")

# Pseudo-types understood by the factory and views that have no column method.
_COLUMN_METHOD_OVERRIDES: dict[FieldKind, str] = {
    FieldKind.EMAIL: "string",
    FieldKind.URL: "string",
    FieldKind.PASSWORD: "string",
}


class MigrationClock:
    """Issues strictly increasing, second-precision timestamps."""

    def __init__(self, now: Callable[[], datetime] = datetime.now) -> None:
        self._now = now
        self._last: Optional[datetime] = None

    def next(self) -> datetime:
        current = self._now().replace(microsecond=0)
        if self._last is not None and current <= self._last:
            current = self._last + timedelta(seconds=1)
        self._last = current
        return current


_default_clock = MigrationClock()


class MigrationGenerator:
    """Generates the create-table migration for one entity."""

    template = "migration.php.j2"

    def __init__(
        self,
        renderer: TemplateRenderer,
        clock: MigrationClock | None = None,
    ) -> None:
        self.renderer = renderer
        self.clock = clock or _default_clock

    def emit(
        self,
        table: str,
        fields: list[FieldSpec],
        selects: dict[str, list[str]],
        flags: StyleFlags,
        names: NamingSet | None = None,
    ) -> GeneratedArtifact:
        """Render the migration file.

        Args:
            table: Plural snake table name.
            fields: Plain fields; those also present in *selects* are skipped.
            selects: Select field name -> ordered options (enum columns).
            flags: Layout flags.
            names: Naming set, required for the module layout path.

        Returns:
            The rendered migration artifact with a fresh timestamped name.
        """
        if flags.module_style and names is None:
            raise ValueError("Module-style migrations need the entity naming set")

        content = self.renderer.render(
            self.template, {"table": table, "columns": build_columns(fields, selects)}
        )
        name = migration_name(table, self.clock.next())
        if names is not None:
            relative_path = ModuleLayout(names, flags).migration_path(name)
        else:
            relative_path = f"database/migrations/{name}.php"
        return GeneratedArtifact(relative_path=relative_path, content=content)


def migration_name(table: str, timestamp: datetime) -> str:
    """``2024_05_01_120000_create_tasks_table``."""
    return f"{timestamp.strftime(TIMESTAMP_FORMAT)}_create_{table}_table"


def migration_glob(table: str) -> str:
    """Glob matching any migration that creates *table*."""
    return f"*_create_{glob.escape(table)}_table.php"


def creates_only_table(source: str, table: str) -> bool:
    """True when the migration *source* creates *table* and no other table.

    Framework migrations such as ``create_users_table`` also create
    ``sessions`` and ``password_reset_tokens``; those must never be rewritten.
    """
    return _SCHEMA_CREATE.findall(source) == [table]


def build_columns(
    fields: list[FieldSpec],
    selects: dict[str, list[str]],
) -> list[str]:
    """Column statements: identity first, plain fields, enums, timestamps last."""
    columns = ["$table->id();"]
    for field in fields:
        if field.name in selects:
            continue
        method = _COLUMN_METHOD_OVERRIDES.get(field.kind, field.type)
        columns.append(f"$table->{method}({php_str(field.name)});")
    for name, options in selects.items():
        columns.append(f"$table->enum({php_str(name)}, {php_list(options)});")
    columns.append("$table->timestamps();")
    return columns
