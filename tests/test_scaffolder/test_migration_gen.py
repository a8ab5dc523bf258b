"""Tests for the migration generator and its timestamp clock."""

from __future__ import annotations

import re
from datetime import datetime

import pytest

from module_generator.scaffolder.migration_gen import (
    MigrationClock,
    MigrationGenerator,
    build_columns,
    creates_only_table,
    migration_glob,
    migration_name,
)
from module_generator.scaffolder.models import FieldSpec
from module_generator.scaffolder.naming import derive_names


pytestmark = pytest.mark.unit


@pytest.fixture
def migration_gen(renderer, fixed_clock) -> MigrationGenerator:
    return MigrationGenerator(renderer, fixed_clock)


class TestMigrationClock:
    def test_strictly_increasing_for_same_second(self, fixed_clock):
        first = fixed_clock.next()
        second = fixed_clock.next()
        third = fixed_clock.next()
        assert first == datetime(2024, 5, 1, 12, 0, 0)
        assert second == datetime(2024, 5, 1, 12, 0, 1)
        assert third == datetime(2024, 5, 1, 12, 0, 2)

    def test_follows_real_time_when_it_moves_ahead(self):
        readings = iter([datetime(2024, 5, 1, 12, 0, 0), datetime(2024, 5, 1, 12, 5, 0)])
        clock = MigrationClock(now=lambda: next(readings))
        clock.next()
        assert clock.next() == datetime(2024, 5, 1, 12, 5, 0)

    def test_microseconds_dropped(self):
        clock = MigrationClock(now=lambda: datetime(2024, 5, 1, 12, 0, 0, 999_999))
        assert clock.next().microsecond == 0


class TestNaming:
    def test_migration_name(self):
        name = migration_name("tasks", datetime(2024, 5, 1, 9, 3, 7))
        assert name == "2024_05_01_090307_create_tasks_table"

    def test_glob(self):
        assert migration_glob("tasks") == "*_create_tasks_table.php"

    def test_glob_matches_brackets_literally(self):
        assert migration_glob("widget[b]s") == "*_create_widget[[]b]s_table.php"


class TestCreatesOnlyTable:
    def test_single_create(self):
        source = "Schema::create('tasks', function (Blueprint $table) {\n"
        assert creates_only_table(source, "tasks")

    def test_other_table(self):
        assert not creates_only_table("Schema::create('jobs', fn () => null);", "tasks")

    def test_framework_users_migration(self):
        source = (
            "Schema::create('users', function (Blueprint $table) {});\n"
            "Schema::create('password_reset_tokens', function (Blueprint $table) {});\n"
            "Schema::create('sessions', function (Blueprint $table) {});\n"
        )
        assert not creates_only_table(source, "users")

    def test_generated_migration(self, migration_gen, task_fields, flat_flags):
        artifact = migration_gen.emit("tasks", task_fields, {}, flat_flags)
        assert creates_only_table(artifact.content, "tasks")


class TestBuildColumns:
    def test_order_id_fields_enums_timestamps(self, task_fields, task_selects):
        assert build_columns(task_fields, task_selects) == [
            "$table->id();",
            "$table->string('title');",
            "$table->text('description');",
            "$table->enum('status', ['pending', 'in-progress', 'completed']);",
            "$table->timestamps();",
        ]

    def test_select_named_field_not_emitted_as_plain_column(self, task_selects):
        columns = build_columns([FieldSpec(name="status", type="string")], task_selects)
        assert "$table->string('status');" not in columns
        assert sum("'status'" in c for c in columns) == 1

    def test_pseudo_types_become_strings(self):
        fields = [
            FieldSpec(name="email", type="email"),
            FieldSpec(name="homepage", type="url"),
            FieldSpec(name="secret", type="password"),
        ]
        assert build_columns(fields, {})[1:4] == [
            "$table->string('email');",
            "$table->string('homepage');",
            "$table->string('secret');",
        ]

    def test_unknown_type_passed_through(self):
        columns = build_columns([FieldSpec(name="area", type="geometry")], {})
        assert "$table->geometry('area');" in columns

    def test_empty_table(self):
        assert build_columns([], {}) == ["$table->id();", "$table->timestamps();"]


class TestEmit:
    def test_flat_path_and_content(self, migration_gen, task_fields, task_selects, flat_flags):
        artifact = migration_gen.emit("tasks", task_fields, task_selects, flat_flags)

        assert artifact.relative_path == (
            "database/migrations/2024_05_01_120000_create_tasks_table.php"
        )
        assert "Schema::create('tasks', function (Blueprint $table) {" in artifact.content
        assert "            $table->enum('status', ['pending', 'in-progress', 'completed']);" in (
            artifact.content
        )
        assert "Schema::dropIfExists('tasks');" in artifact.content

    def test_module_path(self, migration_gen, module_flags):
        names = derive_names("order")
        artifact = migration_gen.emit("orders", [], {}, module_flags, names=names)
        assert re.fullmatch(
            r"Modules/Order/Database/Migrations/\d{4}_\d{2}_\d{2}_\d{6}_create_orders_table\.php",
            artifact.relative_path,
        )

    def test_module_style_requires_names(self, migration_gen, module_flags):
        with pytest.raises(ValueError):
            migration_gen.emit("orders", [], {}, module_flags)

    def test_consecutive_migrations_get_distinct_names(self, migration_gen, flat_flags):
        first = migration_gen.emit("tasks", [], {}, flat_flags)
        second = migration_gen.emit("notes", [], {}, flat_flags)
        assert first.relative_path.split("/")[-1][:17] != second.relative_path.split("/")[-1][:17]
