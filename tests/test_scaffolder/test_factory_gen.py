"""Tests for the model factory generator."""

from __future__ import annotations

import pytest

from module_generator.scaffolder.factory_gen import (
    FactoryGenerator,
    build_attributes,
    faker_for_kind,
    random_option,
)
from module_generator.scaffolder.models import FieldKind, FieldSpec
from module_generator.scaffolder.naming import derive_names


pytestmark = pytest.mark.unit


class TestFakerMapping:
    @pytest.mark.parametrize(
        ("kind", "expression"),
        [
            (FieldKind.STRING, "$this->faker->sentence(3)"),
            (FieldKind.TEXT, "$this->faker->paragraphs(3, true)"),
            (FieldKind.INTEGER, "$this->faker->numberBetween(1, 1000)"),
            (FieldKind.DECIMAL, "$this->faker->randomFloat(2, 1, 1000)"),
            (FieldKind.BOOLEAN, "$this->faker->boolean"),
            (FieldKind.DATE, "$this->faker->date()"),
            (FieldKind.EMAIL, "$this->faker->safeEmail()"),
            (FieldKind.PASSWORD, "bcrypt($this->faker->password())"),
            (FieldKind.UNKNOWN, "$this->faker->word()"),
        ],
    )
    def test_expression_for_kind(self, kind: FieldKind, expression: str):
        assert faker_for_kind(kind) == expression

    def test_random_option(self):
        assert random_option(["low", "high"]) == "$this->faker->randomElement(['low', 'high'])"


class TestBuildAttributes:
    def test_fields_then_selects(self, task_fields, task_selects):
        attrs = build_attributes(task_fields, task_selects)
        assert [name for name, _ in attrs] == ["title", "description", "status"]
        assert attrs[-1][1] == (
            "$this->faker->randomElement(['pending', 'in-progress', 'completed'])"
        )

    def test_select_named_field_uses_options(self, task_selects):
        attrs = build_attributes([FieldSpec(name="status")], task_selects)
        assert len(attrs) == 1
        assert "randomElement" in attrs[0][1]


class TestEmit:
    def test_flat(self, renderer, task_names, task_fields, task_selects, flat_flags):
        artifact = FactoryGenerator(renderer).emit(task_names, task_fields, task_selects, flat_flags)

        assert artifact.relative_path == "database/factories/TaskFactory.php"
        assert "namespace Database\\Factories;" in artifact.content
        assert "use App\\Models\\Task;" in artifact.content
        assert "protected $model = Task::class;" in artifact.content
        assert "'title' => $this->faker->sentence(3)," in artifact.content

    def test_module_style(self, renderer, module_flags):
        artifact = FactoryGenerator(renderer).emit(derive_names("order"), [], {}, module_flags)

        assert artifact.relative_path == "Modules/Order/Database/Factories/OrderFactory.php"
        assert "namespace Modules\\Order\\Database\\Factories;" in artifact.content
        assert "use Modules\\Order\\Models\\Order;" in artifact.content
