"""Tests for the Eloquent model generator."""

from __future__ import annotations

import pytest

from module_generator.scaffolder.model_gen import ModelGenerator, fillable_attributes
from module_generator.scaffolder.models import FieldSpec
from module_generator.scaffolder.naming import derive_names


pytestmark = pytest.mark.unit


@pytest.fixture
def model_gen(renderer) -> ModelGenerator:
    return ModelGenerator(renderer)


class TestFillable:
    def test_fields_then_selects(self, task_fields, task_selects):
        assert fillable_attributes(task_fields, task_selects) == ["title", "description", "status"]

    def test_select_also_listed_as_field_appears_once(self, task_selects):
        fields = [FieldSpec(name="status"), FieldSpec(name="title")]
        assert fillable_attributes(fields, task_selects) == ["status", "title"]

    def test_repeated_field_appears_once(self):
        fields = [FieldSpec(name="title"), FieldSpec(name="title")]
        assert fillable_attributes(fields, {}) == ["title"]

    def test_empty(self):
        assert fillable_attributes([], {}) == []


class TestEmitFlat:
    def test_path_and_namespace(self, model_gen, task_names, task_fields, task_selects, flat_flags):
        artifact = model_gen.emit(task_names, task_fields, task_selects, flat_flags)

        assert artifact.relative_path == "app/Models/Task.php"
        assert "namespace App\\Models;" in artifact.content
        assert "class Task extends Model" in artifact.content
        assert "use HasFactory;" in artifact.content
        assert "protected $table = 'tasks';" in artifact.content

    def test_fillable_and_option_constant(
        self, model_gen, task_names, task_fields, task_selects, flat_flags
    ):
        content = model_gen.emit(task_names, task_fields, task_selects, flat_flags).content

        assert "protected $fillable = ['title', 'description', 'status'];" in content
        assert "public const STATUS_OPTIONS = ['pending', 'in-progress', 'completed'];" in content
        assert "newFactory" not in content

    def test_no_selects_no_constants(self, model_gen, task_names, task_fields, flat_flags):
        content = model_gen.emit(task_names, task_fields, {}, flat_flags).content
        assert "_OPTIONS" not in content
        assert "Select options" not in content

    def test_one_constant_per_select(self, model_gen, task_names, flat_flags):
        selects = {"status": ["open", "closed"], "priority": ["low", "high"]}
        content = model_gen.emit(task_names, [], selects, flat_flags).content

        assert content.count("public const") == 2
        assert content.index("STATUS_OPTIONS") < content.index("PRIORITY_OPTIONS")


class TestEmitModuleStyle:
    def test_module_namespace_and_factory(self, model_gen, module_flags):
        names = derive_names("order")
        artifact = model_gen.emit(names, [], {}, module_flags)

        assert artifact.relative_path == "Modules/Order/Models/Order.php"
        assert "namespace Modules\\Order\\Models;" in artifact.content
        assert "use Modules\\Order\\Database\\Factories\\OrderFactory;" in artifact.content
        assert "return OrderFactory::new();" in artifact.content
