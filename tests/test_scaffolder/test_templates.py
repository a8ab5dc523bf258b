"""Tests for the Jinja2 template renderer.

Covers:
- Bundled template discovery
- Override directory precedence
- Blade delimiter handling
- Custom filters
- Missing templates
- Publishing templates for customisation
"""

from __future__ import annotations

from pathlib import Path

import pytest

from module_generator.scaffolder.templates import (
    MissingTemplateError,
    TemplateRenderer,
    php_list,
    php_str,
)


pytestmark = pytest.mark.unit


class TestBundledTemplates:
    def test_all_php_templates_present(self, renderer: TemplateRenderer):
        templates = renderer.list_templates()
        for name in (
            "model.php.j2",
            "migration.php.j2",
            "factory.php.j2",
            "controller.php.j2",
            "api-controller.php.j2",
            "routes.php.j2",
            "api-routes.php.j2",
            "module-service-provider.php.j2",
        ):
            assert name in templates

    def test_view_templates_listed_by_prefix(self, renderer: TemplateRenderer):
        views = renderer.list_templates("views")
        assert "views/index.blade.php.j2" in views
        assert "views/partials/select.blade.php.j2" in views
        assert all(v.startswith("views/") for v in views)


class TestRender:
    def test_missing_template_raises(self, renderer: TemplateRenderer):
        with pytest.raises(MissingTemplateError) as exc_info:
            renderer.render("does-not-exist.php.j2", {})
        assert exc_info.value.template_path == "does-not-exist.php.j2"

    def test_blade_templates_keep_blade_echo(self, renderer: TemplateRenderer):
        out = renderer.render(
            "views/partials/table-cell.blade.php.j2", {"name": "title", "variable": "task"}
        )
        assert out.strip() == "<td>{{ $task->title }}</td>"

    def test_render_string_uses_standard_delimiters(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ name|php_str }}", {"name": "x"}) == "'x'"

    def test_php_output_is_not_html_escaped(self, renderer: TemplateRenderer):
        out = renderer.render_string(
            "{{ path|php_str }} {{ rule }}", {"path": "tasks", "rule": "a & b <c>"}
        )
        assert out == "'tasks' a & b <c>"
        assert "&#39;" not in out

    def test_override_directory_checked_first(self, tmp_path: Path):
        override = tmp_path / "stubs"
        override.mkdir()
        (override / "model.php.j2").write_text("custom {{ entity }}", encoding="utf-8")

        renderer = TemplateRenderer(override_dir=override)

        assert renderer.render("model.php.j2", {"entity": "Task"}) == "custom Task"
        # Templates not overridden still come from the bundle.
        assert "Schema::create" in renderer.render(
            "migration.php.j2", {"table": "tasks", "columns": []}
        )

    def test_missing_override_directory_falls_back(self, tmp_path: Path):
        renderer = TemplateRenderer(override_dir=tmp_path / "absent")
        out = renderer.render(
            "model.php.j2", {"entity": "Task", "table": "tasks", "fillable": []}
        )
        assert "class Task" in out


class TestFilters:
    def test_php_str_escapes_quotes_and_backslashes(self):
        assert php_str("it's") == "'it\\'s'"
        assert php_str("a\\b") == "'a\\\\b'"

    def test_php_list(self):
        assert php_list(["pending", "in-progress"]) == "['pending', 'in-progress']"
        assert php_list([]) == "[]"

    def test_headline_filter(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ 'due_date'|headline }}", {}) == "Due date"


class TestPublish:
    def test_copies_every_template(self, renderer: TemplateRenderer, tmp_path: Path):
        dest = tmp_path / "published"
        copied = renderer.publish(dest)

        assert len(copied) == len(renderer.list_templates())
        assert (dest / "model.php.j2").read_text(encoding="utf-8") == (
            renderer.template_dir / "model.php.j2"
        ).read_text(encoding="utf-8")
        assert (dest / "views" / "partials" / "input.blade.php.j2").exists()

    def test_existing_files_kept_without_force(self, renderer: TemplateRenderer, tmp_path: Path):
        dest = tmp_path / "published"
        dest.mkdir()
        (dest / "model.php.j2").write_text("mine", encoding="utf-8")

        copied = renderer.publish(dest)

        assert dest / "model.php.j2" not in copied
        assert (dest / "model.php.j2").read_text(encoding="utf-8") == "mine"

    def test_force_replaces_existing(self, renderer: TemplateRenderer, tmp_path: Path):
        dest = tmp_path / "published"
        dest.mkdir()
        (dest / "model.php.j2").write_text("mine", encoding="utf-8")

        renderer.publish(dest, force=True)

        assert (dest / "model.php.j2").read_text(encoding="utf-8") != "mine"
