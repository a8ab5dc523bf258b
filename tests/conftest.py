"""Shared pytest fixtures for the module generator test suite.

Provides reusable fixtures for:
- Temporary application roots
- The bundled template renderer and a deterministic migration clock
- The ``Task`` sample entity (names, fields, selects)
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from module_generator.config import GeneratorConfig
from module_generator.scaffolder.migration_gen import MigrationClock
from module_generator.scaffolder.models import FieldSpec, NamingSet, StyleFlags
from module_generator.scaffolder.naming import derive_names
from module_generator.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

_ENV_VARS = (
    "MODULE_GENERATOR_DEFAULT_TYPE",
    "MODULE_GENERATOR_GENERATE_VIEWS",
    "MODULE_GENERATOR_API_VERSION",
    "MODULE_GENERATOR_BASE_PATH",
    "MODULE_GENERATOR_STUB_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment settings out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Empty application root to generate into."""
    root = tmp_path / "app"
    root.mkdir()
    yield root


@pytest.fixture
def config(app_dir: Path) -> GeneratorConfig:
    return GeneratorConfig(base_path=app_dir)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def fixed_clock() -> MigrationClock:
    """Clock that always reads 2024-05-01 12:00:00."""
    return MigrationClock(now=lambda: datetime(2024, 5, 1, 12, 0, 0))


@pytest.fixture
def flat_flags() -> StyleFlags:
    return StyleFlags()


@pytest.fixture
def module_flags() -> StyleFlags:
    return StyleFlags(module_style=True)


# ---------------------------------------------------------------------------
# Sample entity
# ---------------------------------------------------------------------------

@pytest.fixture
def task_names() -> NamingSet:
    return derive_names("task")


@pytest.fixture
def task_fields() -> list[FieldSpec]:
    return [
        FieldSpec(name="title", type="string"),
        FieldSpec(name="description", type="text"),
    ]


@pytest.fixture
def task_selects() -> dict[str, list[str]]:
    return {"status": ["pending", "in-progress", "completed"]}
