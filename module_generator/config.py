"""Module generator configuration.

Centralised, typed defaults for the generator.  Settings use a Pydantic v2
model so they are validated at construction time and can be serialised
to/from JSON or read from environment variables without boiler-plate.

Precedence applied by the generator: explicit command-line flag, then the
value held here, then the built-in default declared on the field.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_STUB_DIR = Path("resources") / "stubs" / "vendor" / "module-generator"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class GenerationType(str, Enum):
    """Which artifact set a generation run produces."""
    FULL = "full"
    API = "api"
    MODEL_MIGRATION = "model-migration"


class GeneratorConfig(BaseModel):
    """Defaults for the ``make-module`` command.

    Instances are typically created once by the CLI entry point (from the
    environment or a JSON file) and passed to ``ModuleGenerator``.
    """

    default_type: GenerationType = Field(
        default=GenerationType.FULL,
        description="Generation type used when --type is not given",
    )
    generate_views: bool = Field(
        default=False,
        description="Whether views are generated when neither --views nor --no-views is given",
    )
    api_version: Optional[str] = Field(
        default=None,
        description="Version segment prefixed to API resource routes, e.g. 'v1'",
    )
    base_path: Path = Field(default=Path("."), description="Application root")
    stub_path: Optional[Path] = Field(
        default=None,
        description="Directory checked for template overrides before the bundled ones",
    )

    @field_validator("api_version")
    @classmethod
    def _strip_api_version(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().strip("/")
        return value or None

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def override_dir(self) -> Path:
        """Directory holding user template overrides."""
        if self.stub_path is not None:
            return self.stub_path
        return self.base_path / DEFAULT_STUB_DIR

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path the file was written to.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            MODULE_GENERATOR_DEFAULT_TYPE, MODULE_GENERATOR_GENERATE_VIEWS,
            MODULE_GENERATOR_API_VERSION, MODULE_GENERATOR_BASE_PATH,
            MODULE_GENERATOR_STUB_PATH.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MODULE_GENERATOR_DEFAULT_TYPE"):
            kwargs["default_type"] = os.environ["MODULE_GENERATOR_DEFAULT_TYPE"].strip()
        if "MODULE_GENERATOR_GENERATE_VIEWS" in os.environ:
            kwargs["generate_views"] = parse_bool(os.environ["MODULE_GENERATOR_GENERATE_VIEWS"])
        if os.environ.get("MODULE_GENERATOR_API_VERSION"):
            kwargs["api_version"] = os.environ["MODULE_GENERATOR_API_VERSION"]
        if os.environ.get("MODULE_GENERATOR_BASE_PATH"):
            kwargs["base_path"] = Path(os.environ["MODULE_GENERATOR_BASE_PATH"])
        if os.environ.get("MODULE_GENERATOR_STUB_PATH"):
            kwargs["stub_path"] = Path(os.environ["MODULE_GENERATOR_STUB_PATH"])
        return cls(**kwargs)


def parse_bool(value: str) -> bool:
    """Interpret an environment-style boolean string.

    Raises:
        ValueError: If *value* is not a recognised boolean spelling.
    """
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")
