"""Pydantic v2 models for the module scaffolder.

Defines the structured form of a generation request: parsed field and select
specifications, the derived naming set, rendered artifacts, and the report
returned once a run completes.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from module_generator.config import GenerationType, GeneratorConfig


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FieldKind(str, Enum):
    """Column types the emitters know about.

    ``UNKNOWN`` covers every other token; the raw token itself stays on the
    ``FieldSpec`` and is passed through verbatim to the migration.
    """
    STRING = "string"
    TEXT = "text"
    LONG_TEXT = "longText"
    INTEGER = "integer"
    BIG_INTEGER = "bigInteger"
    SMALL_INTEGER = "smallInteger"
    TINY_INTEGER = "tinyInteger"
    DECIMAL = "decimal"
    DOUBLE = "double"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "dateTime"
    TIMESTAMP = "timestamp"
    YEAR = "year"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    UUID = "uuid"
    IP_ADDRESS = "ipAddress"
    MAC_ADDRESS = "macAddress"
    UNKNOWN = "unknown"

    @classmethod
    def from_token(cls, token: str) -> "FieldKind":
        """Map a raw type token (case-insensitive) onto a kind."""
        return _KIND_BY_TOKEN.get(token.strip().lower(), cls.UNKNOWN)

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_KINDS

    @property
    def is_decimal(self) -> bool:
        return self in _DECIMAL_KINDS

    @property
    def is_temporal(self) -> bool:
        return self in _TEMPORAL_KINDS

    @property
    def is_long_text(self) -> bool:
        return self in (FieldKind.TEXT, FieldKind.LONG_TEXT)


_KIND_BY_TOKEN: dict[str, FieldKind] = {
    kind.value.lower(): kind for kind in FieldKind if kind is not FieldKind.UNKNOWN
}

_INTEGER_KINDS = frozenset({
    FieldKind.INTEGER,
    FieldKind.BIG_INTEGER,
    FieldKind.SMALL_INTEGER,
    FieldKind.TINY_INTEGER,
})

_DECIMAL_KINDS = frozenset({FieldKind.DECIMAL, FieldKind.DOUBLE, FieldKind.FLOAT})

_TEMPORAL_KINDS = frozenset({
    FieldKind.DATE,
    FieldKind.TIME,
    FieldKind.DATE_TIME,
    FieldKind.TIMESTAMP,
})


class WriteOutcome(str, Enum):
    """What happened to a file when an artifact was persisted."""
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    SKIPPED = "skipped"
    APPENDED = "appended"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


# ---------------------------------------------------------------------------
# Field specifications
# ---------------------------------------------------------------------------

class FieldSpec(BaseModel):
    """A plain field parsed from ``name:type``."""
    name: str = Field(..., description="Column / attribute name")
    type: str = Field(default="string", description="Raw type token, kept verbatim")

    @property
    def kind(self) -> FieldKind:
        return FieldKind.from_token(self.type)


class SelectFieldSpec(BaseModel):
    """A field restricted to a fixed, ordered set of string options."""
    name: str = Field(..., description="Column / attribute name")
    options: list[str] = Field(default_factory=list, description="Allowed values, in order")

    @property
    def constant_name(self) -> str:
        """Name of the model constant holding the options, e.g. ``STATUS_OPTIONS``."""
        return f"{self.name.upper()}_OPTIONS"

    @property
    def options_variable(self) -> str:
        """Name of the controller variable holding the options, e.g. ``statusOptions``."""
        return f"{self.name}Options"


# ---------------------------------------------------------------------------
# Naming & style
# ---------------------------------------------------------------------------

class NamingSet(BaseModel):
    """Conventional names derived once from the raw entity name."""
    model_config = ConfigDict(frozen=True)

    entity: str = Field(..., description="Studly entity name, e.g. 'OrderItem'")
    table: str = Field(..., description="Plural snake table name, e.g. 'order_items'")
    variable: str = Field(..., description="Lower camel variable, e.g. 'orderItem'")
    route_segment: str = Field(..., description="Plural variable, e.g. 'orderItems'")


class StyleFlags(BaseModel):
    """Layout and routing options shared by every emitter."""
    model_config = ConfigDict(frozen=True)

    module_style: bool = False
    api_version: Optional[str] = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class ModuleRequest(BaseModel):
    """Everything one generation run needs, with defaults already resolved."""
    name: str = Field(..., description="Raw entity name as typed by the user")
    fields: list[FieldSpec] = Field(default_factory=list)
    selects: dict[str, list[str]] = Field(default_factory=dict)
    type: GenerationType = GenerationType.FULL
    is_api: bool = False
    generate_views: bool = False
    views_explicit: bool = Field(
        default=False, description="Whether views were requested by flag rather than config"
    )
    module_style: bool = False
    force: bool = False
    base_path: Path = Path(".")
    api_version: Optional[str] = None

    @property
    def flags(self) -> StyleFlags:
        return StyleFlags(module_style=self.module_style, api_version=self.api_version)

    @classmethod
    def resolve(
        cls,
        name: str,
        config: GeneratorConfig,
        *,
        fields: list[FieldSpec] | None = None,
        selects: dict[str, list[str]] | None = None,
        type: GenerationType | str | None = None,
        api: bool = False,
        views: bool | None = None,
        module_style: bool = False,
        force: bool = False,
        path: str | Path | None = None,
    ) -> "ModuleRequest":
        """Build a request, applying flag > config > built-in precedence."""
        gen_type = GenerationType(type) if type else config.default_type
        return cls(
            name=name,
            fields=fields or [],
            selects=selects or {},
            type=gen_type,
            is_api=api or gen_type is GenerationType.API,
            generate_views=config.generate_views if views is None else views,
            views_explicit=views is not None,
            module_style=module_style,
            force=force,
            base_path=Path(path) if path else config.base_path,
            api_version=config.api_version,
        )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class GeneratedArtifact(BaseModel):
    """One rendered file, addressed relative to the application root."""
    relative_path: str = Field(..., description="POSIX path under the base path")
    content: str = Field(..., description="Rendered file content")


class ReportEntry(BaseModel):
    stage: str
    path: str
    outcome: WriteOutcome


class GenerationReport(BaseModel):
    """Ordered record of what a run wrote, skipped or left unchanged."""
    entity: str
    entries: list[ReportEntry] = Field(default_factory=list)
    notices: list[str] = Field(default_factory=list)

    def add(self, stage: str, path: str, outcome: WriteOutcome) -> None:
        self.entries.append(ReportEntry(stage=stage, path=path, outcome=outcome))

    def paths_for(self, stage: str) -> list[str]:
        return [e.path for e in self.entries if e.stage == stage]

    @property
    def stages(self) -> list[str]:
        seen: list[str] = []
        for entry in self.entries:
            if entry.stage not in seen:
                seen.append(entry.stage)
        return seen

    @property
    def written(self) -> list[str]:
        return [
            e.path for e in self.entries
            if e.outcome in (
                WriteOutcome.CREATED,
                WriteOutcome.OVERWRITTEN,
                WriteOutcome.APPENDED,
                WriteOutcome.UPDATED,
            )
        ]

    @property
    def skipped(self) -> list[str]:
        return [e.path for e in self.entries if e.outcome is WriteOutcome.SKIPPED]
