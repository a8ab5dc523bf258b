"""Model factory generation for seed and test data.

Generates a Laravel model factory whose ``definition()`` returns a valid,
randomised attribute array for the entity.  Each field kind maps to a fixed
Faker expression; select fields pick one of their declared options.
"""

from __future__ import annotations

from .layout import ModuleLayout
from .models import FieldKind, FieldSpec, GeneratedArtifact, NamingSet, StyleFlags
from .templates import TemplateRenderer, php_list


class FactoryGenerator:
    """Generates the model factory for one entity."""

    template = "factory.php.j2"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def emit(
        self,
        names: NamingSet,
        fields: list[FieldSpec],
        selects: dict[str, list[str]],
        flags: StyleFlags,
    ) -> GeneratedArtifact:
        """Render the factory file.

        Args:
            names: Derived naming set.
            fields: Plain fields; those also in *selects* are generated from
                their options instead.
            selects: Select field name -> ordered options.
            flags: Layout flags; module style changes namespaces and path.

        Returns:
            The rendered factory artifact.
        """
        layout = ModuleLayout(names, flags)
        context = {
            "entity": names.entity,
            "namespace": layout.factory_namespace,
            "model_class": layout.model_class,
            "attributes": build_attributes(fields, selects),
        }
        content = self.renderer.render(self.template, context)
        return GeneratedArtifact(relative_path=layout.factory_path, content=content)


# ---------------------------------------------------------------------------
# Type-to-faker mapping
# ---------------------------------------------------------------------------

_FAKER_BY_KIND: dict[FieldKind, str] = {
    FieldKind.STRING: "$this->faker->sentence(3)",
    FieldKind.TEXT: "$this->faker->paragraphs(3, true)",
    FieldKind.LONG_TEXT: "$this->faker->paragraphs(3, true)",
    FieldKind.INTEGER: "$this->faker->numberBetween(1, 1000)",
    FieldKind.BIG_INTEGER: "$this->faker->numberBetween(1, 1000)",
    FieldKind.SMALL_INTEGER: "$this->faker->numberBetween(1, 1000)",
    FieldKind.TINY_INTEGER: "$this->faker->numberBetween(1, 100)",
    FieldKind.DECIMAL: "$this->faker->randomFloat(2, 1, 1000)",
    FieldKind.DOUBLE: "$this->faker->randomFloat(2, 1, 1000)",
    FieldKind.FLOAT: "$this->faker->randomFloat(2, 1, 1000)",
    FieldKind.BOOLEAN: "$this->faker->boolean",
    FieldKind.DATE: "$this->faker->date()",
    FieldKind.TIME: "$this->faker->time()",
    FieldKind.DATE_TIME: "$this->faker->dateTime()",
    FieldKind.TIMESTAMP: "$this->faker->dateTime()",
    FieldKind.YEAR: "$this->faker->year()",
    FieldKind.EMAIL: "$this->faker->safeEmail()",
    FieldKind.URL: "$this->faker->url()",
    FieldKind.PASSWORD: "bcrypt($this->faker->password())",
    FieldKind.UUID: "$this->faker->uuid()",
    FieldKind.IP_ADDRESS: "$this->faker->ipv4()",
    FieldKind.MAC_ADDRESS: "$this->faker->macAddress()",
}

_FALLBACK_FAKER = "$this->faker->word()"


def faker_for_kind(kind: FieldKind) -> str:
    """Return the Faker expression producing a sample value for *kind*."""
    return _FAKER_BY_KIND.get(kind, _FALLBACK_FAKER)


def random_option(options: list[str]) -> str:
    """Faker expression picking one of *options* at random."""
    return f"$this->faker->randomElement({php_list(options)})"


def build_attributes(
    fields: list[FieldSpec],
    selects: dict[str, list[str]],
) -> list[tuple[str, str]]:
    """``(attribute, expression)`` pairs: plain fields first, then selects."""
    attributes: list[tuple[str, str]] = []
    seen: set[str] = set()
    for field in fields:
        if field.name in selects or field.name in seen:
            continue
        seen.add(field.name)
        attributes.append((field.name, faker_for_kind(field.kind)))
    for name, options in selects.items():
        attributes.append((name, random_option(options)))
    return attributes
