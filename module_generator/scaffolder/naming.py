"""Conventional name derivation for a scaffolded entity.

Every emitter receives the same ``NamingSet`` so that class names, table
names, variables and route names agree across all generated files.
"""

from __future__ import annotations

import re

from pluralizer import Pluralizer

from .models import NamingSet

_pluralizer = Pluralizer()

# Trailing word of a camelCase, StudlyCase or snake_case compound.
_TRAILING_WORD = re.compile(r"([A-Z]?[^A-Z_\-\s]*)$")


def derive_names(raw: str) -> NamingSet:
    """Derive entity, table, variable and route names from *raw*.

    Examples::

        derive_names("category")
        -> NamingSet(entity="Category", table="categories",
                     variable="category", route_segment="categories")
    """
    entity = studly(raw)
    variable = entity[:1].lower() + entity[1:]
    return NamingSet(
        entity=entity,
        table=pluralize(snake(entity)),
        variable=variable,
        route_segment=pluralize(variable),
    )


def studly(value: str) -> str:
    """Convert ``order_item``, ``order-item`` or ``orderItem`` to ``OrderItem``.

    Inner capitals are preserved, unlike ``str.capitalize``.
    """
    parts = re.split(r"[-_\s]+", value.strip())
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def snake(value: str) -> str:
    """Convert ``OrderItem`` or ``order-item`` to ``order_item``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def pluralize(word: str) -> str:
    """Pluralise the trailing word of a compound name.

    ``category`` -> ``categories``, ``orderItem`` -> ``orderItems``,
    ``order_item`` -> ``order_items``.
    """
    match = _TRAILING_WORD.search(word)
    tail = match.group(1) if match else ""
    if not tail:
        return _pluralizer.pluralize(word)

    head = word[: len(word) - len(tail)]
    plural_tail = _pluralizer.pluralize(tail.lower())
    if tail[0].isupper():
        plural_tail = plural_tail[:1].upper() + plural_tail[1:]
    return head + plural_tail
