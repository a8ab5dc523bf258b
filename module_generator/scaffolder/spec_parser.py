"""Parsers for the compact field and select specification strings.

Two tiny DSLs are accepted on the command line:

* fields:  ``title:string,description:text,published``
* selects: ``status:pending,in-progress,completed;priority:low,high``

Neither parser raises on bad input.  Empty or absent input yields an empty
result; a malformed select group is dropped and, when the caller passes a
``skipped`` list, recorded there so it can be reported.
"""

from __future__ import annotations

from .models import FieldSpec, SelectFieldSpec


def parse_fields(raw: str | None) -> list[FieldSpec]:
    """Parse ``name[:type]`` tokens separated by commas.

    A token without ``:`` (or with an empty type) is a ``string`` field.
    Type tokens are not validated; unknown ones are kept verbatim.
    """
    if not raw:
        return []

    fields: list[FieldSpec] = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        name, _, field_type = token.partition(":")
        name = name.strip()
        if not name:
            continue
        fields.append(FieldSpec(name=name, type=field_type.strip() or "string"))
    return fields


def parse_selects(
    raw: str | None,
    skipped: list[str] | None = None,
) -> dict[str, list[str]]:
    """Parse ``name:opt,opt`` groups separated by semicolons.

    Options keep their original order and are trimmed; blank options are
    dropped.  A group with no ``:``, an empty name, or no options at all is
    malformed: it is skipped and appended to *skipped* if given.
    """
    if not raw:
        return {}

    selects: dict[str, list[str]] = {}
    for group in raw.split(";"):
        group = group.strip()
        if not group:
            continue
        name, sep, values = group.partition(":")
        name = name.strip()
        options = [opt.strip() for opt in values.split(",") if opt.strip()]
        if not sep or not name or not options:
            if skipped is not None:
                skipped.append(group)
            continue
        selects[name] = options
    return selects


def select_specs(selects: dict[str, list[str]]) -> list[SelectFieldSpec]:
    """Turn a parsed select mapping into ordered ``SelectFieldSpec`` objects."""
    return [SelectFieldSpec(name=name, options=list(options)) for name, options in selects.items()]
