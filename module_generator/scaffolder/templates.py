"""Jinja2 template rendering for module scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
bundled ``scaffolder/templates/`` directory, or from a user override
directory checked first, and renders them with entity-specific context
data.

Two environments share the same loader.  PHP templates use the standard
Jinja2 delimiters.  Blade templates (``*.blade.php.j2``) contain Blade's own
``{{ }}`` echo syntax, so they are rendered with ``[[ ]]`` / ``[% %]`` /
``[# #]`` instead.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Any, Iterable

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, TemplateNotFound


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

BLADE_SUFFIX = ".blade.php.j2"


class MissingTemplateError(LookupError):
    """Raised when a template exists in neither the override nor the bundled directory."""

    def __init__(self, template_path: str) -> None:
        self.template_path = template_path
        super().__init__(f"Template not found: {template_path}")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for module scaffolding.

    Templates are looked up in *override_dir* first (when given and present)
    and then in *template_dir*, so a project can customise any single
    template without copying the rest.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        override_dir: str | Path | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.override_dir = Path(override_dir) if override_dir is not None else None

        search_path = [str(self.template_dir)]
        if self.override_dir is not None:
            search_path.insert(0, str(self.override_dir))
        loader = ChoiceLoader([FileSystemLoader(path) for path in search_path])

        self.env = _make_environment(loader)
        self.blade_env = _make_environment(
            loader,
            block_start_string="[%",
            block_end_string="%]",
            variable_start_string="[[",
            variable_end_string="]]",
            comment_start_string="[#",
            comment_end_string="#]",
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"model.php.j2"`` or ``"views/index.blade.php.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            MissingTemplateError: If the template cannot be found.
        """
        env = self.blade_env if template_path.endswith(BLADE_SUFFIX) else self.env
        try:
            template = env.get_template(template_path)
        except TemplateNotFound as exc:
            raise MissingTemplateError(template_path) from exc
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the standard delimiters."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all bundled ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )

    def publish(self, destination: str | Path, *, force: bool = False) -> list[Path]:
        """Copy the bundled templates into *destination* for customisation.

        Existing files are kept unless *force* is set.

        Returns:
            List of files copied.
        """
        dest = Path(destination)
        copied: list[Path] = []
        for rel in self.list_templates():
            target = dest / rel
            if target.exists() and not force:
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.template_dir / rel, target)
            copied.append(target)
        return copied


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def php_str(value: Any) -> str:
    """Render *value* as a single-quoted PHP string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def php_list(values: Iterable[Any]) -> str:
    """Render *values* as a short-syntax PHP array of strings."""
    return "[" + ", ".join(php_str(v) for v in values) + "]"


def _headline_filter(value: str) -> str:
    """Convert ``issued_at`` to ``Issued at`` for labels."""
    words = re.sub(r"[-_]+", " ", value).strip()
    return words[:1].upper() + words[1:]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _make_environment(loader: ChoiceLoader, **delimiters: str) -> Environment:
    env = Environment(
        loader=loader,
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        **delimiters,
    )
    env.filters["php_str"] = php_str
    env.filters["php_list"] = php_list
    env.filters["headline"] = _headline_filter
    return env
