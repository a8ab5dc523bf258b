"""Command-line entry points.

``make-module``           scaffolds one entity.
``publish-module-stubs``  copies the bundled templates into the override
                          directory so a project can customise them.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape

from module_generator.config import DEFAULT_STUB_DIR, GenerationType, GeneratorConfig
from module_generator.scaffolder.generator import ModuleGenerator, StageError
from module_generator.scaffolder.models import ModuleRequest
from module_generator.scaffolder.spec_parser import parse_fields, parse_selects
from module_generator.scaffolder.templates import TemplateRenderer
from module_generator.utils import (
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# make-module
# ---------------------------------------------------------------------------


def _build_make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="make-module",
        description="Scaffold a CRUD module: model, migration, factory, controller, views and routes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  make-module task --fields title:string,description:text \\\n"
            "      --selects 'status:pending,in-progress,completed'\n"
            "  make-module order --module-style --api\n"
            "  make-module invoice --type model-migration --path ./app\n"
        ),
    )
    parser.add_argument("name", help="Entity name, e.g. task or order_item")
    parser.add_argument(
        "--fields",
        default=None,
        help="Comma-separated name:type pairs (type defaults to string)",
    )
    parser.add_argument(
        "--selects",
        default=None,
        help="Semicolon-separated name:opt1,opt2 groups",
    )
    parser.add_argument(
        "--path",
        default=None,
        help="Application root to generate into (default: configured base path)",
    )
    parser.add_argument("--api", action="store_true", help="Generate an API controller and API routes")
    parser.add_argument(
        "--views",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate Blade views (default: configured value)",
    )
    parser.add_argument("--force", action="store_true", help="Overwrite existing files")
    parser.add_argument(
        "--module-style",
        action="store_true",
        help="Place everything under Modules/<Entity> with its own service provider",
    )
    parser.add_argument(
        "--type",
        choices=[t.value for t in GenerationType],
        default=None,
        help="Artifact set to generate (default: configured type)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: read MODULE_GENERATOR_* environment variables)",
    )
    return parser


def _load_config(config_path: str | None) -> GeneratorConfig:
    if config_path:
        return GeneratorConfig.load(Path(config_path))
    return GeneratorConfig.from_env()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``make-module``."""
    args = _build_make_parser().parse_args(argv)

    if not args.name.strip():
        print_error("Error: Entity name must not be empty")
        sys.exit(1)

    try:
        config = _load_config(args.config)
    except (OSError, ValueError) as exc:
        print_error(f"Error: Invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    skipped: list[str] = []
    fields = parse_fields(args.fields)
    selects = parse_selects(args.selects, skipped)
    for group in skipped:
        print_warning(f"Skipping malformed select specification: '{escape(group)}'")

    try:
        request = ModuleRequest.resolve(
            args.name,
            config,
            fields=fields,
            selects=selects,
            type=args.type,
            api=args.api,
            views=args.views,
            module_style=args.module_style,
            force=args.force,
            path=args.path,
        )
    except ValidationError as exc:
        print_error(f"Error: Invalid options: {escape(str(exc))}")
        sys.exit(1)

    try:
        report = ModuleGenerator(config).generate(request)
    except StageError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    print_summary_table(
        [
            (entry.stage, escape(entry.path), entry.outcome.value) for entry in report.entries
        ],
        title=f"{escape(report.entity)} module",
    )


# ---------------------------------------------------------------------------
# publish-module-stubs
# ---------------------------------------------------------------------------


def publish_main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``publish-module-stubs``."""
    parser = argparse.ArgumentParser(
        prog="publish-module-stubs",
        description="Copy the bundled templates into the project's override directory",
    )
    parser.add_argument(
        "--path",
        default=None,
        help="Application root (default: configured base path)",
    )
    parser.add_argument("--force", action="store_true", help="Replace templates already published")
    parser.add_argument("--config", default=None, help="JSON configuration file")
    args = parser.parse_args(argv)

    try:
        config = _load_config(args.config)
    except (OSError, ValueError) as exc:
        print_error(f"Error: Invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    if config.stub_path is not None:
        destination = config.stub_path
    elif args.path:
        destination = Path(args.path) / DEFAULT_STUB_DIR
    else:
        destination = config.override_dir

    try:
        copied = TemplateRenderer().publish(destination, force=args.force)
    except OSError as exc:
        print_error(f"Error: Could not publish templates: {escape(str(exc))}")
        sys.exit(1)

    for path in copied:
        print_info(f"  {escape(str(path))}")
    if copied:
        print_success(f"Published {len(copied)} template(s) to {escape(str(destination))}")
    else:
        print_warning(
            f"Templates already published in {escape(str(destination))} (use --force to replace)"
        )


if __name__ == "__main__":
    main()
