"""Command line interface for OpenAPI to Java model generation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

from .checks import find_missing_schemas, list_schemas, validate_document
from .generator import ParseError, WriteError, run_generation
from .loader import load_document
from .options import GenerationOptions, OptionsError, build_options, load_options
from .writer import default_archive_name

# CLI flag destination -> option field it overrides.
_OVERRIDES: dict[str, str] = {
    "package": "package_name",
    "lombok": "use_lombok",
    "jackson": "use_json_annotations",
    "date_type": "date_type",
    "boxed": "use_boxed_primitives",
    "accessors": "generate_accessors",
    "optional": "use_optional",
    "validation": "use_validation_annotations",
    "validation_api": "validation_api",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="openapi-to-java-generator",
        description="Generate Java model classes from OpenAPI/Swagger schema definitions",
    )
    parser.add_argument(
        "--input", required=True, help="Path to an OpenAPI/Swagger JSON or YAML file"
    )
    parser.add_argument("--output", help="Directory to write one .java file per schema into")
    parser.add_argument(
        "--archive",
        nargs="?",
        const="",
        help="Bundle sources into a zip archive (default name: <spec>-models.zip)",
    )
    parser.add_argument(
        "--schema",
        action="append",
        dest="schemas",
        metavar="NAME",
        help="Schema to generate; repeat for several (default: all schemas)",
    )
    parser.add_argument("--options", help="YAML or JSON file with generation options")
    parser.add_argument("--list", action="store_true", help="List schemas and exit")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Report validation issues and undefined schema references and exit",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    group = parser.add_argument_group("generation options")
    group.add_argument("--package", help="Java package name")
    group.add_argument("--lombok", action=argparse.BooleanOptionalAction, default=None)
    group.add_argument("--jackson", action=argparse.BooleanOptionalAction, default=None)
    group.add_argument("--date-type", choices=["OffsetDateTime", "String"])
    group.add_argument("--boxed", action=argparse.BooleanOptionalAction, default=None)
    group.add_argument("--accessors", action=argparse.BooleanOptionalAction, default=None)
    group.add_argument("--optional", action=argparse.BooleanOptionalAction, default=None)
    group.add_argument("--validation", action=argparse.BooleanOptionalAction, default=None)
    group.add_argument("--validation-api", choices=["jakarta", "javax"])
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    try:
        if args.list:
            _print_schema_list(input_path)
            return 0
        if args.check:
            return _run_checks(input_path)

        options = _resolve_options(args)
        archive_path = _archive_path(args.archive, input_path)
        if args.output is None and archive_path is None:
            parser.error("one of --output or --archive is required to generate code")
        run = run_generation(
            input_path=input_path,
            selected_names=args.schemas,
            options=options,
            output_dir=Path(args.output) if args.output else None,
            archive_path=archive_path,
        )
    except (ParseError, OptionsError, WriteError) as exc:
        parser.error(str(exc))
        return 2

    for path in run.written_files:
        print(f"Wrote {path}")
    if run.archive_path is not None:
        print(f"Wrote {run.archive_path} ({len(run.artifacts)} sources)")
    return 0


def _resolve_options(args: argparse.Namespace) -> GenerationOptions:
    base = load_options(Path(args.options)) if args.options else GenerationOptions()
    values: dict[str, Any] = base.model_dump()
    for flag, field_name in _OVERRIDES.items():
        value = getattr(args, flag)
        if value is not None:
            values[field_name] = value
    return build_options(values)


def _archive_path(raw: Optional[str], input_path: Path) -> Optional[Path]:
    if raw is None:
        return None
    if raw:
        return Path(raw)
    return input_path.with_name(default_archive_name(input_path.name))


def _print_schema_list(input_path: Path) -> None:
    for summary in list_schemas(load_document(input_path)):
        heading = f"{summary.name}: {summary.description}" if summary.description else summary.name
        print(heading)
        for prop in summary.properties:
            marker = " (required)" if prop.required else ""
            print(f"  {prop.name}: {prop.type}{marker}")


def _run_checks(input_path: Path) -> int:
    document = load_document(input_path)
    issues = validate_document(document)
    missing = find_missing_schemas(document)
    for issue in issues:
        print(f"Invalid: {issue.location}: {issue.message}")
    for item in missing:
        print(f"Missing schema: {item.schema} (referenced at {item.path})")
    if not issues and not missing:
        print("No problems found")
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
