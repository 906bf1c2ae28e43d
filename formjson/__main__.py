"""CLI entry point for the form converter.

Usage:
    python -m formjson                                # Interactive form
    python -m formjson tui --variant lottery          # Interactive lottery form
    python -m formjson convert --input values.yaml    # Non-interactive conversion
    python -m formjson convert --set name=山田太郎 --set age=30 \\
        --set bool=true --set date=2024-01-01 --set date2=2024-01-02
    python -m formjson fields --variant lottery       # Describe a form's fields
    python -m formjson --list-variants
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from formjson.lib.clipboard import ClipboardService, create_clipboard
from formjson.lib.engine import DisclosureMode
from formjson.lib.errors import ClipboardError, FormError
from formjson.lib.input_loader import build_snapshot
from formjson.lib.logging import setup_logging
from formjson.lib.payload import build_payload, render_json
from formjson.lib.validators import describe_fields, format_validation_report
from formjson.lib.variants import FormVariant, VARIANTS, get_variant
from formjson.tui.settings import FormSettings, get_settings

logger = logging.getLogger(__name__)

COMMANDS = ("tui", "convert", "fields")


def list_variants() -> None:
    """Print available form variants."""
    width = max(len(name) for name in VARIANTS)
    print("Available form variants:")
    print()
    for name, variant in VARIANTS.items():
        print(f"  {name:<{width}}  {variant.title}")
        if variant.description:
            print(f"  {'':<{width}}  {variant.description}")
    print()
    print("Usage:")
    print("  python -m formjson tui --variant <name>")
    print("  python -m formjson convert --variant <name> --input values.yaml")


def convert_command(
    variant: FormVariant,
    args: argparse.Namespace,
    settings: FormSettings,
) -> int:
    """Validate supplied values in final mode and print the JSON payload.

    Returns:
        0 when JSON was produced, 1 when validation failed
    """
    snapshot = build_snapshot(variant, args.input, args.assignments)
    result = variant.evaluate(snapshot, DisclosureMode.final())

    if not result.valid:
        logger.info(
            "Conversion rejected: %d field error(s)",
            len(result.errors),
            extra={"result": result.to_dict()},
        )
        print(format_validation_report(variant, result), file=sys.stderr)
        return 1

    payload = build_payload(variant, result)
    indent = None if args.compact else settings.json_indent
    text = render_json(payload, indent=indent)
    print(text)

    if args.copy:
        try:
            ClipboardService(create_clipboard(settings.clipboard)).copy_text(text)
        except ClipboardError as e:
            # The JSON is already on stdout; a failed copy is only reported.
            logger.warning("Copy failed: %s", e.message, extra={"error": e.to_dict()})
            print(f"Warning: {e.message}", file=sys.stderr)
        else:
            logger.info("Copied JSON to clipboard")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formjson",
        description="Validate form fields and convert them to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Fill in the basic form interactively
    python -m formjson

    # Fill in the lottery form interactively
    python -m formjson tui --variant lottery

    # Convert values from a YAML file
    python -m formjson convert --input values.yaml

    # Convert values given on the command line, compact output
    python -m formjson convert --set name=山田太郎 --set age=30 --compact

    # Show the fields and constraints of a form
    python -m formjson fields --variant lottery
        """,
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="tui",
        choices=COMMANDS,
        help="Command to run (default: tui)",
    )
    parser.add_argument(
        "--variant",
        help=f"Form variant ({', '.join(VARIANTS)}); defaults to the settings file",
    )
    parser.add_argument(
        "--list-variants",
        action="store_true",
        help="List available form variants",
    )
    parser.add_argument(
        "--input",
        "-i",
        help="YAML or JSON file with field values (convert)",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="assignments",
        metavar="FIELD=VALUE",
        help="Set a field value; repeatable, overrides --input (convert)",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Print JSON on one line (convert)",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Also copy the JSON to the clipboard (convert)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs in JSON format (for log aggregation systems)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to a file in addition to console",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose, json_format=args.json_logs, log_file=args.log_file)

    if args.list_variants:
        list_variants()
        return 0

    try:
        settings = get_settings(reload=True)
        variant = get_variant(args.variant or settings.variant)

        if args.command == "fields":
            print(describe_fields(variant))
            return 0

        if args.command == "convert":
            return convert_command(variant, args, settings)

        from formjson.tui.app import run_form

        run_form(variant.name, settings)
        return 0
    except FormError as e:
        logger.debug("Command failed", extra={"error": e.to_dict()})
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
