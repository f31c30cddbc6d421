"""
Command-line interface for instruction documents.

Usage:
    pdf-instructions validate document.json
    pdf-instructions render document.json --format pdf -o document.pdf
    pdf-instructions render document.json --format html --editable
    pdf-instructions schema
    pdf-instructions new --type table
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .editor import ELEMENT_LABELS, create_default_element, create_default_instructions
from .exceptions import DocumentInstructionsError, ValidationError
from .renderers import HtmlRenderer, PdfRenderer
from .utils.rich_logger import setup_logging
from .validator import instructions_json_schema, serialize_instructions, validate_json_string

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pdf-instructions",
        description="Validate and render document instruction trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdf-instructions validate report.json
  pdf-instructions render report.json --format pdf -o report.pdf
  pdf-instructions render report.json --format html --editable
  pdf-instructions new --type barChart
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate an instruction document")
    validate_parser.add_argument("input", help="Instruction document (JSON)")

    render_parser = subparsers.add_parser("render", help="Render an instruction document")
    render_parser.add_argument("input", help="Instruction document (JSON)")
    render_parser.add_argument(
        "-f", "--format",
        choices=["html", "pdf"],
        default="pdf",
        help="Output format (default: pdf)",
    )
    render_parser.add_argument(
        "-o", "--output",
        help="Output file path (default: input name with new extension)",
    )
    render_parser.add_argument(
        "--editable",
        action="store_true",
        help="Generate the clickable editing surface (html format)",
    )

    subparsers.add_parser("schema", help="Print the JSON Schema of instruction documents")

    new_parser = subparsers.add_parser("new", help="Print a default document or element")
    new_parser.add_argument(
        "--type",
        dest="element_type",
        choices=sorted(ELEMENT_LABELS),
        help="Print a default element of this type instead of a document",
    )

    return parser


def _load(path: Path):
    return validate_json_string(path.read_text(encoding="utf-8"))


def cmd_validate(args) -> int:
    """Handle validate command."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        document = _load(input_path)
    except ValidationError as exc:
        print(f"{exc.path or '<root>'}: {exc.message}", file=sys.stderr)
        return 1

    print(f"OK: {document.metadata.title} ({len(document.content)} elements)")
    return 0


def cmd_render(args) -> int:
    """Handle render command."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else input_path.with_suffix(f".{args.format}")

    try:
        document = _load(input_path)
        if args.format == "pdf":
            PdfRenderer(document).save_to_file(output_path)
        else:
            renderer = HtmlRenderer(document, editable=args.editable)
            renderer.save_to_file(renderer.render(), output_path)
    except ValidationError as exc:
        print(f"{exc.path or '<root>'}: {exc.message}", file=sys.stderr)
        return 1
    except DocumentInstructionsError as exc:
        logger.error(f"Rendering failed: {exc}")
        return 1

    logger.info(f"Saved: {output_path}")
    print(output_path)
    return 0


def cmd_schema(args=None) -> int:
    """Handle schema command."""
    print(json.dumps(instructions_json_schema(), indent=2))
    return 0


def cmd_new(args) -> int:
    """Handle new command."""
    if args.element_type:
        value = create_default_element(args.element_type).to_instructions()
    else:
        value = serialize_instructions(create_default_instructions())
    print(json.dumps(value, indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    if args.command == "validate":
        return cmd_validate(args)
    elif args.command == "render":
        return cmd_render(args)
    elif args.command == "schema":
        return cmd_schema(args)
    elif args.command == "new":
        return cmd_new(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
