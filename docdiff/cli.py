"""
docdiff.cli — Compare two JSON files from the command line.

    docdiff original.json modified.json [output.json]

Writes the differences to output.json (default: diff_output.json next to
the original) and prints a summary.  Exits 1 when an input is missing or
malformed, or the output cannot be written.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import DiffSettings, configure_logging, verbosity_level
from .core import Document, diff, format_path, iter_changes, count_changes
from .errors import DocumentNotFoundError, OutputError, ParseError
from .formats import (
    default_output_path, load_document, to_json, to_python, write_result,
)

logger = logging.getLogger(__name__)

NO_DIFFERENCES = "No differences found between the files."


def build_parser(settings: DiffSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docdiff",
        description="Show only what changed between two JSON documents.",
    )
    parser.add_argument("original", help="Original JSON file")
    parser.add_argument("modified", help="Modified JSON file")
    parser.add_argument(
        "output", nargs="?",
        help=f'Where to write the differences (default: "{settings.output_name}" '
             "in the original file's folder)",
    )
    parser.add_argument(
        "--indent", type=int, default=settings.indent,
        help="JSON indentation of the output (default: %(default)s)",
    )
    parser.add_argument(
        "--unchanged-marker", default=settings.unchanged_marker, metavar="TEXT",
        help="Value written for unchanged array positions (default: null)",
    )
    parser.add_argument(
        "--stdout", action="store_true",
        help="Print the differences instead of writing a file",
    )
    parser.add_argument(
        "--paths", action="store_true",
        help="Summarize as one 'path: value' line per changed value",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log progress to stderr (-vv for debug output)",
    )
    return parser


def _load(path: Path, label: str) -> Optional[Document]:
    """Load one input, reporting failures on stderr.  None means failed."""
    try:
        return load_document(path)
    except DocumentNotFoundError:
        print(f"Error: {label.capitalize()} file not found: {path}", file=sys.stderr)
    except ParseError as exc:
        print(f"Error parsing {label} file: {path}", file=sys.stderr)
        print(exc, file=sys.stderr)
    except OSError as exc:
        print(f"Error reading {label} file: {path}: {exc}", file=sys.stderr)
    return None


def _print_paths(result: Document) -> None:
    for path, value in iter_changes(result):
        print(f"{format_path(path)}: {json.dumps(to_python(value), ensure_ascii=False)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    try:
        settings = DiffSettings.from_env()
    except ValueError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1

    args = build_parser(settings).parse_args(argv)
    configure_logging(verbosity_level(args.verbose, settings.log_level))

    original_path = Path(args.original)
    modified_path = Path(args.modified)
    output_path = (Path(args.output) if args.output
                   else default_output_path(original_path, settings.output_name))

    original = _load(original_path, "original")
    if original is None:
        return 1
    modified = _load(modified_path, "modified")
    if modified is None:
        return 1

    result = diff(original, modified)
    if result is None:
        print(NO_DIFFERENCES)
        return 0

    logger.info("%d changed value(s)", count_changes(result))
    rendered = to_json(result, indent=args.indent, unchanged=args.unchanged_marker)

    if args.stdout:
        if args.paths:
            _print_paths(result)
        else:
            print(rendered)
        return 0

    try:
        write_result(result, output_path, indent=args.indent,
                     unchanged=args.unchanged_marker)
    except OutputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Differences found and saved to: {output_path}")
    print("Summary of differences:")
    if args.paths:
        _print_paths(result)
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
