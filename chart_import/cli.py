"""Command-line interface for chart import.

Usage:
    chart-import <chart_file> <slides_file> [-o output_file]

Examples:
    chart-import testdata/amazing_grace_rows.txt testdata/amazing_grace_slides.json
    chart-import testdata/amazing_grace_inline.txt testdata/amazing_grace_slides.json --pretty
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chart_import.aligner import DEFAULT_WINDOW_SIZE, MatchOptions
from chart_import.importer import import_chart_file
from chart_import.parser import parse_chart_text
from chart_import.similarity import build_score_matrix
from chart_import.slides import load_slide_lines_json
from chart_import.text import decode_text

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="chart-import",
        description="Match a chord chart to a song's slide lines and export placements as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s chart.txt slides.json
  %(prog)s chart.txt slides.json -o result.json --pretty
  %(prog)s chart.txt slides.json --no-notes --window 12
        """,
    )
    parser.add_argument("chart", type=Path, help="Plain-text chord chart to import")
    parser.add_argument("slides", type=Path, help="JSON file with the song's slide lines")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument(
        "--no-notes",
        dest="include_notes",
        action="store_false",
        help="Do not import chart comments as notes",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=DEFAULT_WINDOW_SIZE,
        help=f"Slide lines a chart line may skip ahead (default: {DEFAULT_WINDOW_SIZE})",
    )
    parser.add_argument(
        "--scores",
        action="store_true",
        help="Include the chart-line by slide-line score matrix in the output",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)")
    return parser


def score_matrix_to_dict(chart_path: Path, slides_path: Path) -> dict[str, Any]:
    """Score every parsed chart line against every slide line."""
    parse_result = parse_chart_text(decode_text(chart_path.read_bytes()).text)
    slide_lines = load_slide_lines_json(slides_path)
    matrix = build_score_matrix(
        [line.text for line in parse_result.lines],
        [slide.text for slide in slide_lines],
    )
    return {
        "chartLines": [line.text for line in parse_result.lines],
        "slideLines": [slide.to_dict() for slide in slide_lines],
        "matrix": matrix.round(4).tolist(),
    }


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)

    for path in (args.chart, args.slides):
        if not path.exists():
            print(f"Error: Input file not found: {path}", file=sys.stderr)
            return 1

    try:
        options = MatchOptions(include_notes=args.include_notes, window_size=args.window)
        slide_lines = load_slide_lines_json(args.slides)
        result = import_chart_file(args.chart, slide_lines, options=options)
    except json.JSONDecodeError as e:
        print(f"Error reading slides: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    data = result.to_dict()
    if args.scores:
        data["scores"] = score_matrix_to_dict(args.chart, args.slides)

    indent = 2 if args.pretty else None
    json_output = json.dumps(data, indent=indent, ensure_ascii=False)

    if args.output:
        args.output.write_text(json_output, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        print(json_output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
