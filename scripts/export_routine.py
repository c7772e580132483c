"""Export a class routine to files (Word, HTML, print, text, CSV, DOCX).

The routine comes either from a JSON snapshot file
({"dates": [...], "classes": [{"name": ..., "subjects": [...]}]}) or, with
--fetch, from the class-sections endpoint (one blank row per class).

Run with: python scripts/export_routine.py --input data/routine.json
Fetch:    python scripts/export_routine.py --fetch --title "Final exam routine"
Formats:  python scripts/export_routine.py --input data/routine.json --format csv --format text
Stdout:   python scripts/export_routine.py --input data/routine.json --clipboard

Exit codes:
  0 = success (files written to --output-dir, or box table on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.routine.config import get_config  # noqa: E402
from src.routine.exporters import ExportFormat  # noqa: E402
from src.routine.logging import get_logger, routine_context, setup_logging  # noqa: E402
from src.routine.models import ScheduleData  # noqa: E402
from src.routine.table import RoutineTable  # noqa: E402

FILE_FORMATS = [f.value for f in ExportFormat if f is not ExportFormat.CLIPBOARD]

log = get_logger(__name__)


def _log(msg: str) -> None:
    """Write progress messages to stderr so stdout stays clean."""
    print(msg, file=sys.stderr)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Export a class routine to document files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument(
        "--input",
        type=str,
        help="JSON snapshot file with 'dates' and 'classes'.",
    )
    source_group.add_argument(
        "--fetch",
        action="store_true",
        help="Seed the routine from the class-sections endpoint.",
    )

    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=FILE_FORMATS,
        default=None,
        help="Format to write; repeat for several (default: all).",
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Document title (default: ROUTINE_TITLE from the environment).",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for exported files (default: EXPORT_DIR).",
    )
    parser.add_argument(
        "--clipboard",
        action="store_true",
        help="Print the box-drawn clipboard table to stdout instead of writing files.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit structured logs as JSON.",
    )
    return parser.parse_args(argv)


def _load_table(args: argparse.Namespace) -> RoutineTable | None:
    """Build the table from --input, or seed it from the class source.

    Returns None when --fetch could not produce a class list.
    """
    if args.input:
        raw = json.loads(Path(args.input).read_text(encoding="utf-8"))
        return RoutineTable(ScheduleData.model_validate(raw), title=args.title)

    table = RoutineTable(title=args.title)
    if not table.load_classes():
        return None
    return table


def _write_files(table: RoutineTable, output_dir: Path, formats: list[str]) -> None:
    snapshot = table.snapshot
    _log(
        f"  Routine '{table.title}': {len(snapshot.classes)} classes, "
        f"{len(snapshot.dates)} dates"
    )
    output_dir.mkdir(parents=True, exist_ok=True)

    for fmt in formats:
        payload = table.export(fmt)
        target = output_dir / payload.filename
        if isinstance(payload.content, bytes):
            target.write_bytes(payload.content)
        else:
            target.write_text(payload.content, encoding="utf-8")
        log.info("export_written", format=fmt, path=str(target))
        _log(f"  {fmt:<6} -> {target}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = get_config()
    setup_logging(
        json_output=args.json_logs or config.log_json, log_level=config.log_level
    )

    table = _load_table(args)
    if table is None:
        _log(f"  ERROR: No class list from {config.class_sections_url}")
        return 1

    with routine_context(table.title, table.snapshot):
        if args.clipboard:
            print(table.export(ExportFormat.CLIPBOARD).content, end="")
            return 0

        output_dir = Path(args.output_dir or config.export_dir)
        _write_files(table, output_dir, args.formats or FILE_FORMATS)

    _log("export_routine: done")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
