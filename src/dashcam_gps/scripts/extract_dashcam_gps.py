#!/usr/bin/env python3
"""
Extract Dashcam GPS Script

Converts Novatek GPS data embedded into MP4 file(s) into a GPX (or CSV) track.

Examples:
    dashcam-gps-extract --output track.gpx file.mp4

    dashcam-gps-extract --verbose --force --sort gps --output test.gpx 'path/to/*F.mp4'
"""

import argparse
import logging
import sys
from pathlib import Path

import rich.console
import rich.logging
import rich.markup

from dashcam_gps.config import config
from dashcam_gps.errors import FatalError
from dashcam_gps.processing.export_track import check_output_path, write_track
from dashcam_gps.processing.extract_gps_records import extract_gps_records
from dashcam_gps.processing.find_input_files import find_input_files
from dashcam_gps.processing.sort_records import SortingMode, sort_records
from dashcam_gps.utils import log_track_summary, summarize_track

logger = logging.getLogger(__name__)

# EX_SOFTWARE from sysexits.h
EXIT_FATAL = 70


def setup_logging(verbose: bool = False):
    log_format = "\\[[bold]%(name)s[/bold]] %(message)s"
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=log_format,
        datefmt="[%X]",
        handlers=[
            rich.logging.RichHandler(
                console=rich.console.Console(color_system="auto", stderr=True),
                show_level=True,
                show_path=False,
                enable_link_path=False,
                rich_tracebacks=True,
                tracebacks_show_locals=False,
                markup=True,
            )
        ],
    )


def _sorting_mode(value: str) -> SortingMode:
    try:
        return SortingMode.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dashcam-gps-extract",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=config.OUTPUT, help="Output file path"
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=config.FORCE,
        help="Overwrite output file if exists",
    )
    parser.add_argument(
        "-s",
        "--sort",
        type=_sorting_mode,
        default=config.SORT,
        help="Sorting mode (file, gps, none)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("input", help="Input file path, directory or glob pattern")
    return parser


def run(input_pattern: str, output: Path, force: bool, sort: SortingMode) -> None:
    check_output_path(output, force)

    paths = find_input_files(input_pattern)
    logger.info("Found %d file(s) to process.", len(paths))

    records = extract_gps_records(paths)
    sort_records(records, sort)

    write_track(records, output)
    log_track_summary(summarize_track(records))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        run(args.input, args.output, args.force, args.sort)
    except FatalError as exc:
        logger.error("%s", rich.markup.escape(str(exc)))
        return EXIT_FATAL
    return 0


if __name__ == "__main__":
    sys.exit(main())
