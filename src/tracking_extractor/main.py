"""CLI entry point for the tracking-number extractor."""

import argparse
import sys
from glob import glob
from pathlib import Path
from typing import List, Optional

from . import __version__
from .batch import ReceivingBatch
from .config import get_settings
from .exceptions import ReceivingException
from .extractor import TrackingNumberExtractor
from .logging import configure_logging, ExtractorLogger
from .models.enums import CaptureSource
from .output import get_writer
from .validators.confidence import ConfidenceValidator


STDIN_MARKER = "-"


def setup_logging(
    verbose: bool = False, log_format: str = None, log_file: str = None
) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug level logging
        log_format: Output format ('json' or 'text'). Defaults to settings value.
        log_file: Append logs to this file instead of stderr
    """
    settings = get_settings()
    level = "DEBUG" if verbose else settings.log_level
    fmt = log_format or settings.log_format
    configure_logging(log_level=level, log_format=fmt, log_file=log_file)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tracking-extractor",
        description="Extract carrier tracking numbers from scans, labels and manifests",
        epilog="Example: tracking-extractor manifest.txt -o batch.csv --summary",
    )

    parser.add_argument(
        "input",
        nargs="*",
        help="Input text file(s). Supports glob patterns; '-' or none reads stdin",
    )

    parser.add_argument(
        "--source",
        choices=[s.value for s in CaptureSource],
        default=CaptureSource.LABEL.value,
        help="How the input was captured (default: label)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path. Format determined by extension (.json or .csv)",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "csv"],
        help="Output format. Overrides extension detection",
    )

    parser.add_argument(
        "--pretty",
        action="store_true",
        default=True,
        help="Pretty print JSON output (default: True)",
    )

    parser.add_argument(
        "--no-pretty",
        action="store_false",
        dest="pretty",
        help="Compact JSON output",
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the carrier mix and review notice to stderr",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        default=None,
        help="Log output format: 'json' for structured (default), 'text' for human-readable",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Append logs to this file instead of stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


def expand_input_paths(patterns: List[str]) -> List[str]:
    """Expand glob patterns to file paths, keeping the stdin marker."""
    if not patterns:
        return [STDIN_MARKER]

    paths = []
    for pattern in patterns:
        if pattern == STDIN_MARKER:
            paths.append(STDIN_MARKER)
            continue
        matches = sorted(glob(pattern))
        if matches:
            paths.extend(matches)
        else:
            # Treat as literal path
            paths.append(pattern)
    return paths


def determine_output_format(output_path: Optional[str], format_override: Optional[str]) -> str:
    """Determine output format from path or override."""
    if format_override:
        return format_override

    if output_path:
        suffix = Path(output_path).suffix.lower()
        if suffix == ".csv":
            return "csv"
    return "json"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_format, args.log_file)
    logger = ExtractorLogger(__name__)

    inputs = expand_input_paths(args.input)
    source = CaptureSource.from_text(args.source)

    extractor = TrackingNumberExtractor()
    batch = ReceivingBatch()
    duplicates = 0

    for item in inputs:
        try:
            if item == STDIN_MARKER:
                parsed = extractor.extract(sys.stdin.read())
            else:
                parsed = extractor.extract_file(item)
        except ReceivingException as e:
            logger.file_error(file_path=item, error=str(e), error_type=type(e).__name__)
            continue

        result = batch.merge(parsed, source)
        duplicates += result.duplicates
        for message in result.messages():
            logger.info("merge_message", input=item, message=message)

    entries = batch.entries
    logger.batch_summary(
        total_inputs=len(inputs),
        collected=len(entries),
        duplicates=duplicates,
        needs_review=len(ConfidenceValidator().filter_needs_review(entries)),
    )

    if args.summary:
        print(batch.count_label(), file=sys.stderr)
        if entries:
            print(batch.summarize(), file=sys.stderr)
        notice = batch.review_notice()
        if notice:
            print(notice, file=sys.stderr)

    if not entries:
        logger.error("no_tracking_numbers", attempted_inputs=len(inputs))
        return 1

    output_format = determine_output_format(args.output, args.format)
    writer = get_writer(output_format)

    try:
        if args.output:
            output_path = Path(args.output)
            logger.info("writing_output", output_path=str(output_path), format=output_format)
            if output_format == "csv":
                writer.write_batch(entries, output_path)
            else:
                writer.write_batch(entries, output_path, pretty=args.pretty)
            logger.info("output_written", output_path=str(output_path))
        elif output_format == "csv":
            sys.stdout.write(writer.to_csv_string(entries))
        else:
            print(writer.to_json_string(entries, pretty=args.pretty))
    except ReceivingException as e:
        logger.error("output_failed", error=str(e), error_type=type(e).__name__)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
