# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for jpegiim

Lists the header segments of a JPEG, reads and writes its comment and
IPTC records, and extracts its compressed image data.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from jpegiim import __version__
from jpegiim.core import JPEGFile, read_jpeg_image_data
from jpegiim.exceptions import JpegIimError
from jpegiim.iptc_parser import IPTCRecord, parse_dataset_id

logger = logging.getLogger(__name__)


def format_output(rows: List[Dict[str, Any]], format_type: str = "text") -> str:
    """
    Format listing rows based on format type.

    Args:
        rows: One dictionary per listed item
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(rows, indent=2, ensure_ascii=False)
    lines = []
    for row in rows:
        lines.append("  ".join(f"{key}={value}" for key, value in row.items()))
    return "\n".join(lines)


def _segment_rows(jpeg: JPEGFile) -> List[Dict[str, Any]]:
    return [
        {
            "marker": f"0x{segment.marker:02X}",
            "name": segment.name,
            "offset": segment.payload_offset,
            "length": len(segment.payload),
            "description": segment.description,
        }
        for segment in jpeg.segments
    ]


def _record_rows(jpeg: JPEGFile, records: List[IPTCRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "type": record.type,
            "name": jpeg.table.record_name(record.record_number, record.dataset_number),
            "value": record.text(),
        }
        for record in records
    ]


def _report_partial(jpeg: JPEGFile) -> int:
    if jpeg.header.complete:
        return 0
    print(f"Warning: {jpeg.file_path}: {jpeg.header.error}", file=sys.stderr)
    return 1


def cmd_segments(args: argparse.Namespace) -> int:
    with JPEGFile(args.file, read_only=True) as jpeg:
        print(format_output(_segment_rows(jpeg), args.format))
        return _report_partial(jpeg)


def cmd_comment(args: argparse.Namespace) -> int:
    with JPEGFile(args.file, read_only=args.set is None) as jpeg:
        if args.set is None:
            comment = jpeg.get_comment()
            if comment is None:
                print(f"{args.file}: no comment", file=sys.stderr)
                return 1
            print(comment)
            return 0
        jpeg.set_comment(args.set)
        jpeg.save(args.output)
    return 0


def cmd_iptc(args: argparse.Namespace) -> int:
    editing = bool(args.add or args.remove)
    with JPEGFile(args.file, read_only=not editing) as jpeg:
        scan = jpeg.read_iptc()
        if not editing:
            print(format_output(_record_rows(jpeg, scan.records), args.format))
            if not scan.complete:
                print(f"Warning: {args.file}: {scan.error}", file=sys.stderr)
                return 1
            return 0

        scan.raise_for_error()
        records = scan.records
        for identifier in args.remove or []:
            removed = parse_dataset_id(identifier)
            records = [r for r in records if (r.record_number, r.dataset_number) != removed]
        for assignment in args.add or []:
            identifier, sep, value = assignment.partition('=')
            if not sep:
                raise JpegIimError(f"Invalid assignment '{assignment}', expected RECORD:DATASET=VALUE")
            record_number, dataset_number = parse_dataset_id(identifier)
            records.append(IPTCRecord.from_text(record_number, dataset_number, value))
        jpeg.set_iptc_records(records)
        jpeg.save(args.output)
    return 0


def cmd_image_data(args: argparse.Namespace) -> int:
    image_data = read_jpeg_image_data(args.file)
    Path(args.output).write_bytes(image_data)
    logger.info("Wrote %d bytes of image data to %s", len(image_data), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jpegiim",
        description="jpegiim - Read and write JPEG segments, comments and IPTC records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List header segments
  jpegiim segments image.jpg

  # Set the comment, writing a new file
  jpegiim comment image.jpg --set "Harbour at dawn" -o out.jpg

  # Add a keyword and remove the caption
  jpegiim iptc image.jpg --add 2:25=harbour --remove 2:120
""",
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    subparsers = parser.add_subparsers(dest='command', required=True)

    segments = subparsers.add_parser('segments', help="List header segments")
    segments.add_argument('file', type=Path)
    segments.add_argument('--format', choices=['text', 'json'], default='text')
    segments.set_defaults(func=cmd_segments)

    comment = subparsers.add_parser('comment', help="Show or set the comment")
    comment.add_argument('file', type=Path)
    comment.add_argument('--set', metavar='TEXT', help="New comment text")
    comment.add_argument('-o', '--output', type=Path, help="Output file (default: overwrite input)")
    comment.set_defaults(func=cmd_comment)

    iptc = subparsers.add_parser('iptc', help="Show or edit IPTC records")
    iptc.add_argument('file', type=Path)
    iptc.add_argument('--format', choices=['text', 'json'], default='text')
    iptc.add_argument('--add', action='append', metavar='R:D=VALUE', help="Append a record")
    iptc.add_argument('--remove', action='append', metavar='R:D', help="Remove every record of a dataset")
    iptc.add_argument('-o', '--output', type=Path, help="Output file (default: overwrite input)")
    iptc.set_defaults(func=cmd_iptc)

    image_data = subparsers.add_parser('image-data', help="Extract the compressed image data")
    image_data.add_argument('file', type=Path)
    image_data.add_argument('-o', '--output', type=Path, required=True)
    image_data.set_defaults(func=cmd_image_data)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (JpegIimError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
