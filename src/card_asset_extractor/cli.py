"""Command-line interface for the card asset extractor.

This module provides the CLI entry point for extracting embedded assets
from PNG character cards and .charx archives.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .core.errors import ExtractionError
from .core.options import CollisionPolicy, ExtractionOptions
from .output import output_stem, write_archive, write_directory
from .pipeline import ExtractionPipeline, ExtractionResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-asset-extract",
        description="Extract embedded assets from PNG and .charx character cards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write Alice_assets.zip into the current directory
  card-asset-extract Alice.png

  # Loose files into ./out/Alice_assets/
  card-asset-extract Alice.charx -o out --loose-files

  # Show what would be extracted as JSON
  card-asset-extract Alice.png --list > assets.json
        """,
    )

    parser.add_argument("file", type=Path, help="Card file (.png or .charx, detected by content)")

    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory to write results into (default: current directory)",
    )

    parser.add_argument(
        "--loose-files",
        action="store_true",
        help="Write files into <stem>_assets/ instead of a ZIP archive",
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the extracted entries as JSON instead of writing files",
    )

    parser.add_argument(
        "--on-collision",
        choices=[policy.value for policy in CollisionPolicy],
        default=CollisionPolicy.RENAME.value,
        help="What to do when two assets share a name (default: rename)",
    )

    parser.add_argument(
        "--loose-riff",
        action="store_true",
        help="Treat any RIFF blob as WebP when guessing extensions",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def describe_entries(result: ExtractionResult) -> list[dict[str, object]]:
    """JSON-ready summary of the entries of a result."""
    return [
        {
            "name": entry.name,
            "size_bytes": entry.size_bytes,
            "type": "named" if entry.resolved else "unnamed",
        }
        for entry in result.entries
    ]


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the extractor."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    # Validate path exists
    path: Path = args.file
    if not path.exists():
        print(f"Error: File does not exist: {path}", file=sys.stderr)
        sys.exit(1)

    if not path.is_file():
        print(f"Error: Path is not a file: {path}", file=sys.stderr)
        sys.exit(1)

    options = ExtractionOptions(
        collision_policy=CollisionPolicy(args.on_collision),
        loose_riff=args.loose_riff,
    )

    print(f"Processing '{path.name}'...", file=sys.stderr)
    try:
        result = ExtractionPipeline(options).extract_file(path)
    except ExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.list:
        json.dump(describe_entries(result), sys.stdout, indent=2)
        print()  # Add newline at end
        return

    if result.is_empty:
        print(f"No assets found in {path.name}", file=sys.stderr)
        return

    print(
        f"Found {len(result.entries)} file(s) in {result.format_name} card "
        f"({result.resolved_count} named, {result.synthesized_count} unnamed)",
        file=sys.stderr,
    )

    try:
        if args.loose_files:
            target_dir = args.output_dir / f"{output_stem(result.container_name)}_assets"
            write_directory(result, target_dir)
            print(f"Wrote {target_dir}", file=sys.stderr)
        else:
            archive = write_archive(result, args.output_dir)
            print(f"Wrote {archive}", file=sys.stderr)
    except (OSError, ValueError) as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
