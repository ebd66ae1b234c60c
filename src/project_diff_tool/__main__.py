"""
Entry point for project-diff-tool.

Usage:
    project-diff --diff STATE CHANGES [-o OUT]   # Show/save what changed
    project-diff --merge STATE TARGET -o OUT     # Apply changes onto a state
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from project_diff_tool import __version__


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="project-diff",
        description="Delta-based diff and merge for project snapshots",
    )

    mode = parser.add_mutually_exclusive_group(required=True)

    mode.add_argument(
        "--diff", "-d",
        nargs=2,
        type=Path,
        metavar=("STATE", "CHANGES"),
        help="Diff CHANGES against an older STATE",
    )

    mode.add_argument(
        "--merge", "-m",
        nargs=2,
        type=Path,
        metavar=("STATE", "TARGET"),
        help="Merge TARGET changes onto STATE",
    )

    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file for the diff or merge result",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine decisions and print them on exit",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


def validate_files(paths: list[Path]) -> bool:
    """Validate that all files exist and look like snapshot files."""
    valid_extensions = {".yaml", ".yml"}

    for path in paths:
        if not path.exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return False
        if path.suffix.lower() not in valid_extensions:
            print(f"Warning: Unknown file type: {path.suffix}", file=sys.stderr)

    return True


def print_diff(diff) -> None:
    """Print one line per delta plus a summary line."""
    from project_diff_tool.core.registry import DEFAULT_REGISTRY
    from project_diff_tool.utils.colors import DIFF_SYMBOLS
    from project_diff_tool.utils.naming import nicify_delta_type

    for delta, _ in diff.iter_deltas():
        status = DEFAULT_REGISTRY.status_for(delta.type)
        symbol = DIFF_SYMBOLS.get(status.value, "")
        print(f"{symbol} {nicify_delta_type(delta.type)}: {delta.description.format()}")

    summary = DEFAULT_REGISTRY.summarize(diff)
    print(
        f"{summary.added_records} added, {summary.removed_records} removed, "
        f"{summary.changed_records} changed, "
        f"{summary.changed_properties} properties changed"
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    if args.merge:
        mode = "merge"
        files = args.merge
        if not args.output:
            print("Error: --output is required for merge mode", file=sys.stderr)
            return 1
    else:
        mode = "diff"
        files = args.diff

    if not validate_files(files):
        return 1

    from project_diff_tool.core.diff_logic import create_diff_logic
    from project_diff_tool.core.loader import load_snapshot
    from project_diff_tool.core.writer import write_snapshot
    from project_diff_tool.utils.log_handler import setup_logging

    handler = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    handler.clear()
    logger = logging.getLogger("project_diff_tool.cli")
    logger.info(f"Starting {mode}: {files[0]} <- {files[1]}")

    try:
        state = load_snapshot(files[0])
        incoming = load_snapshot(files[1])
        logic = create_diff_logic(incoming)

        if mode == "diff":
            result = logic.create_diff(state)
            print_diff(result)
        else:
            result = logic.create_merged_item(state)
            print(f"Merged {result.delta_count()} deltas into {args.output}")

        if args.output:
            write_snapshot(result, args.output)

    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    finally:
        if args.verbose:
            for record in handler.get_records():
                print(record.format(show_timestamp=False), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
