#!/usr/bin/env python3
"""
Scene Release Dump - parse release names and print the result.

Reads release names from one line of stdin or from the entries of one or
more directories and prints the parsed fields as text or JSON.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from parsers.release_parser import Release, parse
from utils.logger import setup_logger, set_debug_mode, set_quiet_mode

logger = setup_logger()


def release_names(directory: Path) -> List[str]:
    """
    List the release names found directly in a directory.

    Files are named without their extension, directories by their full name.

    Args:
        directory: Directory to list

    Returns:
        Release names, sorted by entry name

    Raises:
        OSError: If the directory cannot be read
    """
    names = []
    for entry in sorted(directory.iterdir()):
        names.append(entry.name if entry.is_dir() else entry.stem)
    return names


def parse_names(names: Iterable[str]) -> List[Release]:
    """Parse names and keep the releases that produced a title."""
    releases = []
    for name in names:
        release = parse(name)
        if release.title:
            releases.append(release)
        else:
            logger.debug(f"No title found for '{name}'")
    return releases


def format_release(release: Release) -> str:
    """
    Human readable dump of the non-empty fields of a release.

    Args:
        release: Parsed release

    Returns:
        Multi-line text, one tab separated field per line
    """
    lines = [f"'{release.input}' parsed to:"]
    for name, value in release.to_dict(omit_empty=True).items():
        lines.append(f"\t{name}:\t{str(value).lower() if isinstance(value, bool) else value}")
    return "\n".join(lines)


def write_releases(releases: List[Release], as_json: bool, out: Optional[TextIO] = None) -> None:
    """Print releases as text blocks or as one indented JSON array."""
    out = out or sys.stdout
    if as_json:
        out.write(json.dumps([r.to_dict() for r in releases], indent=1, ensure_ascii=False))
        out.write("\n")
        return
    for release in releases:
        out.write(format_release(release) + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        description="Parse scene release names and print the extracted fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /media/incoming                   # Dump every release in a folder
  %(prog)s --json /media/incoming            # Same, as JSON
  echo "Brave.2012.R5.DVDRip.XViD.LiNE-UNiQUE" | %(prog)s --stdin --json
        """
    )
    parser.add_argument("directories", nargs="*", type=Path, help="Directories to scan for releases")
    parser.add_argument("--json", action="store_true", help="Output a JSON array instead of text")
    parser.add_argument("--stdin", action="store_true", help="Read one release name from stdin")
    parser.add_argument("--quiet", action="store_true", help="Only show warnings and errors on the console")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if not args.directories and not args.stdin:
        parser.print_usage()
        return 1

    if args.debug:
        set_debug_mode(True)
    elif args.quiet or args.json:
        set_quiet_mode(True)

    releases: List[Release] = []

    if args.stdin:
        line = sys.stdin.readline().replace("\n", "")
        releases.extend(parse_names([line]))

    for directory in args.directories:
        logger.info(f"Scanning directory '{directory}' for releases")
        try:
            names = release_names(directory)
        except OSError as e:
            logger.error(f"Cannot read directory {directory}: {e}")
            return 1
        releases.extend(parse_names(names))

    write_releases(releases, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
