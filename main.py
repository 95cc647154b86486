#!/usr/bin/env python3
"""
Scene Release Renamer - Main Entry Point

Parses the scene release names of the directories under one or more roots
and renames movie releases into a normalized layout.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import config
from operations.folder_renamer import FolderRenamer, RenameSkipReason
from operations.name_formatter import format_examples, format_release_name, validate_template
from parsers.release_parser import ReleaseType, parse
from utils.logger import setup_logger, set_debug_mode, set_quiet_mode

logger = setup_logger()

__version__ = "1.0.0"


class ReleaseRenamer:
    """Main orchestrator for renaming release directories."""

    def __init__(
        self,
        dry_run: bool = False,
        rename_dirs: bool = True,
        rename_files: bool = False,
        movie_format: str = config.MOVIE_FORMAT,
        tv_format: str = config.TV_FORMAT,
    ):
        """
        Initialize release renamer.

        Args:
            dry_run: If True, only log what would be renamed
            rename_dirs: If True, rename the release directories
            rename_files: If True, also rename the video file inside each release
            movie_format: Name template for movie releases
            tv_format: Name template for TV releases

        Raises:
            ValueError: If a name template is invalid
        """
        validate_template(movie_format)
        validate_template(tv_format)

        self.rename_dirs = rename_dirs
        self.rename_files = rename_files
        self.movie_format = movie_format
        self.tv_format = tv_format
        self.renamer = FolderRenamer(dry_run=dry_run)

        self.stats = {
            "processed": 0,
            "renamed": 0,
            "skipped": 0,
            "errors": 0,
        }

    def run(self, roots: List[Path]) -> int:
        """
        Rename the releases found directly under each root.

        Args:
            roots: Directories holding release folders

        Returns:
            Exit code (0 for success, 1 for errors)
        """
        for root in roots:
            try:
                entries = sorted(p for p in root.iterdir() if p.is_dir())
            except OSError as e:
                logger.error(f"Cannot read directory {root}: {e}")
                return 1

            logger.info(f"Scanning '{root}' for releases")
            for entry in entries:
                self._process_entry(entry)

        self._print_summary()
        return 0 if self.stats["errors"] == 0 else 1

    def _process_entry(self, directory: Path) -> None:
        """
        Parse and rename a single release directory.

        Args:
            directory: Release directory
        """
        release = parse(directory.name)
        if not release.title:
            logger.debug(f"No title found, skipping: {directory.name}")
            return

        self.stats["processed"] += 1

        if release.type == ReleaseType.TV_SHOW:
            # tv_format is only rendered for the log until TV renames are supported
            tv_name = format_release_name(release, self.tv_format)
            logger.warning(f"{directory.name}: tv releases are not supported, skipping (would be '{tv_name}')")
            self.stats["skipped"] += 1
            return
        if release.type != ReleaseType.MOVIE:
            logger.info(f"{directory.name}: {release.type.value} release, skipping")
            self.stats["skipped"] += 1
            return

        try:
            new_name = format_release_name(release, self.movie_format)
        except ValueError as e:
            logger.error(f"Cannot format {directory.name}: {e}")
            self.stats["errors"] += 1
            return
        if not new_name:
            logger.warning(f"Format rendered an empty name for {directory.name}, skipping")
            self.stats["skipped"] += 1
            return

        logger.info(f"Classified: {release}")
        logger.info(f"rename {directory.name} => {new_name}")

        try:
            if self.rename_files:
                self.renamer.rename_video_files(directory, new_name)
        except OSError as e:
            logger.error(f"Cannot read directory {directory}: {e}")
            self.stats["errors"] += 1
            return

        if not self.rename_dirs:
            return

        result = self.renamer.rename_directory(directory, new_name)
        reason = self.renamer.last_skip_reason
        if reason == RenameSkipReason.ERROR:
            self.stats["errors"] += 1
        elif result is None or reason == RenameSkipReason.UNCHANGED:
            self.stats["skipped"] += 1
        else:
            self.stats["renamed"] += 1

    def _print_summary(self) -> None:
        """Print processing summary."""
        logger.info("=" * 60)
        logger.info("Renaming Summary")
        logger.info("=" * 60)
        logger.info(f"Releases processed: {self.stats['processed']}")
        logger.info(f"Releases renamed:   {self.stats['renamed']}")
        logger.info(f"Releases skipped:   {self.stats['skipped']}")
        logger.info(f"Errors:             {self.stats['errors']}")
        logger.info("=" * 60)


def print_formats() -> None:
    """Print the template fields filled in for an example release."""
    print(f"available formats for example releasename: {config.FORMATS_EXAMPLE}\n")
    for placeholder, value in format_examples(config.FORMATS_EXAMPLE):
        print(f"{placeholder}\t => \t {value}")
    print("\nEvery field of a parsed release can be used, see parsers/release_parser.py")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        description="Rename scene release directories into a normalized layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /media/movies                       # Rename release folders
  %(prog)s --dry-run /media/movies             # Preview the renames
  %(prog)s --files /media/movies               # Rename the video files too
  %(prog)s --movie-format "{title} [{year}]" /media/movies
  %(prog)s --formats                           # List template fields

Configuration:
  Set environment variables (RELEASE_MOVIE_FORMAT, RELEASE_LOG_DIR, ...)
  or edit config.py to change the defaults.
        """
    )

    parser.add_argument("directories", nargs="*", type=Path, help="Directories holding release folders")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview renames without touching the filesystem"
    )
    parser.add_argument(
        "--files",
        action="store_true",
        help="Also rename the video file inside each release folder"
    )
    parser.add_argument(
        "--no-rename",
        action="store_true",
        help="Do not rename the release folders themselves"
    )
    parser.add_argument("--movie-format", default=config.MOVIE_FORMAT, help="Name template for movie folders")
    parser.add_argument("--tv-format", default=config.TV_FORMAT, help="Name template for TV folders")
    parser.add_argument(
        "--formats",
        action="store_true",
        help="Print the available template fields for an example release"
    )
    parser.add_argument("--quiet", action="store_true", help="Only show warnings and errors on the console")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    if args.formats:
        print_formats()
        return 0

    if not args.directories:
        parser.print_usage()
        return 1

    if args.debug:
        set_debug_mode(True)
    elif args.quiet:
        set_quiet_mode(True)

    for issue in config.validate_config():
        logger.warning(issue)

    try:
        renamer = ReleaseRenamer(
            dry_run=args.dry_run,
            rename_dirs=not args.no_rename,
            rename_files=args.files,
            movie_format=args.movie_format,
            tv_format=args.tv_format,
        )
    except ValueError as e:
        logger.error(str(e))
        return 1

    if args.dry_run:
        logger.warning("NOTICE: running in test mode, no actual renaming is done")

    return renamer.run(args.directories)


if __name__ == "__main__":
    sys.exit(main())
