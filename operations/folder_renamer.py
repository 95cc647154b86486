"""
Release folder and video file renaming with dry-run support.

Performs the actual renames or only logs them in dry-run mode.
"""

import mimetypes
from enum import Enum
from pathlib import Path
from typing import List, Optional

import config
from utils.logger import get_logger

logger = get_logger()


class RenameSkipReason(Enum):
    """Reasons why a rename operation was skipped."""
    NONE = "none"
    UNCHANGED = "unchanged"
    DESTINATION_EXISTS = "destination_exists"
    ERROR = "error"


class FolderRenamer:
    """Renames release folders and their video files, with dry-run support."""

    def __init__(self, dry_run: bool = False):
        """
        Initialize folder renamer.

        Args:
            dry_run: If True, only log the renames without touching the filesystem
        """
        self.dry_run = dry_run
        self.last_skip_reason = RenameSkipReason.NONE

        if dry_run:
            logger.info("DRY-RUN MODE: No files will be renamed")

    def rename_directory(self, directory: Path, new_name: str) -> Optional[Path]:
        """
        Rename a directory inside its parent.

        Args:
            directory: Directory to rename
            new_name: New base name

        Returns:
            New path, the unchanged path if already named so, or None on skip/failure
        """
        return self._rename(directory, directory.with_name(new_name))

    def rename_video_files(self, directory: Path, new_stem: str) -> List[Path]:
        """
        Rename the non-sample video files directly inside a directory.

        Each file keeps its extension and gets new_stem as name.

        Args:
            directory: Release directory
            new_stem: Name (without extension) for the video files

        Returns:
            New paths of the renamed files

        Raises:
            OSError: If the directory cannot be listed
        """
        renamed = []
        for path in sorted(directory.iterdir()):
            if not path.is_file() or not self.is_video_file(path):
                continue
            # Name only: a "sample" in the library path must not hide every file
            if config.SAMPLE_MARKER in path.name.lower():
                logger.debug(f"Skipping sample file: {path.name}")
                continue
            result = self._rename(path, path.with_name(new_stem + path.suffix))
            if result:
                renamed.append(result)
        return renamed

    @staticmethod
    def is_video_file(path: Path) -> bool:
        """
        Check whether a file looks like a video, by extension or MIME type.

        Args:
            path: File path

        Returns:
            True if the file is a video file
        """
        if path.suffix.lower() in config.VIDEO_EXTENSIONS:
            return True
        mime_type, _ = mimetypes.guess_type(path.name)
        return bool(mime_type and mime_type.startswith("video/"))

    def _rename(self, source: Path, destination: Path) -> Optional[Path]:
        """
        Rename source to destination, or simulate it.

        Args:
            source: Existing path
            destination: Target path

        Returns:
            Final path or None if the rename was skipped or failed
        """
        self.last_skip_reason = RenameSkipReason.NONE

        if source.name == destination.name:
            logger.debug(f"Already named correctly: {source.name}")
            self.last_skip_reason = RenameSkipReason.UNCHANGED
            return source

        if destination.exists():
            logger.warning(f"Destination already exists, skipping: {destination}")
            self.last_skip_reason = RenameSkipReason.DESTINATION_EXISTS
            return None

        if self.dry_run:
            logger.info(f"[DRY-RUN] Would rename: {source.name} -> {destination.name}")
            return destination

        try:
            source.rename(destination)
            logger.info(f"Renamed: {source.name} -> {destination.name}")
            return destination
        except OSError as e:
            logger.error(f"Failed to rename {source} to {destination}: {e}")
            self.last_skip_reason = RenameSkipReason.ERROR
            return None
