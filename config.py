"""
Configuration management for the scene release renamer.

Handles log locations, name templates and video file detection.
Every setting can be overridden through environment variables or a .env file.
"""

import os
from pathlib import Path
from string import Formatter
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging configuration
LOG_DIR = os.getenv("RELEASE_LOG_DIR", "/tmp/release_renamer")
LOG_PATH = os.path.join(LOG_DIR, "renamer.log")
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5
LOG_TO_FILE = os.getenv("RELEASE_LOG_TO_FILE", "true").lower() in ("true", "1", "yes")

# Name templates (str.format syntax, fields of parsers.release_parser.Release)
MOVIE_FORMAT = os.getenv("RELEASE_MOVIE_FORMAT", "{title} ({year})")
TV_FORMAT = os.getenv("RELEASE_TV_FORMAT", "{title} S{season:02d}E{episode:02d}")

# Release used to demonstrate the template fields (--formats)
FORMATS_EXAMPLE = "Release.Name.Uncut.2010.German.Dubbed.AC3.BluRay.1080p.x264-GroupName"

# Video file extensions, checked before falling back to the MIME type
VIDEO_EXTENSIONS = {
    ".mkv", ".mp4", ".avi", ".m4v", ".webm", ".flv", ".mov", ".wmv"
}

# Files whose path contains this marker are never renamed
SAMPLE_MARKER = "sample"

# Fields a name template may reference
TEMPLATE_FIELDS = {
    "input", "title", "type", "season", "season_end", "episode", "episode_end",
    "year", "resolution", "source", "source_group", "codec", "codec_group",
    "audio", "audio_group", "group", "region", "container", "website",
    "language", "password", "sbs", "size", "doku", "extended", "hardcoded",
    "subbed", "proper", "repack", "is_3d", "uncut", "widescreen",
}


def unknown_template_fields(template: str) -> List[str]:
    """
    Return the field names a template uses that a release does not have.

    Args:
        template: str.format style template

    Returns:
        Unknown field names, in order of appearance
    """
    unknown = []
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name is None:
            continue
        if field_name not in TEMPLATE_FIELDS and field_name not in unknown:
            unknown.append(field_name)
    return unknown


def validate_config() -> List[str]:
    """
    Validate configuration and return list of warnings/errors.
    Creates the log directory if it doesn't exist.

    Returns:
        List of warning/error messages
    """
    issues = []

    for name, template in [("Movie", MOVIE_FORMAT), ("TV", TV_FORMAT)]:
        try:
            unknown = unknown_template_fields(template)
        except ValueError as e:
            issues.append(f"Invalid {name} format '{template}': {e}")
            continue
        if unknown:
            issues.append(f"{name} format '{template}' uses unknown fields: {', '.join(unknown)}")

    # Check and create log directory
    if LOG_TO_FILE:
        log_dir_path = Path(LOG_DIR)
        if not log_dir_path.exists():
            try:
                log_dir_path.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                issues.append(f"Cannot create log directory: {LOG_DIR} (permission denied)")
            except OSError as e:
                issues.append(f"Error creating log directory: {LOG_DIR} ({e})")

    return issues
