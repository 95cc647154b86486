"""Parser modules for extracting metadata from scene release names."""

from .release_parser import Release, ReleaseParser, ReleaseType, parse

__all__ = [
    "Release",
    "ReleaseParser",
    "ReleaseType",
    "parse",
]
